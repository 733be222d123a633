# app/schemas/vehicle.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import DocumentOut, reject_null

FuelType = Literal["diesel", "essence", "electrique", "hybride"]
FuelLevel = Literal["reserve", "1/4", "1/2", "3/4", "plein"]


class VehicleEquipment(BaseModel):
    pneu_de_secours: bool = False
    poste_radio: bool = False
    cric_manivelle: bool = False
    allume_cigare: bool = False
    jeu_de_4_tapis: bool = False
    vet_de_securite: bool = False


class VehicleFields(BaseModel):
    chassis_number: Optional[str] = None
    license_plate: Optional[str] = None
    image_url: Optional[str] = None
    temporary_plate: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    circulation_date: Optional[date] = None
    fuel_type: Optional[FuelType] = None
    fuel_level: Optional[FuelLevel] = None
    mileage: Optional[int] = None
    color: Optional[str] = None
    color_code: Optional[str] = None
    rental_price: Optional[float] = None
    nombre_de_places: Optional[int] = None
    nombre_de_vitesses: Optional[int] = None
    transmission: Optional[Literal["Manuelle", "Automatique"]] = None
    observation: Optional[str] = None
    equipment: Optional[VehicleEquipment] = None
    autorisation_date: Optional[date] = None
    autorisation_validity: Optional[date] = None
    carte_grise_date: Optional[date] = None
    carte_grise_validity: Optional[date] = None
    statut: Optional[Literal["En parc", "En circulation"]] = None


class VehicleCreate(VehicleFields):
    chassis_number: str
    license_plate: str
    brand: str
    model: str


class VehicleUpdate(VehicleFields):
    not_null = field_validator(
        "chassis_number", "license_plate", "brand", "model", "fuel_type",
        "fuel_level", "mileage", "rental_price", "statut",
    )(reject_null)


class VehicleOut(BaseModel):
    id: str
    chassis_number: str
    license_plate: str
    image_url: Optional[str]
    temporary_plate: Optional[str]
    brand: str
    model: str
    circulation_date: Optional[date]
    fuel_type: str
    fuel_level: str
    mileage: int
    color: Optional[str]
    color_code: Optional[str]
    rental_price: float
    nombre_de_places: Optional[int]
    nombre_de_vitesses: Optional[int]
    transmission: Optional[str]
    observation: Optional[str]
    equipment: Optional[VehicleEquipment]
    documents: list[DocumentOut] = []
    autorisation_date: Optional[date]
    autorisation_validity: Optional[date]
    carte_grise_date: Optional[date]
    carte_grise_validity: Optional[date]
    statut: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
