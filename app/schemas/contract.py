# app/schemas/contract.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import CustomerSummary, DocumentOut, VehicleSummary, reject_null
from app.schemas.vehicle import FuelLevel, VehicleEquipment


class SecondDriver(BaseModel):
    nom: Optional[str] = None
    nationalite: Optional[str] = None
    date_naissance: Optional[str] = None
    adresse: Optional[str] = None
    telephone: Optional[str] = None
    adresse_etranger: Optional[str] = None
    permis_numero: Optional[str] = None
    permis_delivre_le: Optional[str] = None
    passeport_cin: Optional[str] = None
    passeport_delivre_le: Optional[str] = None


class ContractExtension(BaseModel):
    duration: Optional[int] = None
    price_per_day: Optional[float] = None


class ContractFields(BaseModel):
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    contract_date: Optional[date] = None
    departure_date: Optional[date] = None
    departure_time: Optional[str] = None
    return_date: Optional[date] = None
    return_time: Optional[str] = None
    contract_location: Optional[str] = None
    duration: Optional[int] = None
    pickup_location: Optional[str] = None
    return_location: Optional[str] = None
    matricule: Optional[str] = None
    price_per_day: Optional[float] = None
    starting_km: Optional[int] = None
    discount: Optional[float] = None
    fuel_level: Optional[FuelLevel] = None
    total: Optional[float] = None
    guarantee: Optional[float] = None
    payment_type: Optional[Literal["espece", "cheque", "carte_bancaire", "virement"]] = None
    advance: Optional[float] = None
    remaining: Optional[float] = None
    status: Optional[Literal["en_cours", "retournee"]] = None
    second_driver: Optional[SecondDriver] = None
    equipment: Optional[VehicleEquipment] = None
    extension: Optional[ContractExtension] = None


class ContractCreate(ContractFields):
    client_id: str
    vehicle_id: str
    contract_date: date
    departure_date: date
    return_date: date


class ContractUpdate(ContractFields):
    not_null = field_validator(
        "client_id", "vehicle_id", "contract_date", "departure_date", "return_date",
        "matricule", "status",
    )(reject_null)


class ContractOut(BaseModel):
    id: str
    contract_number: str
    client_id: str
    vehicle_id: str
    contract_date: date
    departure_date: date
    departure_time: Optional[str]
    return_date: date
    return_time: Optional[str]
    contract_location: Optional[str]
    duration: Optional[int]
    pickup_location: Optional[str]
    return_location: Optional[str]
    matricule: str
    price_per_day: Optional[float]
    starting_km: Optional[int]
    discount: Optional[float]
    fuel_level: Optional[str]
    total: Optional[float]
    guarantee: Optional[float]
    payment_type: Optional[str]
    advance: Optional[float]
    remaining: Optional[float]
    status: str
    second_driver: Optional[SecondDriver]
    equipment: Optional[VehicleEquipment]
    extension: Optional[ContractExtension]
    pieces_jointes: list[DocumentOut] = []
    client: Optional[CustomerSummary] = None
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
