# app/schemas/vehicle_inspection.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from app.schemas.common import DocumentOut, VehicleSummary, reject_null


class VehicleInspectionFields(BaseModel):
    vehicle_id: Optional[str] = None
    inspection_date: Optional[date] = None
    inspector_name: Optional[str] = None
    results: Optional[str] = None
    next_inspection_date: Optional[date] = None
    center: Optional[str] = None
    control_id: Optional[str] = None
    authorization_number: Optional[str] = None
    duration: Optional[int] = None
    end_date: Optional[date] = None
    price: Optional[float] = None
    center_contact: Optional[str] = None
    observation: Optional[str] = None


class VehicleInspectionCreate(VehicleInspectionFields):
    vehicle_id: str
    inspection_date: date
    inspector_name: str
    results: str


class VehicleInspectionUpdate(VehicleInspectionFields):
    not_null = field_validator("inspection_date", "inspector_name", "results")(reject_null)


class VehicleInspectionOut(BaseModel):
    id: str
    vehicle_id: Optional[str]
    inspection_date: date
    inspector_name: str
    results: str
    next_inspection_date: Optional[date]
    center: Optional[str]
    control_id: Optional[str]
    authorization_number: Optional[str]
    duration: Optional[int]
    end_date: Optional[date]
    price: Optional[float]
    center_contact: Optional[str]
    observation: Optional[str]
    documents: list[DocumentOut] = []
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
