# app/schemas/intervention.py
from pydantic import BaseModel, field_validator
from datetime import date as date_type, datetime
from typing import Optional

from app.schemas.common import DocumentOut, VehicleSummary, reject_null


class InterventionFields(BaseModel):
    vehicle_id: Optional[str] = None
    description: Optional[str] = None
    date: Optional[date_type] = None
    cost: Optional[float] = None
    status: Optional[str] = None
    type: Optional[str] = None
    observation: Optional[str] = None
    current_mileage: Optional[int] = None
    next_mileage: Optional[int] = None


class InterventionCreate(InterventionFields):
    vehicle_id: str
    description: str
    date: date_type
    cost: float
    type: str


class InterventionUpdate(InterventionFields):
    not_null = field_validator("description", "date", "cost", "status", "type")(reject_null)


class InterventionOut(BaseModel):
    id: str
    vehicle_id: Optional[str]
    description: str
    date: date_type
    cost: float
    status: str
    type: str
    observation: Optional[str]
    current_mileage: Optional[int]
    next_mileage: Optional[int]
    documents: list[DocumentOut] = []
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
