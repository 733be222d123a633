# app/schemas/infraction.py
from pydantic import BaseModel, field_validator
from datetime import date as date_type, datetime
from typing import Literal, Optional

from app.schemas.common import CustomerSummary, DocumentOut, VehicleSummary, reject_null


class InfractionFields(BaseModel):
    vehicle_id: Optional[str] = None
    customer_id: Optional[str] = None
    infraction_date: Optional[date_type] = None
    time_infraction: Optional[str] = None
    location: Optional[str] = None
    date: Optional[date_type] = None
    permis: Optional[str] = None
    cin: Optional[str] = None
    passeport: Optional[str] = None
    type: Optional[Literal["professional", "particular"]] = None
    societe: Optional[str] = None
    telephone: Optional[str] = None
    telephone2: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    status: Optional[Literal["Pending", "Paid", "Disputed"]] = None


class InfractionCreate(InfractionFields):
    vehicle_id: str
    customer_id: str
    infraction_date: date_type
    location: str


class InfractionUpdate(InfractionFields):
    not_null = field_validator("customer_id", "infraction_date", "location", "status")(reject_null)


class InfractionOut(BaseModel):
    id: str
    infraction_number: str
    vehicle_id: Optional[str]
    customer_id: str
    infraction_date: date_type
    time_infraction: Optional[str]
    location: str
    date: Optional[date_type]
    permis: Optional[str]
    cin: Optional[str]
    passeport: Optional[str]
    type: Optional[str]
    societe: Optional[str]
    telephone: Optional[str]
    telephone2: Optional[str]
    description: Optional[str]
    amount: Optional[float]
    status: str
    documents: list[DocumentOut] = []
    vehicle: Optional[VehicleSummary] = None
    customer: Optional[CustomerSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
