# app/schemas/vehicle_insurance.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from app.schemas.common import CustomerSummary, DocumentOut, VehicleSummary, reject_null


class VehicleInsuranceFields(BaseModel):
    vehicle_id: Optional[str] = None
    customer_id: Optional[str] = None
    company: Optional[str] = None
    policy_number: Optional[str] = None
    operation_date: Optional[date] = None
    start_date: Optional[date] = None
    duration: Optional[int] = None
    end_date: Optional[date] = None
    price: Optional[float] = None
    contact_info: Optional[str] = None
    observation: Optional[str] = None


class VehicleInsuranceCreate(VehicleInsuranceFields):
    vehicle_id: str
    company: str
    policy_number: str
    operation_date: date
    start_date: date
    duration: int
    end_date: date
    price: float


class VehicleInsuranceUpdate(VehicleInsuranceFields):
    not_null = field_validator(
        "company", "policy_number", "operation_date", "start_date", "duration",
        "end_date", "price",
    )(reject_null)


class VehicleInsuranceOut(BaseModel):
    id: str
    vehicle_id: Optional[str]
    customer_id: Optional[str]
    company: str
    policy_number: str
    operation_date: date
    start_date: date
    duration: int
    end_date: date
    price: float
    contact_info: Optional[str]
    observation: Optional[str]
    attachments: list[DocumentOut] = []
    vehicle: Optional[VehicleSummary] = None
    customer: Optional[CustomerSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
