# app/schemas/reservation.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from app.schemas.common import CustomerSummary, VehicleSummary, reject_null


class ReservationFields(BaseModel):
    customer_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    reservation_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[int] = None
    status: Optional[str] = None          # free-form, normalized by status_rules
    total_amount: Optional[float] = None
    advance: Optional[float] = None
    notes: Optional[str] = None


class ReservationCreate(ReservationFields):
    customer_id: str
    vehicle_id: str
    reservation_date: date
    start_date: date
    end_date: date


class ReservationUpdate(ReservationFields):
    not_null = field_validator("customer_id", "vehicle_id", "reservation_date", "start_date", "end_date")(reject_null)


class ReservationOut(BaseModel):
    id: str
    reservation_number: str
    customer_id: str
    vehicle_id: str
    reservation_date: date
    start_date: date
    end_date: date
    duration: Optional[int]
    status: str
    total_amount: Optional[float]
    advance: Optional[float]
    notes: Optional[str]
    customer: Optional[CustomerSummary] = None
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
