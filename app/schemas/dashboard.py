# app/schemas/dashboard.py
from pydantic import BaseModel
from typing import Optional


class FleetAlertOut(BaseModel):
    alert_type: str
    vehicle_id: str
    license_plate: Optional[str]
    message: str
    days_remaining: Optional[int] = None
    next_threshold: Optional[int] = None

    class Config:
        from_attributes = True


class MonthlyRollupOut(BaseModel):
    year: int
    recettes: list[float]
    depenses: list[float]
    total_recettes: float
    total_depenses: float


class DashboardSummaryOut(BaseModel):
    vehicles: int
    vehicles_en_circulation: int
    active_customers: int
    reservations_today: int
    revenue_this_month: float
    expenses_this_month: float
    alerts: int
