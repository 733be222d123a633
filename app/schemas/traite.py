# app/schemas/traite.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional

from app.schemas.common import DocumentOut, VehicleSummary, reject_null


class TraiteFields(BaseModel):
    vehicle_id: Optional[str] = None
    mois: Optional[int] = Field(None, ge=1, le=12)
    annee: Optional[int] = None
    montant: Optional[float] = None
    date_paiement: Optional[date] = None
    reference: Optional[str] = None
    notes: Optional[str] = None


class TraiteCreate(TraiteFields):
    vehicle_id: str
    mois: int = Field(ge=1, le=12)
    annee: int
    montant: float


class TraiteUpdate(TraiteFields):
    not_null = field_validator("vehicle_id", "mois", "annee", "montant")(reject_null)


class TraiteOut(BaseModel):
    id: str
    vehicle_id: Optional[str]
    mois: int
    annee: int
    montant: float
    date_paiement: Optional[date]
    reference: Optional[str]
    notes: Optional[str]
    documents: list[DocumentOut] = []
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
