# app/schemas/common.py
"""Shared response pieces: document records and the compact related-entity views."""

from pydantic import BaseModel
from datetime import date
from typing import Optional


class DocumentOut(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None


class CustomerSummary(BaseModel):
    id: str
    nom_fr: str
    prenom_fr: str
    cin: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None

    class Config:
        from_attributes = True


class VehicleSummary(BaseModel):
    id: str
    license_plate: str
    brand: Optional[str] = None
    model: Optional[str] = None
    statut: Optional[str] = None

    class Config:
        from_attributes = True


class ContractSummary(BaseModel):
    id: str
    contract_number: str
    departure_date: Optional[date] = None
    return_date: Optional[date] = None
    matricule: Optional[str] = None

    class Config:
        from_attributes = True


class FactureSummary(BaseModel):
    id: str
    invoice_number: str
    total_ttc: Optional[float] = None

    class Config:
        from_attributes = True


class AccidentSummary(BaseModel):
    id: str
    numero_contrat: str
    date_accident: Optional[date] = None

    class Config:
        from_attributes = True


def reject_null(value):
    """Update validator for NOT NULL columns: omit the field, don't send null."""
    if value is None:
        raise ValueError("may not be null")
    return value
