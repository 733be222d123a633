# app/schemas/facture.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import ContractSummary, CustomerSummary, reject_null


class FactureFields(BaseModel):
    invoice_number: Optional[str] = None     # only honoured on update
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    client_id: Optional[str] = None
    contract_id: Optional[str] = None
    location: Optional[str] = None
    type: Optional[Literal["Professionel", "Particulier"]] = None
    montant_ht: Optional[float] = None
    tva_amount: Optional[float] = None
    tva_percentage: Optional[float] = None
    total_ttc: Optional[float] = None
    payment_type: Optional[str] = None
    amount_paid: Optional[float] = None
    status: Optional[Literal["Pending", "Paid", "Cancelled"]] = None


class FactureCreate(FactureFields):
    invoice_date: date
    client_id: str


class FactureUpdate(FactureFields):
    not_null = field_validator("invoice_number", "invoice_date", "client_id", "status")(reject_null)


class FactureOut(BaseModel):
    id: str
    invoice_number: str
    invoice_date: date
    due_date: Optional[date]
    client_id: str
    contract_id: Optional[str]
    location: Optional[str]
    type: Optional[str]
    montant_ht: Optional[float]
    tva_amount: Optional[float]
    tva_percentage: Optional[float]
    total_ttc: Optional[float]
    payment_type: Optional[str]
    amount_paid: Optional[float]
    status: str
    client: Optional[CustomerSummary] = None
    contract: Optional[ContractSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
