# app/schemas/client_payment.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import (
    AccidentSummary, ContractSummary, CustomerSummary, DocumentOut, FactureSummary,
    reject_null,
)

PaymentFor = Literal["contract", "facture", "accident"]
PaymentType = Literal["espèce", "chèque", "carte bancaire", "virement"]


class ClientPaymentFields(BaseModel):
    payment_number: Optional[str] = None     # only honoured on update
    payment_date: Optional[date] = None
    payment_for: Optional[PaymentFor] = None
    client_id: Optional[str] = None
    contract_id: Optional[str] = None
    facture_id: Optional[str] = None
    accident_id: Optional[str] = None
    reference_number: Optional[str] = None
    remaining_amount: Optional[float] = None
    payment_type: Optional[PaymentType] = None
    amount_paid: Optional[float] = None


class ClientPaymentCreate(ClientPaymentFields):
    payment_date: date
    payment_for: PaymentFor
    client_id: str


class ClientPaymentUpdate(ClientPaymentFields):
    not_null = field_validator("payment_number", "payment_date", "payment_for", "client_id")(reject_null)


class ClientPaymentOut(BaseModel):
    id: str
    payment_number: str
    payment_date: date
    payment_for: str
    client_id: str
    contract_id: Optional[str]
    facture_id: Optional[str]
    accident_id: Optional[str]
    reference_number: Optional[str]
    remaining_amount: Optional[float]
    payment_type: Optional[str]
    amount_paid: Optional[float]
    documents: list[DocumentOut] = []
    client: Optional[CustomerSummary] = None
    contract: Optional[ContractSummary] = None
    facture: Optional[FactureSummary] = None
    accident: Optional[AccidentSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
