# app/schemas/charge.py
# Accepts both the stored names (name / amount / description) and the
# front-office names (motif / montant / observation).
from pydantic import AliasChoices, BaseModel, Field, field_validator
from datetime import date as date_type, datetime
from typing import Optional

from app.schemas.common import DocumentOut, reject_null


class ChargeFields(BaseModel):
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "motif"))
    amount: Optional[float] = Field(None, validation_alias=AliasChoices("amount", "montant"))
    description: Optional[str] = Field(None, validation_alias=AliasChoices("description", "observation"))
    date: Optional[date_type] = None


class ChargeCreate(ChargeFields):
    name: str = Field(validation_alias=AliasChoices("name", "motif"))
    amount: float = Field(validation_alias=AliasChoices("amount", "montant"))


class ChargeUpdate(ChargeFields):
    not_null = field_validator("name", "amount")(reject_null)


class ChargeOut(BaseModel):
    id: str
    name: str
    amount: float
    description: Optional[str]
    date: Optional[date_type]
    motif: str
    montant: float
    observation: Optional[str]
    attachments: list[DocumentOut] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
