# app/schemas/customer.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import DocumentOut, reject_null

UNIQUE_IDENTITY_FIELDS = ("cin", "numero_permis", "numero_passeport", "email")


class CustomerFields(BaseModel):
    civilite: Optional[str] = None
    nationalite: Optional[str] = None
    type: Optional[Literal["Particulier", "Professionel"]] = None
    liste_noire: Optional[bool] = None
    nom_fr: Optional[str] = None
    nom_ar: Optional[str] = None
    prenom_fr: Optional[str] = None
    prenom_ar: Optional[str] = None
    date_naissance: Optional[date] = None
    age: Optional[str] = None
    lieu_naissance: Optional[str] = None
    ice: Optional[str] = None
    cin: Optional[str] = None
    cin_delivre_le: Optional[date] = None
    cin_delivre_a: Optional[str] = None
    cin_validite: Optional[date] = None
    numero_permis: Optional[str] = None
    permis_delivre_le: Optional[date] = None
    permis_delivre_a: Optional[str] = None
    permis_validite: Optional[date] = None
    numero_passeport: Optional[str] = None
    passport_delivre_le: Optional[date] = None
    passport_delivre_a: Optional[str] = None
    passport_validite: Optional[date] = None
    email: Optional[str] = None
    adresse_fr: Optional[str] = None
    ville: Optional[str] = None
    adresse_ar: Optional[str] = None
    code_postal: Optional[str] = None
    telephone: Optional[str] = None
    telephone2: Optional[str] = None
    fix: Optional[str] = None
    fax: Optional[str] = None
    remarque: Optional[str] = None
    total_rentals: Optional[int] = None
    status: Optional[Literal["Actif", "Inactif"]] = None

    @field_validator(*UNIQUE_IDENTITY_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        # Unique columns: "" would collide between customers, NULL does not
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class CustomerCreate(CustomerFields):
    nom_fr: str
    prenom_fr: str


class CustomerUpdate(CustomerFields):
    not_null = field_validator(
        "type", "liste_noire", "nom_fr", "prenom_fr", "total_rentals", "status",
    )(reject_null)


class CustomerOut(BaseModel):
    id: str
    civilite: Optional[str]
    nationalite: Optional[str]
    type: str
    liste_noire: bool
    nom_fr: str
    nom_ar: Optional[str]
    prenom_fr: str
    prenom_ar: Optional[str]
    date_naissance: Optional[date]
    age: Optional[str]
    lieu_naissance: Optional[str]
    ice: Optional[str]
    cin: Optional[str]
    cin_delivre_le: Optional[date]
    cin_delivre_a: Optional[str]
    cin_validite: Optional[date]
    numero_permis: Optional[str]
    permis_delivre_le: Optional[date]
    permis_delivre_a: Optional[str]
    permis_validite: Optional[date]
    numero_passeport: Optional[str]
    passport_delivre_le: Optional[date]
    passport_delivre_a: Optional[str]
    passport_validite: Optional[date]
    email: Optional[str]
    adresse_fr: Optional[str]
    ville: Optional[str]
    adresse_ar: Optional[str]
    code_postal: Optional[str]
    telephone: Optional[str]
    telephone2: Optional[str]
    fix: Optional[str]
    fax: Optional[str]
    remarque: Optional[str]
    documents: list[DocumentOut] = []
    total_rentals: int
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
