# app/schemas/accident.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional

from app.schemas.common import ContractSummary, CustomerSummary, DocumentOut, VehicleSummary, reject_null

AccidentEtat = Literal["expertise", "en_cours", "repare"]


class AccidentFields(BaseModel):
    contract_id: Optional[str] = None
    date_accident: Optional[date] = None
    heure_accident: Optional[str] = None
    lieu_accident: Optional[str] = None
    description: Optional[str] = None
    etat: Optional[AccidentEtat] = None
    date_entree_garage: Optional[date] = None
    date_reparation: Optional[date] = None
    montant_reparation: Optional[float] = None
    frais_client: Optional[float] = None
    indemnite_assurance: Optional[float] = None
    avance: Optional[float] = None


class AccidentCreate(AccidentFields):
    contract_id: str
    date_accident: date


class AccidentUpdate(AccidentFields):
    not_null = field_validator("contract_id", "date_accident", "etat")(reject_null)


class AccidentOut(BaseModel):
    id: str
    contract_id: str
    numero_contrat: str
    date_sortie: Optional[date]
    client_id: str
    client_nom: str
    date_retour: Optional[date]
    matricule: str
    vehicle_id: str
    date_accident: date
    heure_accident: Optional[str]
    lieu_accident: Optional[str]
    description: Optional[str]
    etat: str
    date_entree_garage: Optional[date]
    date_reparation: Optional[date]
    montant_reparation: Optional[float]
    frais_client: Optional[float]
    indemnite_assurance: Optional[float]
    avance: Optional[float]
    documents: list[DocumentOut] = []
    contract: Optional[ContractSummary] = None
    client: Optional[CustomerSummary] = None
    vehicle: Optional[VehicleSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
