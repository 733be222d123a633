# app/routers/accidents.py
"""
Accidents — CRUD + single-document removal.
On create, contract number, client, vehicle, plate and dates are copied
from the referenced contract.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.accident import Accident
from app.models.contract import Contract
from app.schemas.accident import AccidentCreate, AccidentOut, AccidentUpdate
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, delete_stored_files, get_upload_dir
from app.utils.forms import parse_form_json
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
intake = FileIntake("accidents", field_name="attachments")

RELATED = (joinedload(Accident.contract), joinedload(Accident.client), joinedload(Accident.vehicle))


def _fetch(db: Session, accident_id: str) -> Accident:
    return get_or_404(db, Accident, accident_id, "Accident", options=RELATED)


def _from_contract(db: Session, contract_id: str) -> dict:
    """Fields denormalized from the contract; 400 if it or its client/vehicle is gone."""
    contract = db.query(Contract).options(
        joinedload(Contract.client), joinedload(Contract.vehicle)
    ).filter(Contract.id == contract_id).first()
    if not contract:
        raise HTTPException(status_code=400, detail="Contract not found")
    if not contract.client or not contract.vehicle:
        raise HTTPException(status_code=400, detail="Client or vehicle not found for this contract")
    return {
        "numero_contrat": contract.contract_number,
        "date_sortie": contract.departure_date,
        "date_retour": contract.return_date,
        "client_id": contract.client.id,
        "client_nom": contract.client.full_name,
        "matricule": contract.matricule or contract.vehicle.license_plate,
        "vehicle_id": contract.vehicle.id,
    }


@router.get("/accidents", response_model=list[AccidentOut], summary="List accidents")
def list_accidents(etat: Optional[str] = None, vehicle_id: Optional[str] = None,
                   db: Session = Depends(get_db)):
    q = db.query(Accident).options(*RELATED)
    if etat:
        q = q.filter(Accident.etat == etat)
    if vehicle_id:
        q = q.filter(Accident.vehicle_id == vehicle_id)
    return q.order_by(Accident.created_at.desc()).all()


@router.get("/accidents/{accident_id}", response_model=AccidentOut, summary="Get an accident")
def get_accident(accident_id: str, db: Session = Depends(get_db)):
    return _fetch(db, accident_id)


@router.post("/accidents", response_model=AccidentOut, status_code=201, summary="Declare an accident")
def create_accident(
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, AccidentCreate)
    fields = body.model_dump(exclude_none=True)
    fields.update(_from_contract(db, body.contract_id))

    accident = Accident(**fields)
    accident.documents = intake.save_all(attachments, upload_dir)
    db.add(accident)
    commit_or_raise(db, "creating accident", body.model_dump(), uploaded=accident.documents)
    logger.info(f"[ACCIDENT] Declared on contract {accident.numero_contrat}")
    return _fetch(db, accident.id)


@router.put("/accidents/{accident_id}", response_model=AccidentOut, summary="Update an accident")
def update_accident(
    accident_id: str,
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    accident = get_or_404(db, Accident, accident_id, "Accident")
    changes = parse_form_json(data, AccidentUpdate).model_dump(exclude_unset=True)
    if changes.get("contract_id") and changes["contract_id"] != accident.contract_id:
        changes.update(_from_contract(db, changes["contract_id"]))
    apply_changes(accident, changes)
    uploaded = intake.save_all(attachments, upload_dir)
    accident.documents = apply_document_update(
        accident.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating accident", changes, uploaded=uploaded)
    return _fetch(db, accident_id)


@router.delete("/accidents/{accident_id}", summary="Delete an accident and its files")
def delete_accident(accident_id: str, db: Session = Depends(get_db)):
    accident = get_or_404(db, Accident, accident_id, "Accident")
    files = list(accident.documents or [])
    db.delete(accident)
    commit_or_raise(db, "deleting accident", {"id": accident_id})
    delete_stored_files(files)
    return {"status": "removed", "id": accident_id}


@router.delete("/accidents/{accident_id}/documents", response_model=AccidentOut,
               summary="Remove one attached document (by url)")
def delete_accident_document(accident_id: str, url: str, db: Session = Depends(get_db)):
    accident = get_or_404(db, Accident, accident_id, "Accident")
    remove_entity_document(db, accident, "documents", url, key="url")
    return _fetch(db, accident_id)
