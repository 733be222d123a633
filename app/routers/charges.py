# app/routers/charges.py
"""Fleet expenses (charges) — CRUD. Accepts motif / montant / observation as field aliases."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.charge import Charge
from app.schemas.charge import ChargeCreate, ChargeOut, ChargeUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("charges", field_name="attachments")


@router.get("/charges", response_model=list[ChargeOut], summary="List charges")
def list_charges(db: Session = Depends(get_db)):
    return db.query(Charge).order_by(Charge.created_at.desc()).all()


@router.get("/charges/{charge_id}", response_model=ChargeOut, summary="Get a charge")
def get_charge(charge_id: str, db: Session = Depends(get_db)):
    return get_or_404(db, Charge, charge_id, "Charge")


@router.post("/charges", response_model=ChargeOut, status_code=201, summary="Record a charge")
def create_charge(
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, ChargeCreate)
    charge = Charge(**body.model_dump(exclude_none=True))
    charge.attachments = intake.save_all(attachments, upload_dir)
    db.add(charge)
    commit_or_raise(db, "creating charge", body.model_dump(), uploaded=charge.attachments)
    return charge


@router.put("/charges/{charge_id}", response_model=ChargeOut, summary="Update a charge")
def update_charge(
    charge_id: str,
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    charge = get_or_404(db, Charge, charge_id, "Charge")
    changes = parse_form_json(data, ChargeUpdate).model_dump(exclude_unset=True)
    apply_changes(charge, changes)
    uploaded = intake.save_all(attachments, upload_dir)
    charge.attachments = apply_document_update(
        charge.attachments, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating charge", changes, uploaded=uploaded)
    return charge


@router.delete("/charges/{charge_id}", summary="Delete a charge")
def delete_charge(charge_id: str, db: Session = Depends(get_db)):
    charge = get_or_404(db, Charge, charge_id, "Charge")
    db.delete(charge)
    commit_or_raise(db, "deleting charge", {"id": charge_id})
    return {"status": "removed", "id": charge_id}
