# app/routers/infractions.py
"""Traffic infractions — CRUD + single-document removal (by file name)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.customer import Customer
from app.models.infraction import Infraction
from app.models.vehicle import Vehicle
from app.schemas.infraction import InfractionCreate, InfractionOut, InfractionUpdate
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, delete_stored_files, get_upload_dir
from app.services.numbering import next_infraction_number
from app.utils.forms import parse_form_json
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
intake = FileIntake("infractions", field_name="attachments", max_files=10)

RELATED = (joinedload(Infraction.vehicle), joinedload(Infraction.customer))


def _fetch(db: Session, infraction_id: str) -> Infraction:
    return get_or_404(db, Infraction, infraction_id, "Infraction", options=RELATED)


@router.get("/infractions", response_model=list[InfractionOut], summary="List infractions")
def list_infractions(status: Optional[str] = None, vehicle_id: Optional[str] = None,
                     customer_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(Infraction).options(*RELATED)
    if status:
        q = q.filter(Infraction.status == status)
    if vehicle_id:
        q = q.filter(Infraction.vehicle_id == vehicle_id)
    if customer_id:
        q = q.filter(Infraction.customer_id == customer_id)
    return q.order_by(Infraction.created_at.desc()).all()


@router.get("/infractions/{infraction_id}", response_model=InfractionOut, summary="Get an infraction")
def get_infraction(infraction_id: str, db: Session = Depends(get_db)):
    return _fetch(db, infraction_id)


@router.post("/infractions", response_model=InfractionOut, status_code=201, summary="Record an infraction")
def create_infraction(
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, InfractionCreate)
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")
    require_exists(db, Customer, body.customer_id, "Customer")

    infraction = Infraction(**body.model_dump(exclude_none=True))
    infraction.infraction_number = next_infraction_number(db)
    infraction.documents = intake.save_all(attachments, upload_dir)
    db.add(infraction)
    commit_or_raise(db, "creating infraction", body.model_dump(), uploaded=infraction.documents)
    logger.info(f"[INFRACTION] Recorded {infraction.infraction_number}")
    return _fetch(db, infraction.id)


@router.put("/infractions/{infraction_id}", response_model=InfractionOut, summary="Update an infraction")
def update_infraction(
    infraction_id: str,
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    infraction = get_or_404(db, Infraction, infraction_id, "Infraction")
    changes = parse_form_json(data, InfractionUpdate).model_dump(exclude_unset=True)
    if "vehicle_id" in changes:
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    if "customer_id" in changes:
        require_exists(db, Customer, changes["customer_id"], "Customer")
    apply_changes(infraction, changes)
    uploaded = intake.save_all(attachments, upload_dir)
    infraction.documents = apply_document_update(
        infraction.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating infraction", changes, uploaded=uploaded)
    return _fetch(db, infraction_id)


@router.delete("/infractions/{infraction_id}", summary="Delete an infraction and its files")
def delete_infraction(infraction_id: str, db: Session = Depends(get_db)):
    infraction = get_or_404(db, Infraction, infraction_id, "Infraction")
    files = list(infraction.documents or [])
    db.delete(infraction)
    commit_or_raise(db, "deleting infraction", {"id": infraction_id})
    delete_stored_files(files)
    return {"status": "removed", "id": infraction_id}


@router.delete("/infractions/{infraction_id}/documents", response_model=InfractionOut,
               summary="Remove one attached document (by name)")
def delete_infraction_document(infraction_id: str, name: str, db: Session = Depends(get_db)):
    infraction = get_or_404(db, Infraction, infraction_id, "Infraction")
    remove_entity_document(db, infraction, "documents", name, key="name")
    return _fetch(db, infraction_id)
