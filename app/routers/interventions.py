# app/routers/interventions.py
"""Maintenance interventions — CRUD."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.intervention import Intervention
from app.models.vehicle import Vehicle
from app.schemas.intervention import InterventionCreate, InterventionOut, InterventionUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404, require_exists
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("interventions", field_name="documents")

RELATED = (joinedload(Intervention.vehicle),)


def _fetch(db: Session, intervention_id: str) -> Intervention:
    return get_or_404(db, Intervention, intervention_id, "Intervention", options=RELATED)


@router.get("/interventions", response_model=list[InterventionOut], summary="List interventions")
def list_interventions(vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(Intervention).options(*RELATED)
    if vehicle_id:
        q = q.filter(Intervention.vehicle_id == vehicle_id)
    return q.order_by(Intervention.date.desc()).all()


@router.get("/interventions/{intervention_id}", response_model=InterventionOut, summary="Get an intervention")
def get_intervention(intervention_id: str, db: Session = Depends(get_db)):
    return _fetch(db, intervention_id)


@router.post("/interventions", response_model=InterventionOut, status_code=201,
             summary="Record an intervention")
def create_intervention(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, InterventionCreate)
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")
    intervention = Intervention(**body.model_dump(exclude_none=True))
    intervention.documents = intake.save_all(documents, upload_dir)
    db.add(intervention)
    commit_or_raise(db, "creating intervention", body.model_dump(), uploaded=intervention.documents)
    return _fetch(db, intervention.id)


@router.put("/interventions/{intervention_id}", response_model=InterventionOut,
            summary="Update an intervention")
def update_intervention(
    intervention_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    intervention = get_or_404(db, Intervention, intervention_id, "Intervention")
    changes = parse_form_json(data, InterventionUpdate).model_dump(exclude_unset=True)
    if changes.get("vehicle_id"):
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    apply_changes(intervention, changes)
    uploaded = intake.save_all(documents, upload_dir)
    intervention.documents = apply_document_update(
        intervention.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating intervention", changes, uploaded=uploaded)
    return _fetch(db, intervention_id)


@router.delete("/interventions/{intervention_id}", summary="Delete an intervention")
def delete_intervention(intervention_id: str, db: Session = Depends(get_db)):
    intervention = get_or_404(db, Intervention, intervention_id, "Intervention")
    db.delete(intervention)
    commit_or_raise(db, "deleting intervention", {"id": intervention_id})
    return {"status": "removed", "id": intervention_id}
