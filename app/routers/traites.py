# app/routers/traites.py
"""Vehicle financing installments (traites) — CRUD + single-document removal (by file name)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.traite import Traite
from app.models.vehicle import Vehicle
from app.schemas.traite import TraiteCreate, TraiteOut, TraiteUpdate
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("traites", allowed_extensions=["jpg", "jpeg", "png", "pdf"],
                    field_name="documents", max_files=10)

RELATED = (joinedload(Traite.vehicle),)


def _fetch(db: Session, traite_id: str) -> Traite:
    return get_or_404(db, Traite, traite_id, "Traite", options=RELATED)


@router.get("/traites", response_model=list[TraiteOut], summary="List traites")
def list_traites(vehicle_id: Optional[str] = None, annee: Optional[int] = None,
                 db: Session = Depends(get_db)):
    q = db.query(Traite).options(*RELATED)
    if vehicle_id:
        q = q.filter(Traite.vehicle_id == vehicle_id)
    if annee:
        q = q.filter(Traite.annee == annee)
    return q.order_by(Traite.annee.desc(), Traite.mois.desc()).all()


@router.get("/traites/{traite_id}", response_model=TraiteOut, summary="Get a traite")
def get_traite(traite_id: str, db: Session = Depends(get_db)):
    return _fetch(db, traite_id)


@router.post("/traites", response_model=TraiteOut, status_code=201, summary="Record a traite")
def create_traite(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, TraiteCreate)
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")
    traite = Traite(**body.model_dump(exclude_none=True))
    traite.documents = intake.save_all(documents, upload_dir)
    db.add(traite)
    commit_or_raise(db, "creating traite", body.model_dump(), uploaded=traite.documents)
    return _fetch(db, traite.id)


@router.put("/traites/{traite_id}", response_model=TraiteOut, summary="Update a traite")
def update_traite(
    traite_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    traite = get_or_404(db, Traite, traite_id, "Traite")
    changes = parse_form_json(data, TraiteUpdate).model_dump(exclude_unset=True)
    if "vehicle_id" in changes:
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    apply_changes(traite, changes)
    uploaded = intake.save_all(documents, upload_dir)
    traite.documents = apply_document_update(
        traite.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating traite", changes, uploaded=uploaded)
    return _fetch(db, traite_id)


@router.delete("/traites/{traite_id}", summary="Delete a traite")
def delete_traite(traite_id: str, db: Session = Depends(get_db)):
    traite = get_or_404(db, Traite, traite_id, "Traite")
    db.delete(traite)
    commit_or_raise(db, "deleting traite", {"id": traite_id})
    return {"status": "removed", "id": traite_id}


@router.delete("/traites/{traite_id}/documents", response_model=TraiteOut,
               summary="Remove one attached document (by name)")
def delete_traite_document(traite_id: str, name: str, db: Session = Depends(get_db)):
    traite = get_or_404(db, Traite, traite_id, "Traite")
    remove_entity_document(db, traite, "documents", name, key="name")
    return _fetch(db, traite_id)
