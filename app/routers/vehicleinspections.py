# app/routers/vehicleinspections.py
"""Technical inspections — CRUD + single-document removal (by url)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.vehicle import Vehicle
from app.models.vehicle_inspection import VehicleInspection
from app.schemas.vehicle_inspection import (
    VehicleInspectionCreate, VehicleInspectionOut, VehicleInspectionUpdate,
)
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("vehicleinspections", field_name="documents")

RELATED = (joinedload(VehicleInspection.vehicle),)


def _fetch(db: Session, inspection_id: str) -> VehicleInspection:
    return get_or_404(db, VehicleInspection, inspection_id, "Vehicle inspection", options=RELATED)


@router.get("/vehicleinspections", response_model=list[VehicleInspectionOut], summary="List inspections")
def list_inspections(vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(VehicleInspection).options(*RELATED)
    if vehicle_id:
        q = q.filter(VehicleInspection.vehicle_id == vehicle_id)
    return q.order_by(VehicleInspection.inspection_date.desc()).all()


@router.get("/vehicleinspections/{inspection_id}", response_model=VehicleInspectionOut,
            summary="Get an inspection")
def get_inspection(inspection_id: str, db: Session = Depends(get_db)):
    return _fetch(db, inspection_id)


@router.post("/vehicleinspections", response_model=VehicleInspectionOut, status_code=201,
             summary="Record an inspection")
def create_inspection(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, VehicleInspectionCreate)
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")
    inspection = VehicleInspection(**body.model_dump(exclude_none=True))
    inspection.documents = intake.save_all(documents, upload_dir)
    db.add(inspection)
    commit_or_raise(db, "creating vehicle inspection", body.model_dump(), uploaded=inspection.documents)
    return _fetch(db, inspection.id)


@router.put("/vehicleinspections/{inspection_id}", response_model=VehicleInspectionOut,
            summary="Update an inspection")
def update_inspection(
    inspection_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    inspection = get_or_404(db, VehicleInspection, inspection_id, "Vehicle inspection")
    changes = parse_form_json(data, VehicleInspectionUpdate).model_dump(exclude_unset=True)
    if changes.get("vehicle_id"):
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    apply_changes(inspection, changes)
    uploaded = intake.save_all(documents, upload_dir)
    inspection.documents = apply_document_update(
        inspection.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating vehicle inspection", changes, uploaded=uploaded)
    return _fetch(db, inspection_id)


@router.delete("/vehicleinspections/{inspection_id}", summary="Delete an inspection")
def delete_inspection(inspection_id: str, db: Session = Depends(get_db)):
    inspection = get_or_404(db, VehicleInspection, inspection_id, "Vehicle inspection")
    db.delete(inspection)
    commit_or_raise(db, "deleting vehicle inspection", {"id": inspection_id})
    return {"status": "removed", "id": inspection_id}


@router.delete("/vehicleinspections/{inspection_id}/documents", response_model=VehicleInspectionOut,
               summary="Remove one attached document (by url)")
def delete_inspection_document(inspection_id: str, url: str, db: Session = Depends(get_db)):
    inspection = get_or_404(db, VehicleInspection, inspection_id, "Vehicle inspection")
    remove_entity_document(db, inspection, "documents", url, key="url")
    return _fetch(db, inspection_id)
