# app/routers/vehicleinsurances.py
"""
Insurance policies — CRUD + single-document removal (by file name).
Updates never drop attachments: new uploads are appended to the existing ones.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.customer import Customer
from app.models.vehicle import Vehicle
from app.models.vehicle_insurance import VehicleInsurance
from app.schemas.vehicle_insurance import (
    VehicleInsuranceCreate, VehicleInsuranceOut, VehicleInsuranceUpdate,
)
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.file_storage import FileIntake, get_upload_dir
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("vehicleinsurances", field_name="attachments", max_files=10)

RELATED = (joinedload(VehicleInsurance.vehicle), joinedload(VehicleInsurance.customer))


def _fetch(db: Session, insurance_id: str) -> VehicleInsurance:
    return get_or_404(db, VehicleInsurance, insurance_id, "Vehicle insurance", options=RELATED)


@router.get("/vehicleinsurances", response_model=list[VehicleInsuranceOut], summary="List insurances")
def list_insurances(vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(VehicleInsurance).options(*RELATED)
    if vehicle_id:
        q = q.filter(VehicleInsurance.vehicle_id == vehicle_id)
    return q.order_by(VehicleInsurance.end_date.desc()).all()


@router.get("/vehicleinsurances/{insurance_id}", response_model=VehicleInsuranceOut,
            summary="Get an insurance policy")
def get_insurance(insurance_id: str, db: Session = Depends(get_db)):
    return _fetch(db, insurance_id)


@router.post("/vehicleinsurances", response_model=VehicleInsuranceOut, status_code=201,
             summary="Record an insurance policy")
def create_insurance(
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, VehicleInsuranceCreate)
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")
    if body.customer_id:
        require_exists(db, Customer, body.customer_id, "Customer")
    insurance = VehicleInsurance(**body.model_dump(exclude_none=True))
    insurance.attachments = intake.save_all(attachments, upload_dir)
    db.add(insurance)
    commit_or_raise(db, "creating vehicle insurance", body.model_dump(), uploaded=insurance.attachments)
    return _fetch(db, insurance.id)


@router.put("/vehicleinsurances/{insurance_id}", response_model=VehicleInsuranceOut,
            summary="Update an insurance policy")
def update_insurance(
    insurance_id: str,
    data: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    insurance = get_or_404(db, VehicleInsurance, insurance_id, "Vehicle insurance")
    changes = parse_form_json(data, VehicleInsuranceUpdate).model_dump(exclude_unset=True)
    if changes.get("vehicle_id"):
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    if changes.get("customer_id"):
        require_exists(db, Customer, changes["customer_id"], "Customer")
    apply_changes(insurance, changes)
    uploaded = intake.save_all(attachments, upload_dir)
    insurance.attachments = list(insurance.attachments or []) + uploaded
    commit_or_raise(db, "updating vehicle insurance", changes, uploaded=uploaded)
    return _fetch(db, insurance_id)


@router.delete("/vehicleinsurances/{insurance_id}", summary="Delete an insurance policy")
def delete_insurance(insurance_id: str, db: Session = Depends(get_db)):
    insurance = get_or_404(db, VehicleInsurance, insurance_id, "Vehicle insurance")
    db.delete(insurance)
    commit_or_raise(db, "deleting vehicle insurance", {"id": insurance_id})
    return {"status": "removed", "id": insurance_id}


@router.delete("/vehicleinsurances/{insurance_id}/documents", response_model=VehicleInsuranceOut,
               summary="Remove one attached document (by name)")
def delete_insurance_document(insurance_id: str, name: str, db: Session = Depends(get_db)):
    insurance = get_or_404(db, VehicleInsurance, insurance_id, "Vehicle insurance")
    remove_entity_document(db, insurance, "attachments", name, key="name")
    return _fetch(db, insurance_id)
