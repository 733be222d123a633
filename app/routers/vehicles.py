# app/routers/vehicles.py
"""Fleet vehicles — CRUD. Deletion detaches dependent records (services/vehicle_service.py)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.vehicle import Vehicle
from app.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.services.vehicle_service import delete_vehicle, lookup_vehicle_by_plate
from app.utils.forms import parse_form_json

router = APIRouter()
intake = FileIntake("vehicles", field_name="documents")


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(statut: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(Vehicle)
    if statut:
        q = q.filter(Vehicle.statut == statut)
    return q.order_by(Vehicle.created_at.desc()).all()


@router.get("/vehicles/lookup/{plate}", response_model=VehicleOut, summary="Find a vehicle by license plate")
def lookup_vehicle(plate: str, db: Session = Depends(get_db)):
    vehicle = lookup_vehicle_by_plate(db, plate)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Get a vehicle")
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    return get_or_404(db, Vehicle, vehicle_id, "Vehicle")


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Register a vehicle")
def create_vehicle(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, VehicleCreate)
    vehicle = Vehicle(**body.model_dump(exclude_none=True))
    vehicle.documents = intake.save_all(documents, upload_dir)
    db.add(vehicle)
    commit_or_raise(db, "creating vehicle", body.model_dump(), uploaded=vehicle.documents)
    return vehicle


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Update a vehicle")
def update_vehicle(
    vehicle_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    vehicle = get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    changes = parse_form_json(data, VehicleUpdate).model_dump(exclude_unset=True)
    apply_changes(vehicle, changes)
    uploaded = intake.save_all(documents, upload_dir)
    vehicle.documents = apply_document_update(
        vehicle.documents, existing_documents, uploaded,
        keep_all_when_omitted=True,
    )
    commit_or_raise(db, "updating vehicle", changes, uploaded=uploaded)
    return vehicle


@router.delete("/vehicles/{vehicle_id}", summary="Delete a vehicle")
def remove_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    """Inspections, insurances, infractions and interventions are kept with vehicle_id = NULL."""
    vehicle = get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    detached = delete_vehicle(db, vehicle)
    return {"status": "removed", "id": vehicle_id, "detached": detached}
