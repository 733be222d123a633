# app/services/vehicle_service.py
"""
Vehicle lookup and deletion helpers.
Used by the vehicles router.

Deleting a vehicle detaches the records that may outlive it
(inspections, insurances, infractions, interventions) by setting their
vehicle_id to NULL, then removes the vehicle row. Contracts, accidents,
reservations and traites keep their reference; the vehicle's stored
files are left in place.
"""

from sqlalchemy.orm import Session
from app.models.infraction import Infraction
from app.models.intervention import Intervention
from app.models.vehicle import Vehicle
from app.models.vehicle_inspection import VehicleInspection
from app.models.vehicle_insurance import VehicleInsurance
from app.services.crud import commit_or_raise
from app.utils.logger import get_logger

logger = get_logger(__name__)

DETACHED_ON_DELETE = (VehicleInspection, VehicleInsurance, Infraction, Intervention)


def lookup_vehicle_by_plate(db: Session, license_plate: str):
    """Find a vehicle by license plate. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.license_plate == license_plate).first()


def detach_vehicle(db: Session, vehicle_id: str) -> dict:
    """NULL out vehicle_id on every dependent record. Returns counts per table."""
    counts = {}
    for model in DETACHED_ON_DELETE:
        counts[model.__tablename__] = (
            db.query(model)
            .filter(model.vehicle_id == vehicle_id)
            .update({model.vehicle_id: None}, synchronize_session=False)
        )
    return counts


def delete_vehicle(db: Session, vehicle: Vehicle) -> dict:
    """Detach dependents, delete the vehicle, commit. Returns the detach counts."""
    ref = {"id": vehicle.id, "license_plate": vehicle.license_plate}
    counts = detach_vehicle(db, vehicle.id)
    db.delete(vehicle)
    commit_or_raise(db, "deleting vehicle", ref)
    logger.info(f"[VEHICLE] Deleted {ref['license_plate']} — detached {counts}")
    return counts
