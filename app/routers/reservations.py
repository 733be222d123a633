# app/routers/reservations.py
"""
Reservations — CRUD (JSON bodies, no attachments).
Status input is normalized; an unrecognized value is ignored rather than
rejected (create falls back to en_cours, update keeps the current value).
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.customer import Customer
from app.models.reservation import Reservation
from app.models.vehicle import Vehicle
from app.schemas.reservation import ReservationCreate, ReservationOut, ReservationUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404, require_exists
from app.services.numbering import next_reservation_number
from app.services.status_rules import normalize_status
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

RELATED = (joinedload(Reservation.customer), joinedload(Reservation.vehicle))


def _fetch(db: Session, reservation_id: str) -> Reservation:
    return get_or_404(db, Reservation, reservation_id, "Reservation", options=RELATED)


def _with_normalized_status(fields: dict) -> dict:
    if "status" in fields:
        status = normalize_status(fields["status"])
        if status is None:
            logger.debug(f"[RESERVATION] Ignoring unknown status {fields['status']!r}")
            fields.pop("status")
        else:
            fields["status"] = status
    return fields


@router.get("/reservations", response_model=list[ReservationOut], summary="List reservations")
def list_reservations(status: Optional[str] = None, customer_id: Optional[str] = None,
                      vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(Reservation).options(*RELATED)
    if status:
        q = q.filter(Reservation.status == (normalize_status(status) or status))
    if customer_id:
        q = q.filter(Reservation.customer_id == customer_id)
    if vehicle_id:
        q = q.filter(Reservation.vehicle_id == vehicle_id)
    return q.order_by(Reservation.created_at.desc()).all()


@router.get("/reservations/{reservation_id}", response_model=ReservationOut, summary="Get a reservation")
def get_reservation(reservation_id: str, db: Session = Depends(get_db)):
    return _fetch(db, reservation_id)


@router.post("/reservations", response_model=ReservationOut, status_code=201, summary="Create a reservation")
def create_reservation(body: ReservationCreate, db: Session = Depends(get_db)):
    require_exists(db, Customer, body.customer_id, "Customer")
    require_exists(db, Vehicle, body.vehicle_id, "Vehicle")

    fields = _with_normalized_status(body.model_dump(exclude_none=True))
    reservation = Reservation(**fields)
    reservation.reservation_number = next_reservation_number(db)
    db.add(reservation)
    commit_or_raise(db, "creating reservation", body.model_dump())
    logger.info(f"[RESERVATION] Created {reservation.reservation_number} status={reservation.status}")
    return _fetch(db, reservation.id)


@router.put("/reservations/{reservation_id}", response_model=ReservationOut, summary="Update a reservation")
def update_reservation(reservation_id: str, body: ReservationUpdate, db: Session = Depends(get_db)):
    reservation = get_or_404(db, Reservation, reservation_id, "Reservation")
    changes = _with_normalized_status(body.model_dump(exclude_unset=True))
    if "customer_id" in changes:
        require_exists(db, Customer, changes["customer_id"], "Customer")
    if "vehicle_id" in changes:
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")
    apply_changes(reservation, changes)
    commit_or_raise(db, "updating reservation", changes)
    return _fetch(db, reservation_id)


@router.delete("/reservations/{reservation_id}", summary="Delete a reservation")
def delete_reservation(reservation_id: str, db: Session = Depends(get_db)):
    reservation = get_or_404(db, Reservation, reservation_id, "Reservation")
    db.delete(reservation)
    commit_or_raise(db, "deleting reservation", {"id": reservation_id})
    return {"status": "removed", "id": reservation_id}
