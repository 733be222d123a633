# app/services/dashboard_service.py
"""
Dashboard aggregation — fleet alerts and monthly revenue / expense totals.

Everything is recomputed from full collections on every call; volumes are
small administrative datasets. The compute functions only read attributes,
so they work on ORM rows or any plain object with the same fields.

Alerts (per vehicle, against `today`):
  missing_inspection      no inspection with end_date >= today
  missing_insurance       no insurance with end_date >= today
  expiring_authorization  0 <= autorisation_validity - today <= ALERT_WINDOW_DAYS
  expiring_registration   same, on carte_grise_validity
  maintenance_due         next 10 000 km threshold within 200 km, unless an
                          intervention already plans next_mileage >= threshold
"""

import math
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.charge import Charge
from app.models.customer import Customer
from app.models.facture import Facture
from app.models.intervention import Intervention
from app.models.reservation import Reservation
from app.models.traite import Traite
from app.models.vehicle import Vehicle
from app.models.vehicle_inspection import VehicleInspection
from app.models.vehicle_insurance import VehicleInsurance
from app.services.status_rules import normalize_status
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTIONS = {
    "vehicles": Vehicle,
    "inspections": VehicleInspection,
    "insurances": VehicleInsurance,
    "reservations": Reservation,
    "factures": Facture,
    "traites": Traite,
    "charges": Charge,
    "interventions": Intervention,
}


@dataclass
class FleetAlert:
    alert_type: str          # missing_inspection | missing_insurance | expiring_authorization | expiring_registration | maintenance_due
    vehicle_id: str
    license_plate: Optional[str]
    message: str
    days_remaining: Optional[int] = None
    next_threshold: Optional[int] = None   # maintenance_due only

    def to_dict(self) -> dict:
        return asdict(self)


def to_date(value) -> Optional[date]:
    """date / datetime / ISO string → date. Anything unparseable → None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            logger.debug(f"[DASHBOARD] Ignoring unparseable date {value!r}")
            return None


def _days_until(value, today: date) -> Optional[int]:
    d = to_date(value)
    return None if d is None else (d - today).days


def _has_active(records, vehicle_id, today: date) -> bool:
    for r in records:
        if r.vehicle_id != vehicle_id:
            continue
        end = to_date(r.end_date)
        if end is not None and end >= today:
            return True
    return False


def next_maintenance_threshold(mileage, interval: int) -> int:
    return math.ceil(((mileage or 0) + 1) / interval) * interval


def compute_fleet_alerts(vehicles, inspections, insurances, interventions,
                         today=None, window_days: Optional[int] = None,
                         interval_km: Optional[int] = None,
                         warning_km: Optional[int] = None) -> list[FleetAlert]:
    today = to_date(today) or date.today()
    window_days = settings.ALERT_WINDOW_DAYS if window_days is None else window_days
    interval_km = interval_km or settings.MAINTENANCE_INTERVAL_KM
    warning_km = settings.MAINTENANCE_WARNING_KM if warning_km is None else warning_km

    alerts = []
    for v in vehicles:
        plate = v.license_plate

        if not _has_active(inspections, v.id, today):
            alerts.append(FleetAlert("missing_inspection", v.id, plate,
                                     f"{plate}: aucune visite technique en cours de validité"))
        if not _has_active(insurances, v.id, today):
            alerts.append(FleetAlert("missing_insurance", v.id, plate,
                                     f"{plate}: aucune assurance en cours de validité"))

        days = _days_until(v.autorisation_validity, today)
        if days is not None and 0 <= days <= window_days:
            alerts.append(FleetAlert("expiring_authorization", v.id, plate,
                                     f"{plate}: autorisation expire dans {days} jour(s)", days_remaining=days))

        days = _days_until(v.carte_grise_validity, today)
        if days is not None and 0 <= days <= window_days:
            alerts.append(FleetAlert("expiring_registration", v.id, plate,
                                     f"{plate}: carte grise expire dans {days} jour(s)", days_remaining=days))

        mileage = v.mileage or 0
        threshold = next_maintenance_threshold(mileage, interval_km)
        distance = threshold - mileage
        if 0 < distance <= warning_km:
            planned = any(
                i.vehicle_id == v.id and i.next_mileage is not None and i.next_mileage >= threshold
                for i in interventions
            )
            if not planned:
                alerts.append(FleetAlert("maintenance_due", v.id, plate,
                                         f"{plate}: entretien à prévoir ({distance} km avant {threshold} km)",
                                         next_threshold=threshold))

    logger.debug(f"[DASHBOARD] {len(alerts)} alert(s) for {len(vehicles)} vehicle(s)")
    return alerts


def _bucket(totals: list, when, amount, year: int,
            start: Optional[date], end: Optional[date]):
    d = to_date(when)
    if d is None or d.year != year:
        return
    if start and d < start:
        return
    if end and d > end:
        return
    totals[d.month - 1] += float(amount or 0)


def monthly_rollup(year: int, reservations=(), factures=(), traites=(), charges=(),
                   interventions=(), inspections=(), insurances=(),
                   start_date=None, end_date=None) -> dict:
    """
    Twelve monthly revenue ("recettes") and expense ("depenses") totals for `year`.
    Index 0 is January. start_date / end_date bound the dates inclusively.
    """
    start, end = to_date(start_date), to_date(end_date)
    recettes = [0.0] * 12
    depenses = [0.0] * 12

    for r in reservations:
        if normalize_status(r.status) == "validee":
            _bucket(recettes, r.reservation_date, r.total_amount, year, start, end)
    for f in factures:
        _bucket(recettes, f.invoice_date, f.total_ttc, year, start, end)

    for t in traites:
        _bucket(depenses, t.date_paiement or t.created_at, t.montant, year, start, end)
    for c in charges:
        _bucket(depenses, c.date or c.created_at, c.amount, year, start, end)
    for i in interventions:
        _bucket(depenses, i.date, i.cost, year, start, end)
    for vi in inspections:
        _bucket(depenses, vi.inspection_date, vi.price, year, start, end)
    for ins in insurances:
        _bucket(depenses, ins.operation_date, ins.price, year, start, end)

    return {"recettes": recettes, "depenses": depenses}


def load_collections(db: Session) -> dict:
    """
    Fetch every collection the dashboard needs. Each fetch is independent:
    a failing one is logged and replaced by an empty list.
    """
    data = {}
    for name, model in COLLECTIONS.items():
        try:
            data[name] = db.query(model).all()
        except SQLAlchemyError as e:
            logger.error(f"[DASHBOARD] Could not load {name}: {e}")
            db.rollback()
            data[name] = []
    return data


def fleet_alerts(db: Session, today=None) -> list[FleetAlert]:
    data = load_collections(db)
    return compute_fleet_alerts(data["vehicles"], data["inspections"], data["insurances"],
                                data["interventions"], today=today)


def monthly_totals(db: Session, year: int, start_date=None, end_date=None) -> dict:
    data = load_collections(db)
    return monthly_rollup(
        year,
        reservations=data["reservations"],
        factures=data["factures"],
        traites=data["traites"],
        charges=data["charges"],
        interventions=data["interventions"],
        inspections=data["inspections"],
        insurances=data["insurances"],
        start_date=start_date,
        end_date=end_date,
    )


def summary(db: Session, today=None) -> dict:
    """Headline counters for the dashboard cards."""
    today = to_date(today) or date.today()
    totals = monthly_totals(db, today.year)
    month = today.month - 1
    return {
        "vehicles": db.query(func.count(Vehicle.id)).scalar() or 0,
        "vehicles_en_circulation": db.query(func.count(Vehicle.id))
        .filter(Vehicle.statut == "En circulation").scalar() or 0,
        "active_customers": db.query(func.count(Customer.id))
        .filter(Customer.status == "Actif").scalar() or 0,
        "reservations_today": db.query(func.count(Reservation.id))
        .filter(Reservation.start_date == today).scalar() or 0,
        "revenue_this_month": totals["recettes"][month],
        "expenses_this_month": totals["depenses"][month],
        "alerts": len(fleet_alerts(db, today=today)),
    }
