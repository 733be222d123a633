# app/routers/dashboard.py
"""Dashboard — fleet alerts, monthly revenue/expense rollup, headline counters."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.dashboard import DashboardSummaryOut, FleetAlertOut, MonthlyRollupOut
from app.services import dashboard_service

router = APIRouter()


@router.get("/dashboard/alerts", response_model=list[FleetAlertOut], summary="Fleet alerts")
def get_alerts(alert_type: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Vehicles missing a valid inspection or insurance, with an authorization
    or carte grise expiring within 30 days, or close to their next service.
    """
    alerts = dashboard_service.fleet_alerts(db)
    if alert_type:
        alerts = [a for a in alerts if a.alert_type == alert_type]
    return [a.to_dict() for a in alerts]


@router.get("/dashboard/monthly", response_model=MonthlyRollupOut, summary="Monthly revenue and expenses")
def get_monthly(year: Optional[int] = None, start_date: Optional[date] = None,
                end_date: Optional[date] = None, db: Session = Depends(get_db)):
    year = year or date.today().year
    totals = dashboard_service.monthly_totals(db, year, start_date=start_date, end_date=end_date)
    return {
        "year": year,
        "recettes": totals["recettes"],
        "depenses": totals["depenses"],
        "total_recettes": round(sum(totals["recettes"]), 2),
        "total_depenses": round(sum(totals["depenses"]), 2),
    }


@router.get("/dashboard/summary", response_model=DashboardSummaryOut, summary="Headline counters")
def get_summary(db: Session = Depends(get_db)):
    return dashboard_service.summary(db)
