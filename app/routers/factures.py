# app/routers/factures.py
"""Invoices — CRUD (JSON bodies). Numbers are INV-<epoch ms>; an update may overwrite them."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.facture import Facture
from app.schemas.facture import FactureCreate, FactureOut, FactureUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404, require_exists
from app.services.numbering import invoice_number

router = APIRouter()

RELATED = (joinedload(Facture.client), joinedload(Facture.contract))


def _fetch(db: Session, facture_id: str) -> Facture:
    return get_or_404(db, Facture, facture_id, "Facture", options=RELATED)


@router.get("/factures", response_model=list[FactureOut], summary="List invoices")
def list_factures(status: Optional[str] = None, client_id: Optional[str] = None,
                  db: Session = Depends(get_db)):
    q = db.query(Facture).options(*RELATED)
    if status:
        q = q.filter(Facture.status == status)
    if client_id:
        q = q.filter(Facture.client_id == client_id)
    return q.order_by(Facture.created_at.desc()).all()


@router.get("/factures/{facture_id}", response_model=FactureOut, summary="Get an invoice")
def get_facture(facture_id: str, db: Session = Depends(get_db)):
    return _fetch(db, facture_id)


@router.post("/factures", response_model=FactureOut, status_code=201, summary="Create an invoice")
def create_facture(body: FactureCreate, db: Session = Depends(get_db)):
    require_exists(db, Customer, body.client_id, "Customer")
    if body.contract_id:
        require_exists(db, Contract, body.contract_id, "Contract")
    fields = body.model_dump(exclude_none=True)
    fields["invoice_number"] = invoice_number()
    facture = Facture(**fields)
    db.add(facture)
    commit_or_raise(db, "creating facture", body.model_dump())
    return _fetch(db, facture.id)


@router.put("/factures/{facture_id}", response_model=FactureOut, summary="Update an invoice")
def update_facture(facture_id: str, body: FactureUpdate, db: Session = Depends(get_db)):
    facture = get_or_404(db, Facture, facture_id, "Facture")
    changes = body.model_dump(exclude_unset=True)
    if "client_id" in changes:
        require_exists(db, Customer, changes["client_id"], "Customer")
    if changes.get("contract_id"):
        require_exists(db, Contract, changes["contract_id"], "Contract")
    apply_changes(facture, changes)
    commit_or_raise(db, "updating facture", changes)
    return _fetch(db, facture_id)


@router.delete("/factures/{facture_id}", summary="Delete an invoice")
def delete_facture(facture_id: str, db: Session = Depends(get_db)):
    facture = get_or_404(db, Facture, facture_id, "Facture")
    db.delete(facture)
    commit_or_raise(db, "deleting facture", {"id": facture_id})
    return {"status": "removed", "id": facture_id}
