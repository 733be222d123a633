# app/routers/clientpayments.py
"""
Client payments (règlements) — CRUD + single-document removal.
payment_for picks the settled entity; the two other target ids are cleared.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.accident import Accident
from app.models.client_payment import ClientPayment
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.facture import Facture
from app.schemas.client_payment import ClientPaymentCreate, ClientPaymentOut, ClientPaymentUpdate
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.services.numbering import next_payment_number
from app.utils.forms import parse_form_json
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
intake = FileIntake("clientpayments", field_name="documents", max_files=10)

RELATED = (
    joinedload(ClientPayment.client),
    joinedload(ClientPayment.contract),
    joinedload(ClientPayment.facture),
    joinedload(ClientPayment.accident),
)

TARGETS = {
    "contract": ("contract_id", Contract, "Contract"),
    "facture": ("facture_id", Facture, "Facture"),
    "accident": ("accident_id", Accident, "Accident"),
}


def _fetch(db: Session, payment_id: str) -> ClientPayment:
    return get_or_404(db, ClientPayment, payment_id, "Client payment", options=RELATED)


def _resolve_target(db: Session, payment_for: str, fields: dict) -> dict:
    """Check the selected target exists and clear the ids that don't apply."""
    column, model, label = TARGETS[payment_for]
    require_exists(db, model, fields.get(column), label)
    for other, _, _ in TARGETS.values():
        if other != column:
            fields[other] = None
    return fields


@router.get("/clientpayments", response_model=list[ClientPaymentOut], summary="List client payments")
def list_client_payments(client_id: Optional[str] = None, payment_for: Optional[str] = None,
                         db: Session = Depends(get_db)):
    q = db.query(ClientPayment).options(*RELATED)
    if client_id:
        q = q.filter(ClientPayment.client_id == client_id)
    if payment_for:
        q = q.filter(ClientPayment.payment_for == payment_for)
    return q.order_by(ClientPayment.created_at.desc()).all()


@router.get("/clientpayments/{payment_id}", response_model=ClientPaymentOut, summary="Get a client payment")
def get_client_payment(payment_id: str, db: Session = Depends(get_db)):
    return _fetch(db, payment_id)


@router.post("/clientpayments", response_model=ClientPaymentOut, status_code=201,
             summary="Record a client payment")
def create_client_payment(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, ClientPaymentCreate)
    require_exists(db, Customer, body.client_id, "Customer")
    fields = body.model_dump(exclude_none=True)
    fields.pop("payment_number", None)
    fields = _resolve_target(db, body.payment_for, fields)

    payment = ClientPayment(**fields)
    payment.payment_number = next_payment_number(db)
    payment.documents = intake.save_all(documents, upload_dir)
    db.add(payment)
    commit_or_raise(db, "creating client payment", body.model_dump(), uploaded=payment.documents)
    logger.info(f"[PAYMENT] Recorded {payment.payment_number} for {payment.payment_for}")
    return _fetch(db, payment.id)


@router.put("/clientpayments/{payment_id}", response_model=ClientPaymentOut, summary="Update a client payment")
def update_client_payment(
    payment_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    payment = get_or_404(db, ClientPayment, payment_id, "Client payment")
    changes = parse_form_json(data, ClientPaymentUpdate).model_dump(exclude_unset=True)
    if "client_id" in changes:
        require_exists(db, Customer, changes["client_id"], "Customer")
    payment_for = changes.get("payment_for") or payment.payment_for
    if payment_for != payment.payment_for or any(c in changes for c, _, _ in TARGETS.values()):
        current = {c: getattr(payment, c) for c, _, _ in TARGETS.values()}
        current.update({k: v for k, v in changes.items() if k in current})
        changes.update(_resolve_target(db, payment_for, current))

    apply_changes(payment, changes)
    uploaded = intake.save_all(documents, upload_dir)
    payment.documents = apply_document_update(
        payment.documents, existing_documents, uploaded,
    )
    commit_or_raise(db, "updating client payment", changes, uploaded=uploaded)
    return _fetch(db, payment_id)


@router.delete("/clientpayments/{payment_id}", summary="Delete a client payment")
def delete_client_payment(payment_id: str, db: Session = Depends(get_db)):
    payment = get_or_404(db, ClientPayment, payment_id, "Client payment")
    db.delete(payment)
    commit_or_raise(db, "deleting client payment", {"id": payment_id})
    return {"status": "removed", "id": payment_id}


@router.delete("/clientpayments/{payment_id}/documents", response_model=ClientPaymentOut,
               summary="Remove one attached document (by url)")
def delete_client_payment_document(payment_id: str, url: str, db: Session = Depends(get_db)):
    payment = get_or_404(db, ClientPayment, payment_id, "Client payment")
    remove_entity_document(db, payment, "documents", url, key="url")
    return _fetch(db, payment_id)
