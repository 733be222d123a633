# app/routers/customers.py
"""Customers — CRUD. Documents are dropped by an explicit documents_to_delete list."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerOut, CustomerUpdate
from app.services.crud import apply_changes, commit_or_raise, get_or_404
from app.services.documents import drop_documents, parse_retained
from app.services.file_storage import FileIntake, delete_stored_files, get_upload_dir
from app.utils.forms import parse_form_json
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
intake = FileIntake("customers", field_name="documents")


@router.get("/customers", response_model=list[CustomerOut], summary="List customers")
def list_customers(status: Optional[str] = None, liste_noire: Optional[bool] = None,
                   db: Session = Depends(get_db)):
    q = db.query(Customer)
    if status:
        q = q.filter(Customer.status == status)
    if liste_noire is not None:
        q = q.filter(Customer.liste_noire == liste_noire)
    return q.order_by(Customer.created_at.desc()).all()


@router.get("/customers/{customer_id}", response_model=CustomerOut, summary="Get a customer")
def get_customer(customer_id: str, db: Session = Depends(get_db)):
    return get_or_404(db, Customer, customer_id, "Customer")


@router.post("/customers", response_model=CustomerOut, status_code=201, summary="Create a customer")
def create_customer(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, CustomerCreate)
    customer = Customer(**body.model_dump(exclude_none=True))
    customer.documents = intake.save_all(documents, upload_dir)
    db.add(customer)
    commit_or_raise(db, "creating customer", body.model_dump(), uploaded=customer.documents)
    logger.info(f"[CUSTOMER] Created {customer.nom_fr} {customer.prenom_fr} ({customer.id})")
    return customer


@router.put("/customers/{customer_id}", response_model=CustomerOut, summary="Update a customer")
def update_customer(
    customer_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    documents_to_delete: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    """
    Scalar fields present in `data` overwrite the stored ones.
    Entries listed in `documents_to_delete` (urls) are removed and their
    files deleted; new uploads are appended.
    """
    customer = get_or_404(db, Customer, customer_id, "Customer")
    body = parse_form_json(data, CustomerUpdate)
    changes = body.model_dump(exclude_unset=True)
    apply_changes(customer, changes)

    uploaded = intake.save_all(documents, upload_dir)
    remaining, removed = drop_documents(customer.documents, parse_retained(documents_to_delete))
    customer.documents = remaining + uploaded
    commit_or_raise(db, "updating customer", changes, uploaded=uploaded)

    delete_stored_files(removed)
    return customer


@router.delete("/customers/{customer_id}", summary="Delete a customer and its files")
def delete_customer(customer_id: str, db: Session = Depends(get_db)):
    customer = get_or_404(db, Customer, customer_id, "Customer")
    files = list(customer.documents or [])
    db.delete(customer)
    commit_or_raise(db, "deleting customer", {"id": customer_id})
    removed = delete_stored_files(files)
    logger.info(f"[CUSTOMER] Deleted {customer_id} ({removed}/{len(files)} files removed)")
    return {"status": "removed", "id": customer_id}
