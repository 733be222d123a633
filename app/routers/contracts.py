# app/routers/contracts.py
"""
Rental contracts — CRUD + single-document removal.
Numbers are assigned on create (Noc-XXXXX). An all-blank second driver is
stored as NULL, and an update that omits second_driver clears it.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.vehicle import Vehicle
from app.schemas.contract import ContractCreate, ContractOut, ContractUpdate
from app.services.crud import (
    apply_changes, commit_or_raise, get_or_404, remove_entity_document, require_exists,
)
from app.services.documents import apply_document_update
from app.services.file_storage import FileIntake, get_upload_dir
from app.services.numbering import next_contract_number
from app.services.status_rules import clean_second_driver
from app.utils.forms import parse_form_json
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
intake = FileIntake("contracts", field_name="documents", max_files=10)

RELATED = (joinedload(Contract.client), joinedload(Contract.vehicle))


def _fetch(db: Session, contract_id: str) -> Contract:
    return get_or_404(db, Contract, contract_id, "Contract", options=RELATED)


@router.get("/contracts", response_model=list[ContractOut], summary="List contracts")
def list_contracts(status: Optional[str] = None, client_id: Optional[str] = None,
                   vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(Contract).options(*RELATED)
    if status:
        q = q.filter(Contract.status == status)
    if client_id:
        q = q.filter(Contract.client_id == client_id)
    if vehicle_id:
        q = q.filter(Contract.vehicle_id == vehicle_id)
    return q.order_by(Contract.created_at.desc()).all()


@router.get("/contracts/{contract_id}", response_model=ContractOut, summary="Get a contract")
def get_contract(contract_id: str, db: Session = Depends(get_db)):
    return _fetch(db, contract_id)


@router.post("/contracts", response_model=ContractOut, status_code=201, summary="Create a contract")
def create_contract(
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    body = parse_form_json(data, ContractCreate)
    require_exists(db, Customer, body.client_id, "Customer")
    vehicle = require_exists(db, Vehicle, body.vehicle_id, "Vehicle")

    fields = body.model_dump(exclude_none=True)
    fields["second_driver"] = clean_second_driver(fields.get("second_driver"))
    fields.setdefault("matricule", vehicle.license_plate)

    contract = Contract(**fields)
    contract.contract_number = next_contract_number(db)
    contract.pieces_jointes = intake.save_all(documents, upload_dir)
    db.add(contract)
    commit_or_raise(db, "creating contract", body.model_dump(), uploaded=contract.pieces_jointes)
    logger.info(f"[CONTRACT] Created {contract.contract_number}")
    return _fetch(db, contract.id)


@router.put("/contracts/{contract_id}", response_model=ContractOut, summary="Update a contract")
def update_contract(
    contract_id: str,
    data: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    existing_documents: Optional[str] = Form(None),
    upload_dir: str = Depends(get_upload_dir),
    db: Session = Depends(get_db),
):
    contract = get_or_404(db, Contract, contract_id, "Contract")
    changes = parse_form_json(data, ContractUpdate).model_dump(exclude_unset=True)
    if "client_id" in changes:
        require_exists(db, Customer, changes["client_id"], "Customer")
    if "vehicle_id" in changes:
        require_exists(db, Vehicle, changes["vehicle_id"], "Vehicle")

    changes["second_driver"] = clean_second_driver(changes.get("second_driver"))
    apply_changes(contract, changes)
    uploaded = intake.save_all(documents, upload_dir)
    contract.pieces_jointes = apply_document_update(
        contract.pieces_jointes, existing_documents, uploaded,
        keep_all_when_omitted=True,
    )
    commit_or_raise(db, "updating contract", changes, uploaded=uploaded)
    return _fetch(db, contract_id)


@router.delete("/contracts/{contract_id}", summary="Delete a contract")
def delete_contract(contract_id: str, db: Session = Depends(get_db)):
    contract = get_or_404(db, Contract, contract_id, "Contract")
    db.delete(contract)
    commit_or_raise(db, "deleting contract", {"id": contract_id})
    return {"status": "removed", "id": contract_id}


@router.delete("/contracts/{contract_id}/documents", response_model=ContractOut,
               summary="Remove one attached document (by url)")
def delete_contract_document(contract_id: str, url: str, db: Session = Depends(get_db)):
    contract = get_or_404(db, Contract, contract_id, "Contract")
    remove_entity_document(db, contract, "pieces_jointes", url, key="url")
    return _fetch(db, contract_id)
