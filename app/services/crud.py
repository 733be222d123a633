# app/services/crud.py
"""
Small persistence helpers shared by every entity router.
"""

from typing import Optional

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.services.documents import remove_document
from app.services.file_storage import delete_stored_file, delete_stored_files
from app.utils.logger import get_logger

logger = get_logger(__name__)


def get_or_404(db: Session, model, entity_id: str, label: Optional[str] = None, options=()):
    """Fetch by primary key or raise 404 '<Label> not found'."""
    q = db.query(model)
    if options:
        q = q.options(*options)
    obj = q.filter(model.id == entity_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail=f"{label or model.__name__} not found")
    return obj


def require_exists(db: Session, model, entity_id: Optional[str], label: Optional[str] = None):
    """
    Referenced-entity check for request bodies: a missing id or a missing
    row is a 400, raised before anything is written.
    """
    label = label or model.__name__
    if not entity_id:
        raise HTTPException(status_code=400, detail=f"{label} is required")
    obj = db.query(model).filter(model.id == entity_id).first()
    if not obj:
        raise HTTPException(status_code=400, detail=f"{label} not found")
    return obj


def apply_changes(obj, changes: dict):
    """Copy every key of `changes` onto the ORM object."""
    for field, value in changes.items():
        setattr(obj, field, value)
    return obj


def commit_or_raise(db: Session, action: str, payload=None, uploaded: Optional[list] = None):
    """
    Commit the session. On failure roll back, delete the files stored for
    this request (`uploaded`) and raise an HTTPException carrying the driver
    message and the attempted payload:
    400 for constraint violations, 500 for anything else.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        delete_stored_files(uploaded)
        logger.warning(f"[DB] {action} rejected by constraint: {e.orig}")
        raise HTTPException(status_code=400, detail={
            "message": f"Error {action}",
            "error": str(e.orig),
            "payload": jsonable_encoder(payload),
        })
    except SQLAlchemyError as e:
        db.rollback()
        delete_stored_files(uploaded)
        logger.error(f"[DB] {action} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={
            "message": f"Error {action}",
            "error": str(e),
            "payload": jsonable_encoder(payload),
        })


def remove_entity_document(db: Session, entity, field: str, value: Optional[str], key: str = "url"):
    """
    Drop the one document of entity.<field> whose `key` equals `value`,
    persist, then delete the stored file (best effort). 404 if no match.
    """
    if not value:
        raise HTTPException(status_code=400, detail=f"Document {key} is required")
    remaining, removed = remove_document(getattr(entity, field), value, key)
    if removed is None:
        raise HTTPException(status_code=404, detail="Document not found")
    setattr(entity, field, remaining)
    commit_or_raise(db, "removing document", {key: value})
    delete_stored_file(removed.get("url"))
    logger.info(f"[DOCS] Removed {key}={value} from {type(entity).__name__} {entity.id}")
    return remaining
