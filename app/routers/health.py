# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + upload directory.
"""

import os
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.database import get_db
from app.services.file_storage import get_upload_dir
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(upload_dir: str = Depends(get_upload_dir), db: Session = Depends(get_db)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Whether the upload directory is writable
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "uploads": "unknown",
    }

    # Check database
    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except SQLAlchemyError as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    # Check upload storage
    if os.path.isdir(upload_dir) and os.access(upload_dir, os.W_OK):
        result["uploads"] = "ok"
    else:
        result["uploads"] = "unavailable"
        result["status"] = "degraded"

    return result
