# app/services/numbering.py
"""
Business identifier generation.

  Contract      Noc-00001   highest existing suffix + 1
  Reservation   RES-0001    latest created + 1
  Infraction    INF-00001   latest created + 1
  ClientPayment REG-2025-001  latest created + 1, resets when the year changes
  Facture       INV-<epoch ms>  wall clock, not sequential

No locking: two concurrent creates can compute the same number.
"""

import time
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.client_payment import ClientPayment
from app.models.contract import Contract
from app.models.infraction import Infraction
from app.models.reservation import Reservation
from app.utils.logger import get_logger

logger = get_logger(__name__)

CONTRACT_PREFIX, CONTRACT_WIDTH = "Noc", 5
RESERVATION_PREFIX, RESERVATION_WIDTH = "RES", 4
INFRACTION_PREFIX, INFRACTION_WIDTH = "INF", 5
PAYMENT_PREFIX, PAYMENT_WIDTH = "REG", 3
INVOICE_PREFIX = "INV"


def _format(prefix: str, seq: int, width: int) -> str:
    return f"{prefix}-{str(seq).zfill(width)}"


def parse_suffix(identifier: Optional[str]) -> Optional[int]:
    """Numeric part after the first '-', or None if there isn't one."""
    if not identifier or "-" not in identifier:
        return None
    suffix = identifier.split("-", 1)[1]
    if not suffix.isdigit():
        return None
    return int(suffix)


def increment_identifier(previous: Optional[str], prefix: str, width: int) -> str:
    """
    Next identifier after `previous` (e.g. RES-0041 -> RES-0042).
    None starts the sequence at 1; an unparseable value restarts it.
    """
    if previous is None:
        return _format(prefix, 1, width)
    seq = parse_suffix(previous)
    if seq is None:
        logger.warning(f"[NUMBERING] Cannot parse '{previous}' — restarting {prefix} sequence")
        return _format(prefix, 1, width)
    return _format(prefix, seq + 1, width)


def next_payment_identifier(previous: Optional[str], year: int) -> str:
    """REG-<year>-NNN. The sequence restarts at 001 when the previous year differs."""
    seq = 1
    if previous:
        parts = previous.split("-")
        if len(parts) == 3 and parts[1] == str(year) and parts[2].isdigit():
            seq = int(parts[2]) + 1
    return f"{PAYMENT_PREFIX}-{year}-{str(seq).zfill(PAYMENT_WIDTH)}"


def invoice_number(now: Optional[float] = None) -> str:
    """INV-<unix milliseconds>. `now` is a time.time() value."""
    if now is None:
        now = time.time()
    return f"{INVOICE_PREFIX}-{int(now * 1000)}"


def _latest(db: Session, column, model):
    row = db.query(column).order_by(model.created_at.desc()).first()
    return row[0] if row else None


def next_reservation_number(db: Session) -> str:
    previous = _latest(db, Reservation.reservation_number, Reservation)
    return increment_identifier(previous, RESERVATION_PREFIX, RESERVATION_WIDTH)


def next_infraction_number(db: Session) -> str:
    previous = _latest(db, Infraction.infraction_number, Infraction)
    return increment_identifier(previous, INFRACTION_PREFIX, INFRACTION_WIDTH)


def next_payment_number(db: Session, year: Optional[int] = None) -> str:
    if year is None:
        year = datetime.now().year
    previous = _latest(db, ClientPayment.payment_number, ClientPayment)
    return next_payment_identifier(previous, year)


def next_contract_number(db: Session) -> str:
    """Noc-XXXXX from the numerically highest existing suffix."""
    highest = 0
    for (number,) in db.query(Contract.contract_number).all():
        seq = parse_suffix(number)
        if seq is not None and seq > highest:
            highest = seq
    return _format(CONTRACT_PREFIX, highest + 1, CONTRACT_WIDTH)
