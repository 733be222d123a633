# tests/test_numbering.py
"""Unit tests for business identifier generation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock
from app.services.numbering import (
    increment_identifier, invoice_number, next_contract_number, next_infraction_number,
    next_payment_identifier, next_payment_number, next_reservation_number,
)


def latest(value):
    """Session whose 'latest created' query returns `value`."""
    db = MagicMock()
    db.query.return_value.order_by.return_value.first.return_value = (value,) if value else None
    return db


class TestIncrementIdentifier:
    def test_seeds_when_no_previous(self):
        assert increment_identifier(None, "RES", 4) == "RES-0001"
        assert increment_identifier(None, "INF", 5) == "INF-00001"
        assert increment_identifier(None, "Noc", 5) == "Noc-00001"

    def test_increments_and_keeps_width(self):
        assert increment_identifier("RES-0041", "RES", 4) == "RES-0042"
        assert increment_identifier("INF-00099", "INF", 5) == "INF-00100"

    def test_grows_past_width(self):
        assert increment_identifier("RES-9999", "RES", 4) == "RES-10000"

    def test_unparseable_restarts(self):
        assert increment_identifier("RES-abc", "RES", 4) == "RES-0001"
        assert increment_identifier("garbage", "INF", 5) == "INF-00001"


class TestPaymentIdentifier:
    def test_first_payment_of_year(self):
        assert next_payment_identifier(None, 2025) == "REG-2025-001"

    def test_same_year_increments(self):
        assert next_payment_identifier("REG-2025-041", 2025) == "REG-2025-042"

    def test_year_change_resets_sequence(self):
        assert next_payment_identifier("REG-2024-317", 2025) == "REG-2025-001"

    def test_malformed_previous_resets(self):
        assert next_payment_identifier("REG-17", 2025) == "REG-2025-001"


class TestInvoiceNumber:
    def test_uses_epoch_milliseconds(self):
        assert invoice_number(now=1700000000.5) == "INV-1700000000500"

    def test_defaults_to_wall_clock(self):
        number = invoice_number()
        assert number.startswith("INV-")
        assert number[4:].isdigit()


class TestDatabaseBackedNumbers:
    def test_reservation_from_latest(self):
        assert next_reservation_number(latest("RES-0007")) == "RES-0008"

    def test_reservation_seed(self):
        assert next_reservation_number(latest(None)) == "RES-0001"

    def test_infraction_from_latest(self):
        assert next_infraction_number(latest("INF-00012")) == "INF-00013"

    def test_payment_resets_on_new_year(self):
        assert next_payment_number(latest("REG-2024-009"), year=2025) == "REG-2025-001"
        assert next_payment_number(latest("REG-2025-009"), year=2025) == "REG-2025-010"

    def test_contract_uses_highest_suffix(self):
        db = MagicMock()
        db.query.return_value.all.return_value = [("Noc-00003",), ("Noc-00010",), ("Noc-00002",)]
        assert next_contract_number(db) == "Noc-00011"

    def test_contract_seed(self):
        db = MagicMock()
        db.query.return_value.all.return_value = []
        assert next_contract_number(db) == "Noc-00001"
