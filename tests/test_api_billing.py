# tests/test_api_billing.py
"""Client payments and invoices."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime

import pytest

from conftest import send_form


@pytest.fixture
def contract(client, customer, vehicle):
    resp = send_form(client, "POST", "/api/v1/contracts", {
        "client_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "contract_date": "2024-03-01",
        "departure_date": "2024-03-01",
        "return_date": "2024-03-05",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestClientPaymentsApi:
    def test_numbering_and_target_cleanup(self, client, customer, contract):
        year = datetime.now().year
        body = {
            "payment_date": "2024-03-05",
            "payment_for": "contract",
            "client_id": customer["id"],
            "contract_id": contract["id"],
            "facture_id": "left-over",
            "amount_paid": 1200,
        }
        first = send_form(client, "POST", "/api/v1/clientpayments", body)
        assert first.status_code == 201, first.text
        assert first.json()["payment_number"] == f"REG-{year}-001"
        assert first.json()["facture_id"] is None
        assert first.json()["contract"]["contract_number"] == contract["contract_number"]

        second = send_form(client, "POST", "/api/v1/clientpayments", body)
        assert second.json()["payment_number"] == f"REG-{year}-002"

    def test_selected_target_is_required(self, client, customer):
        resp = send_form(client, "POST", "/api/v1/clientpayments", {
            "payment_date": "2024-03-05",
            "payment_for": "facture",
            "client_id": customer["id"],
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Facture is required"

    def test_payment_number_can_be_overwritten_on_update(self, client, customer, contract):
        created = send_form(client, "POST", "/api/v1/clientpayments", {
            "payment_date": "2024-03-05",
            "payment_for": "contract",
            "client_id": customer["id"],
            "contract_id": contract["id"],
            "payment_number": "ignored",
        }).json()
        assert created["payment_number"].startswith("REG-")

        resp = send_form(client, "PUT", f"/api/v1/clientpayments/{created['id']}",
                         {"payment_number": "REG-2020-099"})
        assert resp.status_code == 200
        assert resp.json()["payment_number"] == "REG-2020-099"


class TestFacturesApi:
    def test_invoice_number(self, client, customer):
        resp = client.post("/api/v1/factures", json={
            "invoice_date": "2024-03-31",
            "client_id": customer["id"],
            "montant_ht": 1000,
            "total_ttc": 1200,
        })
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["invoice_number"].startswith("INV-")
        assert body["invoice_number"][4:].isdigit()
        assert body["status"] == "Pending"
        assert body["client"]["nom_fr"] == "Alaoui"

    def test_missing_client(self, client):
        resp = client.post("/api/v1/factures", json={"invoice_date": "2024-03-31", "client_id": "nope"})
        assert resp.status_code == 400

    def test_update_and_delete(self, client, customer):
        created = client.post("/api/v1/factures", json={
            "invoice_date": "2024-03-31", "client_id": customer["id"],
        }).json()
        resp = client.put(f"/api/v1/factures/{created['id']}", json={"status": "Paid", "amount_paid": 1200})
        assert resp.json()["status"] == "Paid"
        assert client.delete(f"/api/v1/factures/{created['id']}").json()["status"] == "removed"
        assert client.get(f"/api/v1/factures/{created['id']}").status_code == 404
