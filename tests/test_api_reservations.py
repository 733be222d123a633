# tests/test_api_reservations.py
"""Reservation endpoints: numbering and status normalization."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest


@pytest.fixture
def reservation_body(customer, vehicle):
    return {
        "customer_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "reservation_date": "2024-03-05",
        "start_date": "2024-03-10",
        "end_date": "2024-03-12",
        "total_amount": 600,
    }


class TestReservationsApi:
    def test_numbers_and_alias_status(self, client, reservation_body):
        first = client.post("/api/v1/reservations", json={**reservation_body, "status": "Confirmed"})
        assert first.status_code == 201, first.text
        assert first.json()["reservation_number"] == "RES-0001"
        assert first.json()["status"] == "validee"

        second = client.post("/api/v1/reservations", json=reservation_body)
        assert second.json()["reservation_number"] == "RES-0002"
        assert second.json()["status"] == "en_cours"

    def test_unknown_status_on_create_uses_default(self, client, reservation_body):
        resp = client.post("/api/v1/reservations", json={**reservation_body, "status": "peut-être"})
        assert resp.status_code == 201
        assert resp.json()["status"] == "en_cours"

    def test_unknown_status_on_update_is_ignored(self, client, reservation_body):
        created = client.post("/api/v1/reservations", json={**reservation_body, "status": "validee"}).json()
        resp = client.put(f"/api/v1/reservations/{created['id']}", json={"status": "bogus", "notes": "rappel"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "validee"
        assert resp.json()["notes"] == "rappel"

        resp = client.put(f"/api/v1/reservations/{created['id']}", json={"status": "cancelled"})
        assert resp.json()["status"] == "annulee"

    def test_missing_vehicle(self, client, reservation_body):
        resp = client.post("/api/v1/reservations", json={**reservation_body, "vehicle_id": "nope"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Vehicle not found"

    def test_filter_by_status(self, client, reservation_body):
        client.post("/api/v1/reservations", json={**reservation_body, "status": "validee"})
        client.post("/api/v1/reservations", json=reservation_body)
        resp = client.get("/api/v1/reservations", params={"status": "confirmed"})
        assert [r["status"] for r in resp.json()] == ["validee"]

    def test_nested_summaries(self, client, reservation_body):
        created = client.post("/api/v1/reservations", json=reservation_body).json()
        body = client.get(f"/api/v1/reservations/{created['id']}").json()
        assert body["customer"]["prenom_fr"] == "Sara"
        assert body["vehicle"]["brand"] == "Dacia"
