# tests/test_api_operations.py
"""Accidents, charges and interventions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from conftest import pdf, send_form


@pytest.fixture
def contract(client, customer, vehicle):
    resp = send_form(client, "POST", "/api/v1/contracts", {
        "client_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "contract_date": "2024-05-01",
        "departure_date": "2024-05-01",
        "return_date": "2024-05-04",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestAccidentsApi:
    def test_fields_copied_from_contract(self, client, contract, customer, vehicle):
        resp = send_form(client, "POST", "/api/v1/accidents", {
            "contract_id": contract["id"],
            "date_accident": "2024-05-02",
            "lieu_accident": "Autoroute A1",
        }, files=[("attachments", pdf("constat.pdf"))])
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["numero_contrat"] == contract["contract_number"]
        assert body["client_id"] == customer["id"]
        assert body["client_nom"] == "Alaoui Sara"
        assert body["vehicle_id"] == vehicle["id"]
        assert body["matricule"] == vehicle["license_plate"]
        assert body["date_sortie"] == "2024-05-01"
        assert body["etat"] == "expertise"
        assert [d["name"] for d in body["documents"]] == ["constat.pdf"]

    def test_unknown_contract(self, client):
        resp = send_form(client, "POST", "/api/v1/accidents",
                         {"contract_id": "nope", "date_accident": "2024-05-02"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Contract not found"

    def test_delete_removes_files(self, client, contract):
        created = send_form(client, "POST", "/api/v1/accidents", {
            "contract_id": contract["id"], "date_accident": "2024-05-02",
        }, files=[("attachments", pdf("constat.pdf"))]).json()
        url = created["documents"][0]["url"]
        assert client.delete(f"/api/v1/accidents/{created['id']}").status_code == 200
        assert not os.path.exists(url)


class TestChargesApi:
    def test_front_office_field_names(self, client):
        resp = send_form(client, "POST", "/api/v1/charges",
                         {"motif": "Lavage", "montant": 80, "observation": "Mensuel"})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["name"] == "Lavage"
        assert body["amount"] == 80
        assert body["motif"] == "Lavage"
        assert body["montant"] == 80
        assert body["observation"] == "Mensuel"

    def test_stored_field_names_on_update(self, client):
        created = send_form(client, "POST", "/api/v1/charges", {"name": "Loyer", "amount": 4000}).json()
        resp = send_form(client, "PUT", f"/api/v1/charges/{created['id']}", {"montant": 4200})
        assert resp.json()["amount"] == 4200
        assert resp.json()["name"] == "Loyer"

    def test_missing_amount(self, client):
        assert send_form(client, "POST", "/api/v1/charges", {"motif": "Lavage"}).status_code == 422


class TestInterventionsApi:
    def test_planned_intervention_clears_maintenance_alert(self, client):
        vehicle = send_form(client, "POST", "/api/v1/vehicles", {
            "chassis_number": "VF1BBB", "license_plate": "9-D-9",
            "brand": "Peugeot", "model": "208", "mileage": 19900,
        }).json()

        def maintenance_alerts():
            alerts = client.get("/api/v1/dashboard/alerts", params={"alert_type": "maintenance_due"}).json()
            return [a for a in alerts if a["vehicle_id"] == vehicle["id"]]

        assert [a["next_threshold"] for a in maintenance_alerts()] == [20000]

        resp = send_form(client, "POST", "/api/v1/interventions", {
            "vehicle_id": vehicle["id"],
            "description": "Vidange",
            "date": "2024-06-01",
            "cost": 650,
            "type": "Entretien",
            "current_mileage": 19900,
            "next_mileage": 30000,
        })
        assert resp.status_code == 201, resp.text
        assert maintenance_alerts() == []

    def test_missing_vehicle(self, client):
        resp = send_form(client, "POST", "/api/v1/interventions", {
            "vehicle_id": "nope", "description": "Vidange", "date": "2024-06-01",
            "cost": 650, "type": "Entretien",
        })
        assert resp.status_code == 400
