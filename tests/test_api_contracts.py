# tests/test_api_contracts.py
"""Contract endpoints: numbering, second driver, documents."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest

from conftest import pdf, send_form


@pytest.fixture
def contract_body(customer, vehicle):
    return {
        "client_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "contract_date": "2024-03-01",
        "departure_date": "2024-03-01",
        "return_date": "2024-03-08",
        "duration": 7,
        "price_per_day": 300,
    }


class TestContractsApi:
    def test_sequential_numbers(self, client, contract_body):
        first = send_form(client, "POST", "/api/v1/contracts", contract_body)
        second = send_form(client, "POST", "/api/v1/contracts", contract_body)
        assert first.status_code == 201, first.text
        assert first.json()["contract_number"] == "Noc-00001"
        assert second.json()["contract_number"] == "Noc-00002"

    def test_matricule_defaults_to_plate(self, client, contract_body, vehicle):
        resp = send_form(client, "POST", "/api/v1/contracts", contract_body)
        body = resp.json()
        assert body["matricule"] == vehicle["license_plate"]
        assert body["client"]["nom_fr"] == "Alaoui"
        assert body["vehicle"]["license_plate"] == vehicle["license_plate"]

    def test_blank_second_driver_is_null(self, client, contract_body):
        contract_body["second_driver"] = {"nom": "", "telephone": "  "}
        resp = send_form(client, "POST", "/api/v1/contracts", contract_body)
        assert resp.status_code == 201
        assert resp.json()["second_driver"] is None

    def test_update_without_second_driver_clears_it(self, client, contract_body):
        contract_body["second_driver"] = {"nom": "Karim", "permis_numero": "P-1"}
        created = send_form(client, "POST", "/api/v1/contracts", contract_body).json()
        assert created["second_driver"]["nom"] == "Karim"

        resp = send_form(client, "PUT", f"/api/v1/contracts/{created['id']}", {"status": "retournee"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "retournee"
        assert resp.json()["second_driver"] is None

    def test_missing_customer_is_rejected(self, client, contract_body):
        contract_body["client_id"] = "nope"
        resp = send_form(client, "POST", "/api/v1/contracts", contract_body)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Customer not found"
        assert client.get("/api/v1/contracts").json() == []

    def test_documents_kept_when_keep_list_omitted(self, client, contract_body):
        created = send_form(client, "POST", "/api/v1/contracts", contract_body,
                            files=[("documents", pdf("contrat.pdf"))]).json()
        resp = send_form(client, "PUT", f"/api/v1/contracts/{created['id']}", {},
                         files=[("documents", pdf("avenant.pdf"))])
        assert [d["name"] for d in resp.json()["pieces_jointes"]] == ["contrat.pdf", "avenant.pdf"]

    def test_keep_list_selects_documents(self, client, contract_body):
        created = send_form(client, "POST", "/api/v1/contracts", contract_body,
                            files=[("documents", pdf("a.pdf")), ("documents", pdf("b.pdf"))]).json()
        doc_b = created["pieces_jointes"][1]
        resp = send_form(client, "PUT", f"/api/v1/contracts/{created['id']}", {},
                         existing_documents=json.dumps([doc_b]))
        assert [d["name"] for d in resp.json()["pieces_jointes"]] == ["b.pdf"]

    def test_delete_single_document(self, client, contract_body):
        created = send_form(client, "POST", "/api/v1/contracts", contract_body,
                            files=[("documents", pdf("contrat.pdf"))]).json()
        url = created["pieces_jointes"][0]["url"]

        resp = client.delete(f"/api/v1/contracts/{created['id']}/documents", params={"url": url})
        assert resp.status_code == 200
        assert resp.json()["pieces_jointes"] == []
        assert not os.path.exists(url)

        resp = client.delete(f"/api/v1/contracts/{created['id']}/documents", params={"url": url})
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Document not found"

    def test_delete_contract(self, client, contract_body):
        created = send_form(client, "POST", "/api/v1/contracts", contract_body).json()
        resp = client.delete(f"/api/v1/contracts/{created['id']}")
        assert resp.json() == {"status": "removed", "id": created["id"]}
        assert client.get(f"/api/v1/contracts/{created['id']}").status_code == 404
