# tests/test_api_vehicles.py
"""Vehicle endpoints: plate lookup, updates, delete with detach."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conftest import pdf, send_form


class TestVehiclesApi:
    def test_defaults(self, vehicle):
        assert vehicle["statut"] == "En parc"
        assert vehicle["fuel_type"] == "essence"
        assert vehicle["mileage"] == 42000

    def test_lookup_by_plate(self, client, vehicle):
        resp = client.get(f"/api/v1/vehicles/lookup/{vehicle['license_plate']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == vehicle["id"]
        assert client.get("/api/v1/vehicles/lookup/0-X-0").status_code == 404

    def test_update_keeps_documents_when_keep_list_omitted(self, client):
        resp = send_form(client, "POST", "/api/v1/vehicles", {
            "chassis_number": "VF1AAA", "license_plate": "1-B-2", "brand": "Renault", "model": "Clio",
        }, files=[("documents", pdf("carte_grise.pdf"))])
        created = resp.json()
        resp = send_form(client, "PUT", f"/api/v1/vehicles/{created['id']}",
                         {"mileage": 50500, "statut": "En circulation"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["mileage"] == 50500
        assert body["statut"] == "En circulation"
        assert [d["name"] for d in body["documents"]] == ["carte_grise.pdf"]

    def test_duplicate_plate(self, client, vehicle):
        resp = send_form(client, "POST", "/api/v1/vehicles", {
            "chassis_number": "OTHER", "license_plate": vehicle["license_plate"],
            "brand": "Dacia", "model": "Sandero",
        })
        assert resp.status_code == 400

    def test_rejected_upload_leaves_no_files(self, client, upload_dir):
        resp = send_form(client, "POST", "/api/v1/vehicles", {
            "chassis_number": "VF1BBB", "license_plate": "2-C-3", "brand": "Renault", "model": "Clio",
        }, files=[("documents", pdf("a.pdf")),
                  ("documents", ("evil.exe", b"MZ", "application/octet-stream"))])
        assert resp.status_code == 400
        vehicles_dir = upload_dir / "vehicles"
        assert not vehicles_dir.exists() or list(vehicles_dir.glob("*")) == []
        assert client.get("/api/v1/vehicles").json() == []

    def test_failed_commit_removes_uploaded_files(self, client, vehicle, upload_dir):
        resp = send_form(client, "POST", "/api/v1/vehicles", {
            "chassis_number": "OTHER", "license_plate": vehicle["license_plate"],
            "brand": "Dacia", "model": "Sandero",
        }, files=[("documents", pdf("carte_grise.pdf"))])
        assert resp.status_code == 400
        vehicles_dir = upload_dir / "vehicles"
        assert not vehicles_dir.exists() or list(vehicles_dir.glob("*")) == []

    def test_update_rejects_null_on_required_column(self, client, vehicle):
        resp = send_form(client, "PUT", f"/api/v1/vehicles/{vehicle['id']}", {"mileage": None})
        assert resp.status_code == 422
        assert client.get(f"/api/v1/vehicles/{vehicle['id']}").json()["mileage"] == 42000

    def test_update_accepts_null_on_optional_column(self, client, vehicle):
        resp = send_form(client, "PUT", f"/api/v1/vehicles/{vehicle['id']}", {"color": None})
        assert resp.status_code == 200

    def test_delete_detaches_inspections(self, client, vehicle):
        resp = send_form(client, "POST", "/api/v1/vehicleinspections", {
            "vehicle_id": vehicle["id"],
            "inspection_date": "2024-01-15",
            "inspector_name": "Centre Agdal",
            "results": "Favorable",
            "end_date": "2025-01-15",
        })
        assert resp.status_code == 201, resp.text
        inspection_id = resp.json()["id"]

        resp = client.delete(f"/api/v1/vehicles/{vehicle['id']}")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "removed"
        assert body["detached"]["vehicle_inspections"] == 1

        assert client.get(f"/api/v1/vehicles/{vehicle['id']}").status_code == 404
        inspection = client.get(f"/api/v1/vehicleinspections/{inspection_id}").json()
        assert inspection["vehicle_id"] is None
        assert inspection["vehicle"] is None
