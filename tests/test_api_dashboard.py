# tests/test_api_dashboard.py
"""Dashboard endpoints over real rows."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from conftest import pdf, send_form


def reserve(client, customer, vehicle, amount, status):
    resp = client.post("/api/v1/reservations", json={
        "customer_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "reservation_date": "2024-03-10",
        "start_date": "2024-03-12",
        "end_date": "2024-03-14",
        "total_amount": amount,
        "status": status,
    })
    assert resp.status_code == 201, resp.text


class TestDashboardApi:
    def test_monthly_revenue_counts_validated_reservations(self, client, customer, vehicle):
        reserve(client, customer, vehicle, 1000, "validee")
        reserve(client, customer, vehicle, 500, "validated")
        reserve(client, customer, vehicle, 700, "en_cours")

        resp = client.get("/api/v1/dashboard/monthly", params={"year": 2024})
        assert resp.status_code == 200
        body = resp.json()
        assert body["year"] == 2024
        assert body["recettes"][2] == 1500
        assert body["total_recettes"] == 1500
        assert len(body["depenses"]) == 12

    def test_monthly_expenses(self, client, vehicle):
        send_form(client, "POST", "/api/v1/traites",
                  {"vehicle_id": vehicle["id"], "mois": 2, "annee": 2024, "montant": 2500,
                   "date_paiement": "2024-02-10"})
        resp = client.get("/api/v1/dashboard/monthly", params={"year": 2024})
        assert resp.json()["depenses"][1] == 2500
        assert resp.json()["total_depenses"] == 2500

    def test_alerts_for_uncovered_vehicle(self, client, vehicle):
        resp = client.get("/api/v1/dashboard/alerts")
        assert resp.status_code == 200
        types = sorted(a["alert_type"] for a in resp.json() if a["vehicle_id"] == vehicle["id"])
        assert types == ["missing_inspection", "missing_insurance"]

        resp = client.get("/api/v1/dashboard/alerts", params={"alert_type": "missing_insurance"})
        assert [a["alert_type"] for a in resp.json()] == ["missing_insurance"]

    def test_summary(self, client, customer, vehicle):
        resp = client.get("/api/v1/dashboard/summary")
        assert resp.status_code == 200
        body = resp.json()
        assert body["vehicles"] == 1
        assert body["active_customers"] == 1
        assert body["alerts"] == 2


class TestHealthApi:
    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["database"] == "ok"
        assert body["uploads"] == "ok"
        assert body["status"] == "ok"

    def test_app_upload_dir_is_used_everywhere(self, tmp_path, upload_dir):
        other = tmp_path / "other"
        application = create_app(Settings(DATABASE_URL="sqlite://", UPLOAD_DIR=str(other),
                                          AUTH_REQUIRED=False))
        application.state.db.create_tables()
        try:
            client = TestClient(application)
            assert client.get("/api/v1/health").json()["uploads"] == "ok"

            resp = send_form(client, "POST", "/api/v1/charges", {"name": "Lavage", "amount": 80},
                             files=[("attachments", pdf("recu.pdf"))])
            assert resp.status_code == 201, resp.text
            url = resp.json()["attachments"][0]["url"]
            assert url.startswith(str(other).replace("\\", "/") + "/")
            assert client.get("/uploads/" + os.path.relpath(url, str(other)).replace("\\", "/")).status_code == 200
            assert not upload_dir.exists()
        finally:
            application.state.db.drop_tables()
            application.state.db.dispose()
