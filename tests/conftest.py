# tests/conftest.py
"""
Shared fixtures: a fresh app per test on an in-memory SQLite database,
with uploads written under pytest's tmp_path.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import create_app


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture
def app(upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")
    monkeypatch.setattr(settings, "AUTH_REQUIRED", False)
    application = create_app(settings)
    application.state.db.create_tables()
    yield application
    application.state.db.drop_tables()
    application.state.db.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


def send_form(client, method, url, data=None, files=None, **fields):
    """Multipart/form request following the `data` JSON field convention."""
    form = {"data": json.dumps(data or {})}
    form.update(fields)
    return client.request(method, url, data=form, files=files)


def pdf(name="scan.pdf", content=b"%PDF-1.4 test"):
    return (name, content, "application/pdf")


@pytest.fixture
def customer(client):
    resp = send_form(client, "POST", "/api/v1/customers",
                     {"nom_fr": "Alaoui", "prenom_fr": "Sara", "cin": "AB12345"})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def vehicle(client):
    resp = send_form(client, "POST", "/api/v1/vehicles", {
        "chassis_number": "VF1RFB00012345678",
        "license_plate": "12345-A-6",
        "brand": "Dacia",
        "model": "Logan",
        "mileage": 42000,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
