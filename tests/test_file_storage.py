# tests/test_file_storage.py
"""Unit tests for attachment storage."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from app.services.file_storage import FileIntake, delete_stored_file, delete_stored_files


def upload(name="scan.pdf", content=b"%PDF-1.4", content_type="application/pdf"):
    return UploadFile(file=io.BytesIO(content), filename=name,
                      headers=Headers({"content-type": content_type}))


class TestFileIntake:
    def test_save_writes_file_and_returns_record(self, upload_dir):
        record = FileIntake("contracts").save(upload())
        assert record["name"] == "scan.pdf"
        assert record["type"] == "application/pdf"
        assert record["size"] == len(b"%PDF-1.4")
        assert record["url"].startswith(str(upload_dir).replace("\\", "/") + "/contracts/")
        assert record["url"].endswith("-scan.pdf")
        with open(record["url"], "rb") as f:
            assert f.read() == b"%PDF-1.4"

    def test_rejects_extension(self, upload_dir):
        with pytest.raises(HTTPException) as exc:
            FileIntake("contracts").save(upload("virus.exe"))
        assert exc.value.status_code == 400

    def test_entity_specific_extensions(self, upload_dir):
        intake = FileIntake("traites", allowed_extensions=["jpg", "jpeg", "png", "pdf"])
        with pytest.raises(HTTPException):
            intake.save(upload("table.xlsx"))
        assert intake.save(upload("photo.JPG"))["name"] == "photo.JPG"

    def test_rejects_oversized(self, upload_dir):
        with pytest.raises(HTTPException) as exc:
            FileIntake("charges", max_bytes=4).save(upload(content=b"12345"))
        assert exc.value.status_code == 400

    def test_save_all_keeps_order_and_limits_count(self, upload_dir):
        intake = FileIntake("infractions", max_files=2)
        records = intake.save_all([upload("a.pdf"), upload("b.pdf")])
        assert [r["name"] for r in records] == ["a.pdf", "b.pdf"]
        with pytest.raises(HTTPException):
            intake.save_all([upload("a.pdf"), upload("b.pdf"), upload("c.pdf")])

    def test_save_all_none(self, upload_dir):
        assert FileIntake("charges").save_all(None) == []

    def test_save_all_writes_nothing_when_one_file_is_rejected(self, upload_dir):
        with pytest.raises(HTTPException) as exc:
            FileIntake("vehicles").save_all([upload("a.pdf"), upload("evil.exe")])
        assert exc.value.status_code == 400
        assert "evil.exe" in exc.value.detail
        assert not upload_dir.exists() or list(upload_dir.rglob("*.*")) == []

    def test_save_all_into_given_root(self, tmp_path, upload_dir):
        other = tmp_path / "other"
        records = FileIntake("charges").save_all([upload("a.pdf")], str(other))
        assert records[0]["url"].startswith(str(other).replace("\\", "/") + "/charges/")
        assert os.path.exists(records[0]["url"])


class TestDeleteStoredFile:
    def test_removes_file(self, upload_dir):
        record = FileIntake("customers").save(upload())
        assert delete_stored_file(record["url"]) is True
        assert not os.path.exists(record["url"])

    def test_missing_file_is_not_an_error(self, upload_dir):
        assert delete_stored_file(str(upload_dir / "nope.pdf")) is False
        assert delete_stored_file(None) is False

    def test_delete_many(self, upload_dir):
        intake = FileIntake("customers")
        docs = [intake.save(upload("a.pdf")), intake.save(upload("b.pdf"))]
        assert delete_stored_files(docs + [{"url": "gone.pdf"}]) == 2
