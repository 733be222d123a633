# tests/test_documents.py
"""Unit tests for document collection merge / removal."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.services.documents import (
    apply_document_update, drop_documents, merge_documents, parse_retained, remove_document,
)


def doc(name):
    return {"name": f"{name}.pdf", "type": "application/pdf", "size": 10, "url": f"uploads/x/{name}.pdf"}


A, B, C, D = doc("a"), doc("b"), doc("c"), doc("d")


class TestMergeDocuments:
    def test_retained_then_uploaded(self):
        assert merge_documents([A, B, C], [A["url"], C["url"]], [D]) == [A, C, D]

    def test_keeps_original_order_not_retain_order(self):
        assert merge_documents([A, B, C], [C["url"], A["url"]], []) == [A, C]

    def test_retain_by_document_dict(self):
        assert merge_documents([A, B], [B], []) == [B]

    def test_retain_by_name(self):
        assert merge_documents([A, B], ["b.pdf"], [D], key="name") == [B, D]

    def test_backslash_urls_match(self):
        assert merge_documents([A], ["uploads\\x\\a.pdf"], []) == [A]

    def test_nothing_retained(self):
        assert merge_documents([A, B], [], [D]) == [D]


class TestParseRetained:
    def test_omitted(self):
        assert parse_retained(None) is None

    def test_json_list(self):
        assert parse_retained('["u1", "u2"]') == ["u1", "u2"]

    def test_json_string(self):
        assert parse_retained('"u1"') == ["u1"]

    def test_bare_string(self):
        assert parse_retained("uploads/x/a.pdf") == ["uploads/x/a.pdf"]

    def test_empty(self):
        assert parse_retained("") == []
        assert parse_retained("[]") == []


class TestApplyDocumentUpdate:
    def test_omitted_keep_list_drops_all(self):
        assert apply_document_update([A, B], None, [D]) == [D]

    def test_omitted_keep_list_keeps_all(self):
        assert apply_document_update([A, B], None, [D], keep_all_when_omitted=True) == [A, B, D]

    def test_explicit_keep_list(self):
        assert apply_document_update([A, B, C], f'["{B["url"]}"]', []) == [B]


class TestRemoval:
    def test_remove_by_url(self):
        remaining, removed = remove_document([A, B, C], B["url"])
        assert remaining == [A, C]
        assert removed == B

    def test_remove_by_name(self):
        remaining, removed = remove_document([A, B], "a.pdf", key="name")
        assert remaining == [B]
        assert removed == A

    def test_no_match(self):
        remaining, removed = remove_document([A], "uploads/x/zzz.pdf")
        assert remaining == [A]
        assert removed is None

    def test_drop_list(self):
        remaining, removed = drop_documents([A, B, C], [A["url"], C["url"]])
        assert remaining == [B]
        assert removed == [A, C]
