# app/services/documents.py
"""
Document attachment collections.

Every entity stores its attachments as an ordered JSON list of
{name, type, size, url}. An update is always

    final = (existing entries the caller kept) ++ (new uploads)

never a blind overwrite. Entities differ in which field they match on
(url or name) and in what an omitted keep-list means; routers pass
those choices in.
"""

import json
from typing import Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)


def _normalize(value, key: str):
    if value is None:
        return None
    value = str(value)
    if key == "url":
        value = value.replace("\\", "/")
    return value


def _key_of(entry, key: str):
    if isinstance(entry, dict):
        return _normalize(entry.get(key), key)
    return _normalize(entry, key)


def parse_retained(raw: Optional[str]) -> Optional[list]:
    """
    Decode a multipart keep-list field.
    Accepts a JSON list (of strings or document dicts), a JSON string,
    or a bare string. Returns None when the field was not sent.
    """
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return [raw] if raw.strip() else []
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def merge_documents(existing: Optional[list], retained: Optional[list],
                    uploaded: Optional[list], key: str = "url") -> list:
    """
    Existing entries whose `key` is in `retained` (original order kept),
    followed by the uploaded entries in upload order.
    """
    keep = {_key_of(r, key) for r in (retained or [])}
    keep.discard(None)
    kept = [doc for doc in (existing or []) if _key_of(doc, key) in keep]
    return kept + list(uploaded or [])


def apply_document_update(existing: Optional[list], raw_keep_list: Optional[str],
                          uploaded: Optional[list], key: str = "url",
                          keep_all_when_omitted: bool = False) -> list:
    """
    Merge for an update request. When the keep-list field was not sent,
    either every existing entry is kept or none is.
    """
    retained = parse_retained(raw_keep_list)
    if retained is None:
        retained = list(existing or []) if keep_all_when_omitted else []
    merged = merge_documents(existing, retained, uploaded, key)
    logger.debug(f"[DOCS] {len(existing or [])} existing, {len(uploaded or [])} uploaded → {len(merged)}")
    return merged


def drop_documents(existing: Optional[list], dropped: Optional[list], key: str = "url"):
    """Inverse of merge: remove the listed entries. Returns (remaining, removed)."""
    drop = {_key_of(d, key) for d in (dropped or [])}
    remaining, removed = [], []
    for doc in existing or []:
        (removed if _key_of(doc, key) in drop else remaining).append(doc)
    return remaining, removed


def remove_document(documents: Optional[list], value: str, key: str = "url"):
    """
    Remove the single entry whose `key` exactly equals `value`.
    Returns (remaining, removed); removed is None when nothing matched.
    """
    target = _normalize(value, key)
    remaining = []
    removed = None
    for doc in documents or []:
        if removed is None and _key_of(doc, key) == target:
            removed = doc
            continue
        remaining.append(doc)
    return remaining, removed
