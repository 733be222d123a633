# app/utils/forms.py
"""
Multipart helpers for upload-capable endpoints.

Create/update requests that carry files send the entity body as a JSON
string in a form field named `data`, next to the file field(s) and the
keep-list field.
"""

import json
from typing import Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_form_json(raw: Optional[str], schema: Type[ModelT]) -> ModelT:
    """Validate the `data` form field against `schema`. Errors → 422."""
    try:
        payload = json.loads(raw) if raw else {}
    except ValueError:
        raise HTTPException(status_code=422, detail="Field 'data' must be a JSON object")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=422, detail="Field 'data' must be a JSON object")
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json(include_url=False)))
