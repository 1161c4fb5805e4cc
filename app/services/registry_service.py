# app/services/registry_service.py
# Section type lookup + per-type JSON Schema validation of PageSection.data
from __future__ import annotations
import json
from typing import Any, Dict, List, Union

from jsonschema import Draft202012Validator

from app.content_registry import SectionMeta, section_registry
from app.core.errors import SchemaError, ValidationError


def list_section_types() -> List[SectionMeta]:
    return section_registry.all()


def require_section_type(key: str) -> SectionMeta:
    meta = section_registry.get(key)
    if not meta:
        allowed = ", ".join(section_registry.keys())
        raise ValidationError(
            f"Unknown section type '{key}'",
            errors={"type": f"must be one of: {allowed}"},
        )
    return meta


def parse_section_data(text: str) -> Dict[str, Any]:
    """
    Parse-before-save for the admin JSON editor.
    Blank text is an empty object; anything that is not a JSON object is rejected.
    """
    if text is None or not text.strip():
        return {}
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}")
    if not isinstance(value, dict):
        raise SchemaError("Section data must be a JSON object")
    return value


def validate_section_data(section_type: str, data: Union[Dict[str, Any], str, None]) -> Dict[str, Any]:
    """
    Returns the data as a dict, validated against the type's schema.
    Raises SchemaError on the first violation (sorted by path, stable across runs).
    """
    meta = require_section_type(section_type)
    if isinstance(data, str):
        data = parse_section_data(data)
    elif data is None:
        data = {}

    validator = Draft202012Validator(meta.schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path)))
    if errors:
        e = errors[0]
        path = ".".join([str(p) for p in e.path])
        raise SchemaError(f"JSON Schema validation error at '{path}': {e.message}", path=path)
    return data
