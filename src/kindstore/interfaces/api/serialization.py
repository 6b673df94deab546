"""JSON wire format of documents and query criteria."""

import base64
import json
from datetime import datetime
from typing import Any

from kindstore.domain.entities import Document
from kindstore.domain.exceptions import ValidationError
from kindstore.domain.value_objects import Filter, SortSpec


def document_to_media(document: Document) -> dict[str, Any]:
    """JSON-safe copy: datetimes as ISO-8601, bytes as base64."""
    media: dict[str, Any] = {}
    for key, value in document.items():
        if isinstance(value, datetime):
            media[key] = value.isoformat()
        elif isinstance(value, bytes):
            media[key] = base64.b64encode(value).decode("ascii")
        else:
            media[key] = value
    return media


def media_to_document(media: object) -> Document:
    if not isinstance(media, dict):
        raise ValidationError("Document body must be a JSON object")
    return dict(media)


def parse_int(raw: str | None, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter [{name}] must be an integer") from None


def parse_sorts(raw: list[str] | None) -> list[SortSpec]:
    """Parse repeated sort=key:asc|desc parameters, keeping their order."""
    sorts: list[SortSpec] = []
    for item in raw or []:
        key, _, direction = item.rpartition(":")
        if not key:
            key, direction = direction, "asc"
        direction = {"asc": "ASCENDING", "desc": "DESCENDING"}.get(direction.lower(), direction)
        sorts.append(SortSpec(key, direction))
    return sorts


def _filter_value(raw: str) -> object:
    # JSON scalars keep their type (5, 1.5, true, "5"); anything else is a string.
    try:
        value = json.loads(raw)
    except ValueError:
        return raw
    return value if isinstance(value, (str, int, float, bool)) else raw


def parse_filters(raw: list[str] | None) -> list[Filter]:
    """Parse repeated filter=key:OPERATOR:value parameters."""
    filters: list[Filter] = []
    for item in raw or []:
        parts = item.split(":", 2)
        if len(parts) != 3 or not parts[0]:
            raise ValidationError(f"Filter [{item}] must look like key:OPERATOR:value")
        key, operator, value = parts
        filters.append(Filter(key, operator.upper(), _filter_value(value)))
    return filters
