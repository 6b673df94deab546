"""Document - flat JSON-like mapping exchanged with repository callers."""

from datetime import datetime
from typing import Any

OBJECT_ID = "oId"
"""Reserved document key holding the object identifier."""

Document = dict[str, Any]

SUPPORTED_TYPES: frozenset[type] = frozenset(
    {str, int, float, bool, datetime, bytes}
)
"""Exact value types a document field may hold."""
