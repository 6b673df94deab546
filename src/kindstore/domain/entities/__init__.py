"""Domain entities."""

from kindstore.domain.entities.document import OBJECT_ID, SUPPORTED_TYPES, Document
from kindstore.domain.entities.entity import Entity
from kindstore.domain.entities.envelope import Envelope, Pagination
from kindstore.domain.entities.key import Key

__all__ = [
    "OBJECT_ID",
    "SUPPORTED_TYPES",
    "Document",
    "Entity",
    "Envelope",
    "Key",
    "Pagination",
]
