"""Application ports - interfaces for external adapters."""

from kindstore.application.ports.entity_store import EntityStore
from kindstore.application.ports.id_generator import IdGenerator
from kindstore.application.ports.query_augmenter import QueryAugmenter

__all__ = [
    "EntityStore",
    "IdGenerator",
    "QueryAugmenter",
]
