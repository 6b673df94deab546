"""In-memory entity store."""

from kindstore.infrastructure.persistence.memory.entity_store import InMemoryEntityStore

__all__ = ["InMemoryEntityStore"]
