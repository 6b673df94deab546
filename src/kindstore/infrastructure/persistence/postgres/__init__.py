"""PostgreSQL entity store."""

from kindstore.infrastructure.persistence.postgres.connection import create_pool
from kindstore.infrastructure.persistence.postgres.entity_store import PostgresEntityStore

__all__ = ["PostgresEntityStore", "create_pool"]
