"""PostgreSQL entity store implementation."""

from collections.abc import Iterator

from psycopg import Connection
from psycopg_pool import ConnectionPool

from kindstore.application.query.compiled import CompiledQuery
from kindstore.domain.entities import Entity, Key
from kindstore.infrastructure.persistence.postgres.query_builder import (
    PROPERTY_COLUMNS,
    PostgresQuery,
    build_query,
    decode_value,
    encode_value,
)

_INSERT_PROPERTY = (
    "INSERT INTO entity_property (kind, parent, name, key, "
    + ", ".join(PROPERTY_COLUMNS)
    + ") VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)"
)

_SELECT_PROPERTIES = (
    "SELECT name, key, "
    + ", ".join(PROPERTY_COLUMNS)
    + " FROM entity_property WHERE kind = %s AND parent = %s AND name = ANY(%s)"
)


class PostgresEntityStore:
    """Entity store over the entity / entity_property tables.

    Each entity is one row in entity plus one typed row per property.
    Query semantics follow the in-memory store: missing or large-text
    properties never match filters and drop out of sorts.
    """

    def __init__(self, pool: ConnectionPool, scan_batch_size: int = 500) -> None:
        self._pool = pool
        self._scan_batch_size = scan_batch_size

    def put(self, entity: Entity) -> None:
        """Replace the entity and all of its properties in one transaction."""
        key = entity.key
        parent = _encode(key.parent)
        with self._pool.connection() as conn, conn.transaction():
            conn.execute(
                "INSERT INTO entity (kind, parent, name) VALUES (%s, %s, %s) "
                "ON CONFLICT DO NOTHING",
                (key.kind, parent, key.name),
            )
            conn.execute(
                "DELETE FROM entity_property WHERE kind = %s AND parent = %s AND name = %s",
                (key.kind, parent, key.name),
            )
            rows = [
                (key.kind, parent, key.name, prop, *encode_value(value))
                for prop, value in entity.properties.items()
            ]
            if rows:
                with conn.cursor() as cur:
                    cur.executemany(_INSERT_PROPERTY, rows)

    def get(self, key: Key) -> Entity | None:
        with self._pool.connection() as conn:
            cur = conn.execute(
                "SELECT 1 FROM entity WHERE kind = %s AND parent = %s AND name = %s",
                (key.kind, _encode(key.parent), key.name),
            )
            if cur.fetchone() is None:
                return None
            return self._load(conn, key.kind, key.parent, [key.name])[0]

    def delete(self, key: Key) -> None:
        with self._pool.connection() as conn:
            conn.execute(
                "DELETE FROM entity WHERE kind = %s AND parent = %s AND name = %s",
                (key.kind, _encode(key.parent), key.name),
            )

    def prepare_query(self, query: CompiledQuery) -> tuple[CompiledQuery, PostgresQuery]:
        return query, build_query(query, _encode(query.parent))

    def count(self, handle: tuple[CompiledQuery, PostgresQuery]) -> int:
        _, prepared = handle
        sql, params = prepared.count_sql()
        with self._pool.connection() as conn:
            return conn.execute(sql, params).fetchone()[0]

    def fetch_page(
        self, handle: tuple[CompiledQuery, PostgresQuery], offset: int, limit: int
    ) -> list[Entity]:
        query, prepared = handle
        sql, params = prepared.page_sql(offset, limit)
        with self._pool.connection() as conn:
            names = [r[0] for r in conn.execute(sql, params).fetchall()]
            return self._load(conn, query.kind, query.parent, names)

    def scan_all(self, kind: str, parent: Key | None = None) -> Iterator[Entity]:
        """Yield every entity of the kind in name order, loading in batches."""
        encoded = _encode(parent)
        with self._pool.connection() as conn:
            names = [
                r[0]
                for r in conn.execute(
                    "SELECT name FROM entity WHERE kind = %s AND parent = %s ORDER BY name COLLATE \"C\"",
                    (kind, encoded),
                ).fetchall()
            ]
        for start in range(0, len(names), self._scan_batch_size):
            batch = names[start : start + self._scan_batch_size]
            with self._pool.connection() as conn:
                entities = self._load(conn, kind, parent, batch)
            yield from entities

    def _load(
        self, conn: Connection, kind: str, parent: Key | None, names: list[str]
    ) -> list[Entity]:
        """Entities for names, in the given order."""
        if not names:
            return []
        encoded = _encode(parent)
        properties: dict[str, dict[str, object]] = {}
        cur = conn.execute(_SELECT_PROPERTIES, (kind, encoded, names))
        for row in cur.fetchall():
            properties.setdefault(row[0], {})[row[1]] = decode_value(row[2:])
        return [
            Entity(key=Key(kind=kind, name=name, parent=parent), properties=properties.get(name, {}))
            for name in names
        ]


def _encode(parent: Key | None) -> str:
    """Parent key as stored in the parent column, empty for root entities."""
    return "/".join(parent.path()) if parent else ""
