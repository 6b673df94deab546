"""In-memory entity store."""

import copy
import operator
import threading
from collections.abc import Callable, Iterator
from datetime import UTC, datetime

import structlog

from kindstore.application.query.compiled import (
    EQ,
    GE,
    GT,
    LE,
    LT,
    NE,
    CompiledQuery,
    FilterClause,
)
from kindstore.domain.entities import Entity, Key
from kindstore.domain.value_objects import LargeText

logger = structlog.get_logger(__name__)

_COMPARE: dict[str, Callable[[object, object], bool]] = {
    EQ: operator.eq,
    NE: operator.ne,
    GT: operator.gt,
    GE: operator.ge,
    LT: operator.lt,
    LE: operator.le,
}


def value_family(value: object) -> int | None:
    """Comparable type family of a property value; None when unindexed."""
    if isinstance(value, LargeText):
        return None
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return 1
    if isinstance(value, datetime):
        return 2
    if isinstance(value, str):
        return 3
    if isinstance(value, bytes):
        return 4
    return None


def _normalized(value: object) -> object:
    # Naive datetimes are taken as UTC so they compare with aware ones.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def matches(clause: FilterClause, properties: dict[str, object]) -> bool:
    """Whether a property bag satisfies one filter clause.

    Missing and unindexed properties never match. Comparisons only hold
    within one type family, except != which matches any differing value.
    """
    if clause.key not in properties:
        return False
    stored = properties[clause.key]
    stored_family = value_family(stored)
    if stored_family is None:
        return False
    same_family = stored_family == value_family(clause.value)
    if clause.op == NE:
        return not same_family or _normalized(stored) != _normalized(clause.value)
    if not same_family:
        return False
    return _COMPARE[clause.op](_normalized(stored), _normalized(clause.value))


class InMemoryEntityStore:
    """Thread-safe dict-backed store with datastore-like query semantics.

    Results default to key name order. Sorting on a key drops entities that
    lack it or hold large text under it.
    """

    def __init__(self) -> None:
        self._entities: dict[tuple[str, Key | None], dict[str, Entity]] = {}
        self._lock = threading.RLock()

    def put(self, entity: Entity) -> None:
        with self._lock:
            bucket = self._entities.setdefault((entity.key.kind, entity.key.parent), {})
            bucket[entity.key.name] = copy.deepcopy(entity)

    def get(self, key: Key) -> Entity | None:
        with self._lock:
            entity = self._entities.get((key.kind, key.parent), {}).get(key.name)
            return copy.deepcopy(entity) if entity is not None else None

    def delete(self, key: Key) -> None:
        with self._lock:
            self._entities.get((key.kind, key.parent), {}).pop(key.name, None)

    def prepare_query(self, query: CompiledQuery) -> CompiledQuery:
        return query

    def count(self, handle: CompiledQuery) -> int:
        return len(self._run(handle))

    def fetch_page(self, handle: CompiledQuery, offset: int, limit: int) -> list[Entity]:
        return [copy.deepcopy(e) for e in self._run(handle)[offset : offset + limit]]

    def scan_all(self, kind: str, parent: Key | None = None) -> Iterator[Entity]:
        for entity in self._snapshot(kind, parent):
            yield copy.deepcopy(entity)

    def clear(self) -> None:
        with self._lock:
            self._entities.clear()

    def _snapshot(self, kind: str, parent: Key | None) -> list[Entity]:
        with self._lock:
            bucket = self._entities.get((kind, parent), {})
            return [bucket[name] for name in sorted(bucket)]

    def _run(self, query: CompiledQuery) -> list[Entity]:
        entities = [
            e
            for e in self._snapshot(query.kind, query.parent)
            if all(matches(clause, e.properties) for clause in query.filters)
        ]
        for clause in query.sorts:
            entities = [
                e for e in entities if value_family(e.properties.get(clause.key)) is not None
            ]
        # Stable sorts applied last-clause-first give lexicographic ordering.
        for clause in reversed(query.sorts):
            entities.sort(
                key=lambda e, k=clause.key: (
                    value_family(e.properties[k]),
                    _normalized(e.properties[k]),
                ),
                reverse=clause.descending,
            )
        return entities
