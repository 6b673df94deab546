"""Pytest fixtures for kindstore tests."""

from __future__ import annotations

import random
from collections.abc import Iterator

import pytest

from kindstore.application.codec import EntityCodec
from kindstore.application.query.compiled import CompiledQuery
from kindstore.application.repository import DocumentRepository
from kindstore.domain.entities import Entity, Key
from kindstore.infrastructure.persistence.memory import InMemoryEntityStore

PARENT = Key(kind="parentKind", name="parentKeyName")


# --- Fakes ---


class SequentialIds:
    """Deterministic id generator: 0000000001, 0000000002, ..."""

    def __init__(self) -> None:
        self._next = 0

    def __call__(self) -> str:
        self._next += 1
        return f"{self._next:010d}"


class RecordingEntityStore(InMemoryEntityStore):
    """In-memory store that records which port methods were called."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    def put(self, entity: Entity) -> None:
        self.calls.append("put")
        super().put(entity)

    def get(self, key: Key) -> Entity | None:
        self.calls.append("get")
        return super().get(key)

    def delete(self, key: Key) -> None:
        self.calls.append("delete")
        super().delete(key)

    def prepare_query(self, query: CompiledQuery) -> CompiledQuery:
        self.calls.append("prepare_query")
        return super().prepare_query(query)

    def count(self, handle: CompiledQuery) -> int:
        self.calls.append("count")
        return super().count(handle)

    def fetch_page(self, handle: CompiledQuery, offset: int, limit: int) -> list[Entity]:
        self.calls.append("fetch_page")
        return super().fetch_page(handle, offset, limit)

    def scan_all(self, kind: str, parent: Key | None = None) -> Iterator[Entity]:
        self.calls.append("scan_all")
        return super().scan_all(kind, parent)


class FailingEntityStore:
    """Entity store whose every call fails like an unreachable backend."""

    def __init__(self) -> None:
        self.error = ConnectionError("backend unavailable")

    def put(self, entity):
        raise self.error

    def get(self, key):
        raise self.error

    def delete(self, key):
        raise self.error

    def prepare_query(self, query):
        return query

    def count(self, handle):
        raise self.error

    def fetch_page(self, handle, offset, limit):
        raise self.error

    def scan_all(self, kind, parent=None):
        raise self.error


# --- Fixtures ---


@pytest.fixture
def store() -> RecordingEntityStore:
    return RecordingEntityStore()


@pytest.fixture
def codec() -> EntityCodec:
    return EntityCodec(max_string_length=500)


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def make_repository(store, codec, ids):
    """Factory building repositories over the shared fake store."""

    def _make(name: str = "articles", **kwargs) -> DocumentRepository:
        kwargs.setdefault("parent", PARENT)
        kwargs.setdefault("rng", random.Random(7))
        return DocumentRepository(name, store, codec, ids, **kwargs)

    return _make


@pytest.fixture
def repository(make_repository) -> DocumentRepository:
    return make_repository()


@pytest.fixture
def failing_repository(codec, ids) -> DocumentRepository:
    return DocumentRepository("articles", FailingEntityStore(), codec, ids, parent=PARENT)
