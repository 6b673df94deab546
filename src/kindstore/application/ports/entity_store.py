"""Entity store port - backend key-value store of typed entities."""

from collections.abc import Iterator
from typing import Any, Protocol

from kindstore.application.query.compiled import CompiledQuery
from kindstore.domain.entities import Entity, Key


class EntityStore(Protocol):
    """Port for the backend entity store.

    Query handles are opaque to callers; they are only passed back to
    count() and fetch_page() of the store that prepared them.
    """

    def put(self, entity: Entity) -> None: ...

    def get(self, key: Key) -> Entity | None: ...

    def delete(self, key: Key) -> None: ...

    def prepare_query(self, query: CompiledQuery) -> Any: ...

    def count(self, handle: Any) -> int: ...

    def fetch_page(self, handle: Any, offset: int, limit: int) -> list[Entity]: ...

    def scan_all(self, kind: str, parent: Key | None = None) -> Iterator[Entity]: ...
