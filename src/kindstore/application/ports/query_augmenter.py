"""Query augmenter port - collection-specific query customization."""

from typing import Protocol

from kindstore.application.query.compiled import CompiledQuery


class QueryAugmenter(Protocol):
    """Rewrites a compiled paged query before it reaches the store."""

    def augment(self, query: CompiledQuery) -> CompiledQuery: ...
