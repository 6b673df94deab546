"""Sampling executor - bounded pseudo-random subset of a kind."""

import random

import structlog

from kindstore.application.codec import EntityCodec
from kindstore.application.ports.entity_store import EntityStore
from kindstore.application.query.compiled import CompiledQuery
from kindstore.domain.entities import Document, Key

logger = structlog.get_logger(__name__)


class SamplingExecutor:
    """Picks fetch_size distinct documents uniformly at random.

    Positions are drawn from [0, total) and matched against one full scan of
    the kind, so every call costs O(total) reads no matter how small
    fetch_size is. The entity store port has no random-access fetch; a store
    that offers one should be sampled through it instead.
    """

    def __init__(
        self,
        store: EntityStore,
        codec: EntityCodec,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._codec = codec
        self._rng = rng or random.Random()

    def sample(self, kind: str, fetch_size: int, parent: Key | None = None) -> list[Document]:
        """Return up to fetch_size documents, in scan order."""
        if fetch_size <= 0:
            return []

        total = self._store.count(self._store.prepare_query(CompiledQuery(kind=kind, parent=parent)))
        if total == 0:
            return []

        entities = self._store.scan_all(kind, parent)
        if fetch_size >= total:
            return [self._codec.to_document(entity) for entity in entities]

        positions = set(self._rng.sample(range(total), fetch_size))
        results: list[Document] = []
        for index, entity in enumerate(entities):
            if index in positions:
                results.append(self._codec.to_document(entity))
                if len(results) == fetch_size:
                    break

        logger.debug("Sampled objects", kind=kind, size=len(results), total=total)
        return results
