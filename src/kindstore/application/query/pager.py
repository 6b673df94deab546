"""Paged query executor."""

import structlog

from kindstore.application.codec import EntityCodec
from kindstore.application.ports.entity_store import EntityStore
from kindstore.application.query.compiled import CompiledQuery
from kindstore.domain.entities import Envelope, Pagination
from kindstore.domain.exceptions import InvalidPageNumber, InvalidPageSize

logger = structlog.get_logger(__name__)


def validate_page(page_number: int, page_size: int) -> None:
    """Reject non-positive page parameters before any backend call."""
    if page_size < 1:
        raise InvalidPageSize(f"Page size must be at least 1, got {page_size}")
    if page_number < 1:
        raise InvalidPageNumber(f"Page number must be at least 1, got {page_number}")


def page_count(total: int, page_size: int) -> int:
    return -(-total // page_size)


class PagedQueryExecutor:
    """Runs a compiled query and returns one page plus the page count."""

    def __init__(self, store: EntityStore, codec: EntityCodec) -> None:
        self._store = store
        self._codec = codec

    def execute(self, query: CompiledQuery, page_number: int, page_size: int) -> Envelope:
        """Count all matches, then fetch page_size entities at the page offset.

        A page past the last one yields no results but still reports the
        real page count.
        """
        validate_page(page_number, page_size)

        handle = self._store.prepare_query(query)
        total = self._store.count(handle)
        offset = page_size * (page_number - 1)

        results = [
            self._codec.to_document(entity)
            for entity in self._store.fetch_page(handle, offset, page_size)
        ]
        logger.debug(
            "Found objects",
            kind=query.kind,
            size=len(results),
            page_number=page_number,
            page_size=page_size,
            total=total,
        )
        return Envelope(pagination=Pagination(page_count(total, page_size)), results=results)
