"""Paged query result envelope."""

from dataclasses import dataclass, field
from typing import Any

from kindstore.domain.entities.document import Document


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata of a paged query."""

    page_count: int


@dataclass
class Envelope:
    """Page count plus the documents of the requested page."""

    pagination: Pagination
    results: list[Document] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return self.pagination.page_count

    def to_media(self) -> dict[str, Any]:
        return {
            "pagination": {"pageCount": self.pagination.page_count},
            "results": self.results,
        }
