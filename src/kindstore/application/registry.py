"""Repository registry - the named repositories a process serves."""

from collections.abc import Iterator

import structlog

from kindstore.application.repository import DocumentRepository
from kindstore.domain.exceptions import NotFound

logger = structlog.get_logger(__name__)


class Repositories:
    """Named repositories, built once by the composition root."""

    def __init__(self, repositories: list[DocumentRepository] | None = None) -> None:
        self._by_name: dict[str, DocumentRepository] = {}
        for repository in repositories or []:
            self.register(repository)

    def register(self, repository: DocumentRepository) -> None:
        if repository.name in self._by_name:
            raise ValueError(f"Repository [{repository.name}] already registered")
        self._by_name[repository.name] = repository

    def get(self, name: str) -> DocumentRepository:
        repository = self._by_name.get(name)
        if repository is None:
            raise NotFound("Repository", name)
        return repository

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def set_writable(self, writable: bool) -> None:
        """Switch every repository to writable or read-only."""
        for repository in self._by_name.values():
            repository.set_writable(writable)
        logger.info("Repositories writable switched", writable=writable, count=len(self._by_name))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[DocumentRepository]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)
