"""Document repository - CRUD and query facade over an entity store."""

import random
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

import structlog

from kindstore.application.codec import EntityCodec
from kindstore.application.ports import EntityStore, IdGenerator, QueryAugmenter
from kindstore.application.query.compiler import QueryCompiler, Sorts
from kindstore.application.query.pager import PagedQueryExecutor, validate_page
from kindstore.application.query.sampler import SamplingExecutor
from kindstore.domain.entities import OBJECT_ID, Document, Envelope, Key
from kindstore.domain.exceptions import (
    KindstoreError,
    PersistenceFailure,
    RepositoryNotWritable,
)
from kindstore.domain.value_objects import Filter, FilterOperator

logger = structlog.get_logger(__name__)


class DocumentRepository:
    """Repository of documents of one kind.

    Every record of the kind is stored under the same parent key. Validation
    errors are raised before the store is touched; anything the store raises
    is logged once and re-raised as PersistenceFailure.

    No locking happens here: concurrent updates of one identifier race in the
    store and the last write wins.
    """

    def __init__(
        self,
        name: str,
        store: EntityStore,
        codec: EntityCodec,
        id_generator: IdGenerator,
        parent: Key | None = None,
        augmenters: Sequence[QueryAugmenter] = (),
        writable: bool = True,
        compiler: QueryCompiler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._name = name
        self._store = store
        self._codec = codec
        self._id_generator = id_generator
        self._parent = parent
        self._augmenters = tuple(augmenters)
        self._writable = writable
        self._compiler = compiler or QueryCompiler()
        self._pager = PagedQueryExecutor(store, codec)
        self._sampler = SamplingExecutor(store, codec, rng)

    @property
    def name(self) -> str:
        return self._name

    @property
    def writable(self) -> bool:
        return self._writable

    def set_writable(self, writable: bool) -> None:
        self._writable = writable
        logger.info("Repository writable switched", repository=self._name, writable=writable)

    def add(self, document: Document) -> str:
        """Persist a document, generating its identifier when absent.

        Adding a document whose identifier already exists replaces the stored
        record, like update().
        """
        self._check_writable("add")
        oid = document[OBJECT_ID] if OBJECT_ID in document else self._id_generator()
        entity = self._codec.to_entity({**document, OBJECT_ID: oid}, self._name, self._parent)

        with self._persistence("add", oid):
            self._store.put(entity)

        logger.debug("Added an object", repository=self._name, oid=oid)
        return oid

    def update(self, oid: str, document: Document) -> None:
        """Replace the whole record; creates it when missing."""
        self._check_writable("update")
        entity = self._codec.to_entity({**document, OBJECT_ID: oid}, self._name, self._parent)

        with self._persistence("update", oid):
            self._store.put(entity)

        logger.debug("Updated an object", repository=self._name, oid=oid)

    def remove(self, oid: str) -> None:
        """Delete a record; deleting a missing one is a no-op."""
        self._check_writable("remove")
        with self._persistence("remove", oid):
            self._store.delete(self._key(oid))

        logger.debug("Removed an object", repository=self._name, oid=oid)

    def get(self, oid: str) -> Document | None:
        """Return the document, or None when no record has this identifier."""
        with self._persistence("get", oid):
            entity = self._store.get(self._key(oid))

        if entity is None:
            logger.debug("Not found an object", repository=self._name, oid=oid)
            return None
        return self._codec.to_document(entity)

    def has(self, oid: str) -> bool:
        """Existence check by counting records whose identifier matches."""
        query = self._compiler.compile(
            self._name,
            filters=[Filter(OBJECT_ID, FilterOperator.EQUAL, oid)],
            parent=self._parent,
        )
        with self._persistence("has", oid):
            return self._store.count(self._store.prepare_query(query)) > 0

    def get_page(
        self,
        page_number: int,
        page_size: int,
        sorts: Sorts | None = None,
        filters: Iterable[Filter] | None = None,
    ) -> Envelope:
        """Paged listing, optionally sorted and filtered.

        Filters are compiled before sorts; both keep the caller's order.
        """
        validate_page(page_number, page_size)
        query = self._compiler.compile(self._name, filters, sorts, self._parent)
        for augmenter in self._augmenters:
            query = augmenter.augment(query)

        with self._persistence("query"):
            return self._pager.execute(query, page_number, page_size)

    def get_randomly(self, fetch_size: int) -> list[Document]:
        """Up to fetch_size distinct documents picked at random."""
        with self._persistence("sample"):
            return self._sampler.sample(self._name, fetch_size, self._parent)

    def count(self) -> int:
        """Total records of the kind, unfiltered."""
        query = self._compiler.compile(self._name, parent=self._parent)
        with self._persistence("count"):
            return self._store.count(self._store.prepare_query(query))

    def _key(self, oid: str) -> Key:
        return Key(kind=self._name, name=oid, parent=self._parent)

    def _check_writable(self, operation: str) -> None:
        if not self._writable:
            raise RepositoryNotWritable(
                f"Repository [{self._name}] is not writable, refused to {operation}"
            )

    @contextmanager
    def _persistence(self, operation: str, oid: str | None = None) -> Iterator[None]:
        try:
            yield
        except KindstoreError:
            raise
        except Exception as e:
            logger.error(
                "Repository operation failed",
                operation=operation,
                repository=self._name,
                oid=oid,
                exc_info=True,
            )
            raise PersistenceFailure(operation, self._name, e) from e
