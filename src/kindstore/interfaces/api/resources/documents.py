"""Document API resources."""

import asyncio
from typing import Any

import falcon
import falcon.asgi
import structlog

from kindstore.application.registry import Repositories
from kindstore.application.repository import DocumentRepository
from kindstore.domain.exceptions import (
    KindstoreError,
    NotFound,
    PersistenceFailure,
    RepositoryNotWritable,
)
from kindstore.infrastructure.cache import Cache, CacheFactory
from kindstore.interfaces.api.serialization import (
    document_to_media,
    media_to_document,
    parse_filters,
    parse_int,
    parse_sorts,
)

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 20


def _fail(resp: falcon.asgi.Response, error: KindstoreError) -> None:
    if isinstance(error, NotFound):
        resp.status = falcon.HTTP_404
    elif isinstance(error, RepositoryNotWritable):
        resp.status = falcon.HTTP_403
    elif isinstance(error, PersistenceFailure):
        resp.status = falcon.HTTP_500
    else:
        resp.status = falcon.HTTP_400
    resp.media = {"error": str(error)}


def _document_cache_name(repository: str) -> str:
    return f"documents:{repository}"


class DocumentsResource:
    """GET (paged listing) and POST (add) on /v1/repositories/{name}/documents."""

    def __init__(self, repositories: Repositories) -> None:
        self._repositories = repositories

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        try:
            repository = self._repositories.get(name)
            page = parse_int(req.get_param("page"), "page", 1)
            size = parse_int(req.get_param("size"), "size", DEFAULT_PAGE_SIZE)
            sorts = parse_sorts(req.get_param_as_list("sort"))
            filters = parse_filters(req.get_param_as_list("filter"))
            envelope = await asyncio.to_thread(repository.get_page, page, size, sorts, filters)
        except KindstoreError as e:
            _fail(resp, e)
            return

        media = envelope.to_media()
        media["results"] = [document_to_media(d) for d in envelope.results]
        resp.media = media
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        try:
            body = await req.get_media()
        except falcon.MediaMalformedError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid JSON"}
            return

        try:
            repository = self._repositories.get(name)
            oid = await asyncio.to_thread(repository.add, media_to_document(body))
        except KindstoreError as e:
            _fail(resp, e)
            return

        resp.media = {"oId": oid}
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET, PUT and DELETE on /v1/repositories/{name}/documents/{oid}.

    Reads go through a per-repository cache; writes evict the entry. A read
    that overlaps a write to the same document does not fill the cache, so a
    copy read before the write cannot outlive it.
    """

    def __init__(self, repositories: Repositories, caches: CacheFactory) -> None:
        self._repositories = repositories
        self._caches = caches
        # (repository, oid) -> reads in flight; keys written while read are stale
        self._reading: dict[tuple[str, str], int] = {}
        self._stale: set[tuple[str, str]] = set()

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str, oid: str
    ) -> None:
        try:
            repository = self._repositories.get(name)
            cache = self._caches.get_cache(_document_cache_name(name))
            media = cache.get(oid)
            if media is None:
                media = await self._read_through(repository, cache, name, oid)
        except KindstoreError as e:
            _fail(resp, e)
            return

        resp.media = media
        resp.status = falcon.HTTP_200

    async def _read_through(
        self, repository: DocumentRepository, cache: Cache, name: str, oid: str
    ) -> dict[str, Any]:
        key = (name, oid)
        self._reading[key] = self._reading.get(key, 0) + 1
        try:
            document = await asyncio.to_thread(repository.get, oid)
        finally:
            stale = key in self._stale
            self._reading[key] -= 1
            if not self._reading[key]:
                del self._reading[key]
                self._stale.discard(key)

        if document is None:
            raise NotFound("Document", oid)
        media = document_to_media(document)
        if stale:
            logger.debug("Skipped caching a stale read", repository=name, oid=oid)
        else:
            cache.put(oid, media)
        return media

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str, oid: str
    ) -> None:
        try:
            body = await req.get_media()
        except falcon.MediaMalformedError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid JSON"}
            return

        try:
            repository = self._repositories.get(name)
            await asyncio.to_thread(repository.update, oid, media_to_document(body))
        except KindstoreError as e:
            _fail(resp, e)
            return
        finally:
            self._evict(name, oid)

        resp.status = falcon.HTTP_204

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str, oid: str
    ) -> None:
        try:
            repository = self._repositories.get(name)
            await asyncio.to_thread(repository.remove, oid)
        except KindstoreError as e:
            _fail(resp, e)
            return
        finally:
            self._evict(name, oid)

        resp.status = falcon.HTTP_204

    def _evict(self, name: str, oid: str) -> None:
        if name not in self._repositories:
            return
        self._caches.get_cache(_document_cache_name(name)).remove(oid)
        if (name, oid) in self._reading:
            self._stale.add((name, oid))


class RandomDocumentsResource:
    """GET /v1/repositories/{name}/random?size=n"""

    def __init__(self, repositories: Repositories) -> None:
        self._repositories = repositories

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        try:
            repository = self._repositories.get(name)
            size = parse_int(req.get_param("size"), "size", 1)
            documents = await asyncio.to_thread(repository.get_randomly, size)
        except KindstoreError as e:
            _fail(resp, e)
            return

        resp.media = {"results": [document_to_media(d) for d in documents]}
        resp.status = falcon.HTTP_200


class CountResource:
    """GET /v1/repositories/{name}/count"""

    def __init__(self, repositories: Repositories) -> None:
        self._repositories = repositories

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        try:
            repository = self._repositories.get(name)
            count = await asyncio.to_thread(repository.count)
        except KindstoreError as e:
            _fail(resp, e)
            return

        resp.media = {"count": count}
        resp.status = falcon.HTTP_200
