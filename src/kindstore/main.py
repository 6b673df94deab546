"""Application entry point and composition root."""

import random

import structlog
from falcon.asgi import App

from kindstore import __version__
from kindstore.application.codec import EntityCodec
from kindstore.application.ports import EntityStore, QueryAugmenter
from kindstore.application.query.augmenters import DefaultSort
from kindstore.application.registry import Repositories
from kindstore.application.repository import DocumentRepository
from kindstore.config import Settings, get_settings
from kindstore.domain.entities import Key
from kindstore.infrastructure.cache import CacheFactory
from kindstore.infrastructure.ids import TimeMillisIdGenerator
from kindstore.infrastructure.persistence.memory import InMemoryEntityStore
from kindstore.infrastructure.persistence.postgres import PostgresEntityStore, create_pool
from kindstore.interfaces.api.app import create_app
from kindstore.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from kindstore.interfaces.api.resources.documents import (
    CountResource,
    DocumentResource,
    DocumentsResource,
    RandomDocumentsResource,
)
from kindstore.interfaces.api.resources.health import HealthResource
from kindstore.interfaces.api.resources.repositories import (
    RepositoriesResource,
    RepositoriesWritableResource,
)
from kindstore.interfaces.api.serialization import parse_sorts
from kindstore.logging_config import setup_logging

logger = structlog.get_logger(__name__)


def build_repositories(settings: Settings, store: EntityStore) -> Repositories:
    """One DocumentRepository per configured name, sharing store, codec and ids."""
    codec = EntityCodec(settings.max_string_length)
    id_generator = TimeMillisIdGenerator()
    parent = Key(kind=settings.parent_kind, name=settings.parent_name)
    augmenters: list[QueryAugmenter] = []
    if settings.default_sort:
        augmenters.append(DefaultSort(parse_sorts(settings.default_sort_list())))
    rng = random.Random()

    return Repositories(
        [
            DocumentRepository(
                name,
                store,
                codec,
                id_generator,
                parent=parent,
                augmenters=augmenters,
                rng=rng,
            )
            for name in settings.repository_name_list()
        ]
    )


def create_kindstore_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json)

    middleware = []
    if settings.store_backend == "postgres":
        pool = create_pool(settings.database_url, settings.pool_min_size, settings.pool_max_size)
        store: EntityStore = PostgresEntityStore(pool)
        middleware.append(PoolLifespanMiddleware(pool))
    else:
        store = InMemoryEntityStore()

    repositories = build_repositories(settings, store)
    caches = CacheFactory(
        settings.cache_backend,
        max_size=settings.cache_max_size,
        ttl_seconds=settings.cache_ttl_seconds,
    )

    logger.info(
        "Starting kindstore",
        version=__version__,
        store=settings.store_backend,
        repositories=repositories.names(),
        cache=str(caches.backend),
    )

    return create_app(
        health_resource=HealthResource(repositories, caches),
        repositories_resource=RepositoriesResource(repositories),
        writable_resource=RepositoriesWritableResource(
            repositories, settings.admin_user_name, settings.admin_password
        ),
        documents_resource=DocumentsResource(repositories),
        document_resource=DocumentResource(repositories, caches),
        random_resource=RandomDocumentsResource(repositories),
        count_resource=CountResource(repositories),
        middleware=middleware,
    )


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_kindstore_app()
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    """CLI entry point."""
    run_server()
