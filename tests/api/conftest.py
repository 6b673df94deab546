"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from kindstore.application.registry import Repositories
from kindstore.infrastructure.cache import CacheFactory
from kindstore.interfaces.api.app import create_app
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

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def repositories(make_repository) -> Repositories:
    return Repositories([make_repository("articles"), make_repository("users")])


@pytest.fixture
def caches() -> CacheFactory:
    return CacheFactory("lru", max_size=100)


@pytest.fixture
def app(repositories, caches):
    """Falcon ASGI app over in-memory repositories."""
    return create_app(
        health_resource=HealthResource(repositories, caches),
        repositories_resource=RepositoriesResource(repositories),
        writable_resource=RepositoriesWritableResource(repositories, ADMIN_USER, ADMIN_PASSWORD),
        documents_resource=DocumentsResource(repositories),
        document_resource=DocumentResource(repositories, caches),
        random_resource=RandomDocumentsResource(repositories),
        count_resource=CountResource(repositories),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
