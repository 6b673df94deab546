"""Health endpoint tests."""

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from kindstore.application.registry import Repositories
from kindstore.infrastructure.cache import CacheFactory
from kindstore.interfaces.api.resources.health import HealthResource


@pytest.fixture
def caches() -> CacheFactory:
    return CacheFactory("lru", max_size=10)


@pytest.fixture
def client(make_repository, caches) -> TestClient:
    """Create test client with health endpoints."""
    app = App()
    health = HealthResource(Repositories([make_repository("articles")]), caches)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json == {"status": "ready", "repositories": 1, "caches": []}


def test_health_ready_reports_cache_stats(client: TestClient, caches: CacheFactory) -> None:
    """Readiness lists every cache with its hit/miss counters."""
    cache = caches.get_cache("documents:articles")
    cache.put("a", {"oId": "a"})
    cache.get("a")
    cache.get("b")

    result = client.simulate_get("/v1/health/ready")
    assert result.json["caches"] == [
        {"name": "documents:articles", "size": 1, "hits": 1, "misses": 1, "hit_rate": 50.0}
    ]
