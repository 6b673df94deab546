"""Health check endpoints."""

import falcon.asgi

from kindstore.application.registry import Repositories
from kindstore.infrastructure.cache import CacheFactory


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, repositories: Repositories, caches: CacheFactory) -> None:
        self._repositories = repositories
        self._caches = caches

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness, with per-cache hit/miss statistics."""
        resp.media = {
            "status": "ready",
            "repositories": len(self._repositories),
            "caches": self._caches.stats(),
        }
        resp.status = falcon.HTTP_200
