"""Repository administration resources."""

import hmac

import falcon.asgi
import structlog

from kindstore.application.registry import Repositories

logger = structlog.get_logger(__name__)


class RepositoriesResource:
    """GET /v1/repositories - names of the served repositories."""

    def __init__(self, repositories: Repositories) -> None:
        self._repositories = repositories

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"repositoryNames": self._repositories.names()}
        resp.status = falcon.HTTP_200


class RepositoriesWritableResource:
    """PUT /v1/repositories/writable - switch every repository (admin only)."""

    def __init__(self, repositories: Repositories, user_name: str, password: str) -> None:
        self._repositories = repositories
        self._user_name = user_name
        self._password = password

    def _authorized(self, req: falcon.asgi.Request) -> bool:
        if not self._password:
            return False
        user_name = req.get_param("userName") or ""
        password = req.get_param("password") or ""
        return hmac.compare_digest(user_name, self._user_name) and hmac.compare_digest(
            password, self._password
        )

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not self._authorized(req):
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        writable = req.get_param_as_bool("writable")
        if writable is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "writable query parameter required"}
            return

        self._repositories.set_writable(writable)
        logger.info("Repositories writable set remotely", writable=writable)
        resp.media = {"writable": writable}
        resp.status = falcon.HTTP_200
