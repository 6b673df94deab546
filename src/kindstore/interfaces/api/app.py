"""Falcon ASGI application."""

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App

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

logger = structlog.get_logger(__name__)


async def log_exception(req, resp, ex, params):
    logger.error("Unhandled request error", method=req.method, path=req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    repositories_resource: RepositoriesResource,
    writable_resource: RepositoriesWritableResource,
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    random_resource: RandomDocumentsResource,
    count_resource: CountResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/repositories", repositories_resource)
    app.add_route("/v1/repositories/writable", writable_resource)
    app.add_route("/v1/repositories/{name}/documents", documents_resource)
    app.add_route("/v1/repositories/{name}/documents/{oid}", document_resource)
    app.add_route("/v1/repositories/{name}/random", random_resource)
    app.add_route("/v1/repositories/{name}/count", count_resource)
    return app
