"""Liveness and readiness probes."""

import logging

import falcon
import falcon.asgi

from tenantguard import __version__
from tenantguard.application.ports import SchemaCapabilities

logger = logging.getLogger(__name__)


class HealthResource:
    """GET /v1/health (liveness) and /v1/health/ready (catalog store reachable)."""

    def __init__(self, capabilities: SchemaCapabilities | None = None) -> None:
        self._capabilities = capabilities

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"status": "ok", "version": __version__}

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if self._capabilities is None:
            resp.media = {"status": "ready"}
            return
        try:
            scoped = await self._capabilities.supports_project_access_scope()
        except Exception as e:
            logger.warning("Readiness probe failed: %s", e)
            resp.status = falcon.HTTP_503
            resp.media = {"status": "unavailable"}
            return
        resp.media = {"status": "ready", "project_access_scope": scoped}
