"""Lifespan middleware - pool open/close and schema capability warm-up."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from tenantguard.application.ports import SchemaCapabilities

logger = logging.getLogger(__name__)


class LifespanMiddleware:
    """Opens the connection pool on startup and closes it on shutdown.

    The schema capability probe runs once at startup so request handling never
    has to detect missing columns.
    """

    def __init__(self, pool: AsyncConnectionPool, capabilities: SchemaCapabilities) -> None:
        self._pool = pool
        self._capabilities = capabilities

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        supported = await self._capabilities.supports_project_access_scope()
        logger.info("Connection pool open; project access scope supported: %s", supported)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
