"""Schema capability probe for optional columns of older deployments."""

import asyncio
import logging

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PostgresSchemaCapabilities:
    """Probes information_schema once per process and caches the answer.

    ``project_access_scope_column`` (from settings) overrides the probe. A
    failing probe raises; it is never treated as "column missing".
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        project_access_scope_column: bool | None = None,
    ) -> None:
        self._pool = pool
        self._project_access_scope = project_access_scope_column
        self._lock = asyncio.Lock()

    async def supports_project_access_scope(self) -> bool:
        if self._project_access_scope is not None:
            return self._project_access_scope
        async with self._lock:
            if self._project_access_scope is None:
                self._project_access_scope = await self._column_exists(
                    "workspace_member", "project_access_scope"
                )
                logger.info(
                    "workspace_member.project_access_scope column present: %s",
                    self._project_access_scope,
                )
        return self._project_access_scope

    async def _column_exists(self, table: str, column: str) -> bool:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "SELECT 1 FROM information_schema.columns "
                "WHERE table_schema = current_schema() AND table_name = %s AND column_name = %s",
                (table, column),
            )
            return await cur.fetchone() is not None
