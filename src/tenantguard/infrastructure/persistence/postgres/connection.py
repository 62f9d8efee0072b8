"""Connection pool for the catalog store."""

from psycopg_pool import AsyncConnectionPool

from tenantguard.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Build a closed pool from settings.

    LifespanMiddleware opens it on ASGI startup; nothing may check out a
    connection before that.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        name="tenantguard",
        open=False,
    )
