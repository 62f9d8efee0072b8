"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from tenantguard.application.ports import SchemaCapabilities
from tenantguard.domain.exceptions import StoreFailure
from tenantguard.infrastructure.persistence.postgres.membership_repository import (
    PostgresMembershipRepository,
)
from tenantguard.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from tenantguard.infrastructure.persistence.postgres.principal_repository import (
    PostgresPrincipalRepository,
)
from tenantguard.infrastructure.persistence.postgres.project_repository import (
    PostgresProjectRepository,
)
from tenantguard.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from tenantguard.infrastructure.persistence.postgres.user_role_repository import (
    PostgresUserRoleRepository,
)
from tenantguard.infrastructure.persistence.postgres.workspace_repository import (
    PostgresWorkspaceRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool, capabilities: SchemaCapabilities) -> None:
        self._pool = pool
        self._capabilities = capabilities
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._principals = PostgresPrincipalRepository(self._conn)
        self._workspaces = PostgresWorkspaceRepository(self._conn)
        self._memberships = PostgresMembershipRepository(self._conn, self._capabilities)
        self._roles = PostgresRoleRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._user_roles = PostgresUserRoleRepository(self._conn)
        self._projects = PostgresProjectRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def principals(self) -> PostgresPrincipalRepository:
        return self._principals

    @property
    def workspaces(self) -> PostgresWorkspaceRepository:
        return self._workspaces

    @property
    def memberships(self) -> PostgresMembershipRepository:
        return self._memberships

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def user_roles(self) -> PostgresUserRoleRepository:
        return self._user_roles

    @property
    def projects(self) -> PostgresProjectRepository:
        return self._projects

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool, capabilities: SchemaCapabilities) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits cleanly. psycopg errors surface as StoreFailure.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool, capabilities) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            raise StoreFailure(str(e)) from e

    return factory
