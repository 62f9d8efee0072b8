"""PostgreSQL workspace membership repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantguard.application.ports import SchemaCapabilities
from tenantguard.domain.entities import WorkspaceMembership
from tenantguard.domain.exceptions import ValidationError
from tenantguard.domain.value_objects import ProjectAccessScope


class PostgresMembershipRepository:
    """Membership repository implementation.

    Selects ``project_access_scope`` only when the schema has the column;
    otherwise every membership reads as scope "all".
    """

    def __init__(self, conn: AsyncConnection, capabilities: SchemaCapabilities) -> None:
        self._conn = conn
        self._capabilities = capabilities

    async def _columns(self) -> str:
        if await self._capabilities.supports_project_access_scope():
            return "workspace_id, user_id, role, project_access_scope"
        return "workspace_id, user_id, role, NULL"

    async def get(self, workspace_id: UUID, user_id: str) -> WorkspaceMembership | None:
        """Get membership of user in workspace."""
        columns = await self._columns()
        cur = await self._conn.execute(
            f"SELECT {columns} FROM workspace_member WHERE workspace_id = %s AND user_id = %s",
            (workspace_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return WorkspaceMembership(
            workspace_id=r[0],
            user_id=r[1],
            role=r[2],
            project_access_scope=ProjectAccessScope.parse(r[3]),
        )

    async def list_by_user(self, user_id: str) -> list[WorkspaceMembership]:
        """List memberships of user."""
        columns = await self._columns()
        cur = await self._conn.execute(
            f"SELECT {columns} FROM workspace_member WHERE user_id = %s",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [
            WorkspaceMembership(
                workspace_id=r[0],
                user_id=r[1],
                role=r[2],
                project_access_scope=ProjectAccessScope.parse(r[3]),
            )
            for r in rows
        ]

    async def update_role(self, workspace_id: UUID, user_id: str, role: str) -> None:
        """Update system role of membership."""
        await self._conn.execute(
            "UPDATE workspace_member SET role = %s WHERE workspace_id = %s AND user_id = %s",
            (role, workspace_id, user_id),
        )

    async def update_project_access_scope(
        self, workspace_id: UUID, user_id: str, scope: ProjectAccessScope
    ) -> None:
        """Update project access scope of membership."""
        if not await self._capabilities.supports_project_access_scope():
            raise ValidationError("Project access scope is not supported by this deployment")
        await self._conn.execute(
            "UPDATE workspace_member SET project_access_scope = %s "
            "WHERE workspace_id = %s AND user_id = %s",
            (scope.value, workspace_id, user_id),
        )
