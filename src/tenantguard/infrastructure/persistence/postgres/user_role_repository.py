"""PostgreSQL user role assignment repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantguard.domain.entities import UserRoleAssignment


class PostgresUserRoleRepository:
    """User role assignment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> UserRoleAssignment | None:
        """Get custom role assignment of user in workspace."""
        cur = await self._conn.execute(
            "SELECT user_id, workspace_id, role_id FROM user_role "
            "WHERE workspace_id = %s AND user_id = %s",
            (workspace_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserRoleAssignment(user_id=r[0], workspace_id=r[1], role_id=r[2])

    async def exists_for_role(self, role_id: UUID) -> bool:
        """Check whether any user is assigned the role."""
        cur = await self._conn.execute(
            "SELECT 1 FROM user_role WHERE role_id = %s LIMIT 1",
            (role_id,),
        )
        return await cur.fetchone() is not None

    async def upsert(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        """Create or replace the assignment for (workspace, user)."""
        await self._conn.execute(
            "INSERT INTO user_role (user_id, workspace_id, role_id) VALUES (%s, %s, %s) "
            "ON CONFLICT (workspace_id, user_id) DO UPDATE SET role_id = EXCLUDED.role_id",
            (assignment.user_id, assignment.workspace_id, assignment.role_id),
        )
        return assignment

    async def delete(self, workspace_id: UUID, user_id: str) -> None:
        """Delete assignment of user in workspace."""
        await self._conn.execute(
            "DELETE FROM user_role WHERE workspace_id = %s AND user_id = %s",
            (workspace_id, user_id),
        )
