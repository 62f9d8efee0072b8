"""PostgreSQL permission repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantguard.domain.entities import Permission

_COLUMNS = "p.id, p.resource, p.action, p.description"


def _row_to_permission(r: tuple) -> Permission:
    return Permission(id=r[0], resource=r[1], action=r[2], description=r[3])


class PostgresPermissionRepository:
    """Permission and role_permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_catalog(self, resource: str | None = None) -> list[Permission]:
        """List permissions, optionally filtered by resource."""
        if resource:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permission p WHERE p.resource = %s "
                "ORDER BY p.resource, p.action",
                (resource,),
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permission p ORDER BY p.resource, p.action"
            )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def get_by_ids(self, permission_ids: list[UUID]) -> list[Permission]:
        """Get existing permissions among ids."""
        if not permission_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission p WHERE p.id = ANY(%s)",
            (list(permission_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list_for_role(self, role_id: UUID) -> list[Permission]:
        """List permissions linked to role."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission p "
            "JOIN role_permission rp ON rp.permission_id = p.id "
            "WHERE rp.role_id = %s ORDER BY p.resource, p.action",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def replace_for_role(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Delete then insert links in the current transaction.

        Concurrent readers keep seeing the committed old set until commit.
        """
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        if not permission_ids:
            return
        await self._conn.execute(
            "INSERT INTO role_permission (role_id, permission_id) "
            "SELECT %s, unnest(%s::uuid[])",
            (role_id, list(permission_ids)),
        )
