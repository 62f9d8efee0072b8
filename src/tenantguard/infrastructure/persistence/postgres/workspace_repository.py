"""PostgreSQL workspace repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantguard.domain.entities import Workspace

_COLUMNS = "id, name, owner_id, created_at"


def _row_to_workspace(r: tuple) -> Workspace:
    return Workspace(id=r[0], name=r[1], owner_id=r[2], created_at=r[3])


class PostgresWorkspaceRepository:
    """Workspace repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, workspace_id: UUID) -> Workspace | None:
        """Get workspace by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM workspace WHERE id = %s",
            (workspace_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_workspace(r)

    async def list_by_owner(self, user_id: str) -> list[Workspace]:
        """List workspaces owned by user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM workspace WHERE owner_id = %s ORDER BY name",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_workspace(r) for r in rows]

    async def list_by_ids(self, workspace_ids: list[UUID]) -> list[Workspace]:
        """List workspaces by ids."""
        if not workspace_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM workspace WHERE id = ANY(%s) ORDER BY name",
            (list(workspace_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_workspace(r) for r in rows]
