"""PostgreSQL project repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection


class PostgresProjectRepository:
    """Project read surface for access scoping."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_member_project_ids(self, user_id: str) -> list[UUID]:
        """List projects the user holds an explicit grant on."""
        cur = await self._conn.execute(
            "SELECT DISTINCT project_id FROM project_member WHERE user_id = %s",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows if r[0]]

    async def filter_ids_in_workspace(
        self, workspace_id: UUID, project_ids: list[UUID]
    ) -> list[UUID]:
        """Keep the ids of projects that currently belong to workspace."""
        if not project_ids:
            return []
        cur = await self._conn.execute(
            "SELECT id FROM project WHERE workspace_id = %s AND id = ANY(%s)",
            (workspace_id, list(project_ids)),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]
