"""PostgreSQL principal repository implementation."""

from psycopg import AsyncConnection

from tenantguard.domain.entities import Principal


class PostgresPrincipalRepository:
    """Principal repository implementation (reads the profile table)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> Principal | None:
        cur = await self._conn.execute(
            "SELECT id, is_global_admin FROM profile WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Principal(id=r[0], is_global_admin=bool(r[1]))
