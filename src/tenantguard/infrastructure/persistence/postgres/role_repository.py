"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import ForeignKeyViolation, UniqueViolation

from tenantguard.domain.entities import Role
from tenantguard.domain.exceptions import DuplicateName, RoleInUse

_COLUMNS = "id, name, description, is_system_role, created_at, updated_at"


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2],
        is_system_role=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def create(self, role: Role) -> Role:
        """Create role."""
        try:
            await self._conn.execute(
                "INSERT INTO role (id, name, description, is_system_role, created_at, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.is_system_role,
                    role.created_at,
                    role.updated_at,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateName(f"Role with name {role.name!r} already exists") from e
        return role

    async def update(self, role: Role) -> Role:
        """Update name and description of a custom role."""
        try:
            await self._conn.execute(
                "UPDATE role SET name = %s, description = %s, updated_at = %s "
                "WHERE id = %s AND NOT is_system_role",
                (role.name, role.description, role.updated_at, role.id),
            )
        except UniqueViolation as e:
            raise DuplicateName(f"Role with name {role.name!r} already exists") from e
        return role

    async def delete(self, role_id: UUID) -> None:
        """Delete custom role."""
        try:
            await self._conn.execute(
                "DELETE FROM role WHERE id = %s AND NOT is_system_role",
                (role_id,),
            )
        except ForeignKeyViolation as e:
            # user_role.role_id has no ON DELETE CASCADE; an assignment raced the check.
            raise RoleInUse("Role is assigned to users") from e
