"""User role assignment repository port."""

from typing import Protocol
from uuid import UUID

from tenantguard.domain.entities import UserRoleAssignment


class UserRoleRepository(Protocol):
    """Port for per-workspace custom role assignments."""

    async def get_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> UserRoleAssignment | None: ...

    async def exists_for_role(self, role_id: UUID) -> bool: ...

    async def upsert(self, assignment: UserRoleAssignment) -> UserRoleAssignment: ...

    async def delete(self, workspace_id: UUID, user_id: str) -> None: ...
