"""Permission catalog and role-permission link repository port."""

from typing import Protocol
from uuid import UUID

from tenantguard.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permissions and their links to roles."""

    async def list_catalog(self, resource: str | None = None) -> list[Permission]: ...

    async def get_by_ids(self, permission_ids: list[UUID]) -> list[Permission]: ...

    async def list_for_role(self, role_id: UUID) -> list[Permission]: ...

    async def replace_for_role(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Make the role's permission set exactly ``permission_ids``.

        Must be applied within the unit of work's transaction so readers see
        either the old or the new set in full.
        """
        ...
