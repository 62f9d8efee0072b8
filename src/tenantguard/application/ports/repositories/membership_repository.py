"""Workspace membership repository port."""

from typing import Protocol
from uuid import UUID

from tenantguard.domain.entities import WorkspaceMembership
from tenantguard.domain.value_objects import ProjectAccessScope


class MembershipRepository(Protocol):
    """Port for workspace membership persistence.

    Implementations that run against a schema without the project access scope
    column return memberships with ``ProjectAccessScope.ALL``.
    """

    async def get(self, workspace_id: UUID, user_id: str) -> WorkspaceMembership | None: ...

    async def list_by_user(self, user_id: str) -> list[WorkspaceMembership]: ...

    async def update_role(self, workspace_id: UUID, user_id: str, role: str) -> None: ...

    async def update_project_access_scope(
        self, workspace_id: UUID, user_id: str, scope: ProjectAccessScope
    ) -> None: ...
