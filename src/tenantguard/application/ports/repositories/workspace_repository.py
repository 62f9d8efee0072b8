"""Workspace repository port."""

from typing import Protocol
from uuid import UUID

from tenantguard.domain.entities import Workspace


class WorkspaceRepository(Protocol):
    """Port for workspace reads."""

    async def get_by_id(self, workspace_id: UUID) -> Workspace | None: ...

    async def list_by_owner(self, user_id: str) -> list[Workspace]: ...

    async def list_by_ids(self, workspace_ids: list[UUID]) -> list[Workspace]: ...
