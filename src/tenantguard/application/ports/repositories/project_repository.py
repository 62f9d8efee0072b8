"""Project repository port - read surface used for project access scoping."""

from typing import Protocol
from uuid import UUID


class ProjectRepository(Protocol):
    """Port for project and project membership reads."""

    async def list_member_project_ids(self, user_id: str) -> list[UUID]: ...

    async def filter_ids_in_workspace(
        self, workspace_id: UUID, project_ids: list[UUID]
    ) -> list[UUID]: ...
