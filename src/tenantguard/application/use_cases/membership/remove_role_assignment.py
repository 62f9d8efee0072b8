"""Remove custom role assignment use case."""

from uuid import UUID

from tenantguard.application.use_cases.membership._guards import load_mutable_membership
from tenantguard.domain.exceptions import NotFound


class RemoveRoleAssignmentUseCase:
    """Drop a member's custom role so the membership's system role applies again."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, workspace_id: UUID, target_user_id: str) -> None:
        async with self._uow_factory() as uow:
            await load_mutable_membership(uow, actor_id, workspace_id, target_user_id)
            assignment = await uow.user_roles.get_for_user(workspace_id, target_user_id)
            if not assignment:
                raise NotFound("UserRoleAssignment", f"{workspace_id}/{target_user_id}")
            await uow.user_roles.delete(workspace_id, target_user_id)
