"""Set project access scope use case."""

from uuid import UUID

from tenantguard.application.ports import SchemaCapabilities
from tenantguard.application.use_cases.membership._guards import load_mutable_membership
from tenantguard.domain.exceptions import ValidationError
from tenantguard.domain.value_objects import ProjectAccessScope


class SetProjectAccessScopeUseCase:
    """Switch a member between all-project and granted-project visibility."""

    def __init__(
        self,
        unit_of_work_factory: type,
        schema_capabilities: SchemaCapabilities,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._capabilities = schema_capabilities

    async def execute(
        self,
        actor_id: str,
        workspace_id: UUID,
        target_user_id: str,
        scope: str,
    ) -> ProjectAccessScope:
        try:
            new_scope = ProjectAccessScope(scope)
        except ValueError:
            raise ValidationError(f"Invalid project access scope: {scope!r}") from None

        if not await self._capabilities.supports_project_access_scope():
            raise ValidationError("Project access scope is not supported by this deployment")

        async with self._uow_factory() as uow:
            await load_mutable_membership(uow, actor_id, workspace_id, target_user_id)
            await uow.memberships.update_project_access_scope(
                workspace_id, target_user_id, new_scope
            )
        return new_scope
