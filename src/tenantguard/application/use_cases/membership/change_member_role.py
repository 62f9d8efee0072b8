"""Change member role use case."""

import logging
from uuid import UUID

from tenantguard.application.use_cases.membership._guards import load_mutable_membership
from tenantguard.domain.entities import UserRoleAssignment
from tenantguard.domain.exceptions import NotFound, ValidationError
from tenantguard.domain.value_objects import SystemRole

logger = logging.getLogger(__name__)

_ASSIGNABLE_SYSTEM_ROLES = frozenset({SystemRole.ADMIN.value, SystemRole.MEMBER.value})


class ChangeMemberRoleUseCase:
    """Set a member's system role, or assign a custom role by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: str,
        workspace_id: UUID,
        target_user_id: str,
        role: str,
    ) -> str:
        """Apply the role change and return the effective role name.

        A system role clears any custom role assignment. A custom role id sets
        the membership role to "member" and upserts the assignment.
        """
        if not isinstance(role, str) or not role.strip():
            raise ValidationError("Role is required")
        role = role.strip()
        if role == SystemRole.OWNER.value:
            raise ValidationError("Ownership cannot be assigned through a role change")

        async with self._uow_factory() as uow:
            await load_mutable_membership(uow, actor_id, workspace_id, target_user_id)

            if role in _ASSIGNABLE_SYSTEM_ROLES:
                await uow.memberships.update_role(workspace_id, target_user_id, role)
                await uow.user_roles.delete(workspace_id, target_user_id)
                role_name = role
            else:
                try:
                    role_id = UUID(role)
                except ValueError:
                    raise NotFound("Role", role) from None
                custom_role = await uow.roles.get_by_id(role_id)
                if not custom_role or custom_role.is_system_role:
                    raise NotFound("Role", role)
                await uow.memberships.update_role(
                    workspace_id, target_user_id, SystemRole.MEMBER.value
                )
                await uow.user_roles.upsert(
                    UserRoleAssignment(
                        user_id=target_user_id,
                        workspace_id=workspace_id,
                        role_id=custom_role.id,
                    )
                )
                role_name = custom_role.name

        logger.info(
            "User %s set role of %s in workspace %s to %s",
            actor_id,
            target_user_id,
            workspace_id,
            role_name,
        )
        return role_name
