"""Workspace membership resolver - effective role of a principal in a workspace."""

import logging
from uuid import UUID

from tenantguard.application.dto.access_dto import AccessibleWorkspace
from tenantguard.domain.value_objects import (
    MemberWithCustomRole,
    MemberWithSystemRole,
    NoRelationship,
    Owner,
    ResolvedRole,
    SystemRole,
)

logger = logging.getLogger(__name__)


async def resolve_in_uow(uow, user_id: str, workspace_id: UUID) -> ResolvedRole:
    """Resolve the principal's role using an open unit of work.

    Ownership wins over any membership or custom role rows; a legacy
    membership row with role "owner" counts as ownership. A custom role
    assignment replaces the membership's system role. Store errors propagate.
    """
    workspace = await uow.workspaces.get_by_id(workspace_id)
    if not workspace:
        return NoRelationship()

    membership = await uow.memberships.get(workspace_id, user_id)
    if workspace.owner_id == user_id:
        if membership:
            return Owner(project_access_scope=membership.project_access_scope)
        return Owner()
    if not membership:
        return NoRelationship()

    system_role = SystemRole.normalize(membership.role)
    if system_role == SystemRole.OWNER.value:
        return Owner(project_access_scope=membership.project_access_scope)
    assignment = await uow.user_roles.get_for_user(workspace_id, user_id)
    if assignment:
        role = await uow.roles.get_by_id(assignment.role_id)
        if not role:
            logger.warning(
                "User %s in workspace %s is assigned missing role %s",
                user_id,
                workspace_id,
                assignment.role_id,
            )
            return NoRelationship()
        return MemberWithCustomRole(
            role_id=role.id,
            role_name=role.name,
            system_role_name=system_role,
            project_access_scope=membership.project_access_scope,
        )
    return MemberWithSystemRole(
        role_name=system_role,
        project_access_scope=membership.project_access_scope,
    )


class WorkspaceMembershipResolver:
    """Determines a principal's effective role in workspaces. Pure reads."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def resolve_role(self, user_id: str, workspace_id: UUID) -> ResolvedRole:
        async with self._uow_factory() as uow:
            return await resolve_in_uow(uow, user_id, workspace_id)

    async def list_accessible_workspaces(self, user_id: str) -> list[AccessibleWorkspace]:
        """Workspaces the principal owns or is a member of, owned ones first.

        Deduplicated by workspace id; ownership takes precedence when both hold.
        """
        async with self._uow_factory() as uow:
            owned = await uow.workspaces.list_by_owner(user_id)
            result = [
                AccessibleWorkspace(workspace=w, role_name=SystemRole.OWNER.value)
                for w in sorted(owned, key=lambda w: w.name)
            ]
            seen = {w.id for w in owned}

            memberships = await uow.memberships.list_by_user(user_id)
            member_ids = [m.workspace_id for m in memberships if m.workspace_id not in seen]
            if not member_ids:
                return result

            workspaces = await uow.workspaces.list_by_ids(list(dict.fromkeys(member_ids)))
            for workspace in sorted(workspaces, key=lambda w: w.name):
                if workspace.id in seen:
                    continue
                seen.add(workspace.id)
                resolved = await resolve_in_uow(uow, user_id, workspace.id)
                if isinstance(resolved, NoRelationship):
                    continue
                result.append(
                    AccessibleWorkspace(workspace=workspace, role_name=resolved.role_name)
                )
        return result
