"""Shared checks for workspace membership mutations."""

from uuid import UUID

from tenantguard.application.services.membership_resolver import resolve_in_uow
from tenantguard.domain.entities import Workspace, WorkspaceMembership
from tenantguard.domain.exceptions import NotFound, PermissionDenied, ValidationError
from tenantguard.domain.value_objects import Owner, SystemRole


async def load_mutable_membership(
    uow, actor_id: str, workspace_id: UUID, target_user_id: str
) -> tuple[Workspace, WorkspaceMembership]:
    """Return workspace and target membership if the actor may change the target's row.

    Only a workspace owner (including a legacy "owner" membership row) or a
    global admin may change memberships. Nobody may change their own row or
    the row of an owner.
    """
    workspace = await uow.workspaces.get_by_id(workspace_id)
    if not workspace:
        raise NotFound("Workspace", str(workspace_id))

    if not isinstance(await resolve_in_uow(uow, actor_id, workspace_id), Owner):
        principal = await uow.principals.get_by_id(actor_id)
        if not principal or not principal.is_global_admin:
            raise PermissionDenied("Only workspace owners can change member roles")

    if target_user_id == actor_id:
        raise ValidationError("Cannot change your own role")
    if target_user_id == workspace.owner_id:
        raise ValidationError("Cannot change the role of the workspace owner")

    membership = await uow.memberships.get(workspace_id, target_user_id)
    if not membership:
        raise NotFound("WorkspaceMembership", f"{workspace_id}/{target_user_id}")
    if SystemRole.normalize(membership.role) == SystemRole.OWNER.value:
        raise ValidationError("Cannot change the role of the workspace owner")
    return workspace, membership
