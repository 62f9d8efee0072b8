"""Authorization gateway - the facade request handlers import."""

import logging
from collections.abc import Iterable
from uuid import UUID

from tenantguard.application.dto.access_dto import AccessibleWorkspace, ProjectAccessContext
from tenantguard.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantguard.application.services.membership_resolver import WorkspaceMembershipResolver
from tenantguard.application.services.permission_resolver import PermissionResolver
from tenantguard.application.services.project_access import ProjectAccessScoper
from tenantguard.application.services.role_registry import RoleRegistry
from tenantguard.domain.entities import Permission, Role
from tenantguard.domain.exceptions import PermissionDenied, ValidationError
from tenantguard.domain.value_objects import PermissionKey, SystemRole

logger = logging.getLogger(__name__)


def _name(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    if value != value.strip() or "." in value:
        # "resource.action" keys batch results; a dot would make keys ambiguous.
        raise ValidationError(f"{field} must not contain dots or surrounding whitespace")
    return value


def _permission_key(resource: object, action: object) -> PermissionKey:
    return PermissionKey(_name(resource, "resource"), _name(action, "action"))


class AuthorizationGateway:
    """Single entry point for authorization decisions and role catalog management.

    Decision calls return booleans or empty collections; they deny instead of
    raising when the store misbehaves. Catalog mutations raise typed errors.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        membership_resolver: WorkspaceMembershipResolver,
        permission_resolver: PermissionResolver,
        project_access_scoper: ProjectAccessScoper,
        role_registry: RoleRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._memberships = membership_resolver
        self._permissions = permission_resolver
        self._projects = project_access_scoper
        self._roles = role_registry

    async def check(
        self,
        user_id: str,
        resource: str,
        action: str,
        workspace_id: UUID | None = None,
    ) -> bool:
        key = _permission_key(resource, action)
        return await self._permissions.has_permission(
            user_id, key.resource, key.action, workspace_id
        )

    async def check_batch(
        self,
        user_id: str,
        pairs: Iterable[tuple[str, str]],
        workspace_id: UUID | None = None,
    ) -> dict[str, bool]:
        """Check several (resource, action) pairs; map keyed "resource.action"."""
        keys = [_permission_key(resource, action) for resource, action in pairs]
        if not keys:
            raise ValidationError("At least one permission is required")
        return await self._permissions.has_permissions_batch(user_id, keys, workspace_id)

    async def list_workspaces(self, user_id: str) -> list[AccessibleWorkspace]:
        try:
            return await self._memberships.list_accessible_workspaces(user_id)
        except Exception:
            logger.exception("Listing workspaces failed for user %s", user_id)
            return []

    async def project_access_context(
        self, workspace_id: UUID, user_id: str
    ) -> ProjectAccessContext:
        try:
            return await self._projects.get_project_access_context(workspace_id, user_id)
        except Exception:
            logger.exception(
                "Project access lookup failed for user %s in workspace %s",
                user_id,
                workspace_id,
            )
            return ProjectAccessContext.denied()

    async def project_access(
        self, workspace_id: UUID, project_id: UUID, user_id: str
    ) -> bool:
        access = await self.project_access_context(workspace_id, user_id)
        if access.has_full_access:
            return True
        return project_id in access.accessible_project_ids

    async def list_permissions(self, resource: str | None = None) -> list[Permission]:
        return await self._roles.list_permissions(resource or None)

    # --- Role catalog management (global admins and workspace owners) ---

    async def list_roles(self, actor_id: str) -> list[Role]:
        await self._require_role_manager(actor_id)
        return await self._roles.list_roles()

    async def get_role(self, actor_id: str, role_id: UUID) -> Role:
        await self._require_role_manager(actor_id)
        return await self._roles.get_role(role_id)

    async def create_role(self, actor_id: str, input_data: RoleCreateInput) -> Role:
        await self._require_role_manager(actor_id)
        return await self._roles.create_role(input_data)

    async def update_role(
        self, actor_id: str, role_id: UUID, input_data: RoleUpdateInput
    ) -> Role:
        await self._require_role_manager(actor_id)
        return await self._roles.update_role(role_id, input_data)

    async def delete_role(self, actor_id: str, role_id: UUID) -> None:
        await self._require_role_manager(actor_id)
        await self._roles.delete_role(role_id)

    async def get_role_permissions(self, actor_id: str, role_id: UUID) -> list[Permission]:
        await self._require_role_manager(actor_id)
        await self._roles.get_role(role_id)
        return await self._roles.get_role_permissions(role_id)

    async def set_role_permissions(
        self, actor_id: str, role_id: UUID, permission_ids: list[UUID]
    ) -> list[Permission]:
        await self._require_role_manager(actor_id)
        return await self._roles.set_role_permissions(role_id, permission_ids)

    async def _require_role_manager(self, actor_id: str) -> None:
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(actor_id)
            if principal and principal.is_global_admin:
                return
            if await uow.workspaces.list_by_owner(actor_id):
                return
            memberships = await uow.memberships.list_by_user(actor_id)
            if any(SystemRole.normalize(m.role) == SystemRole.OWNER.value for m in memberships):
                return
        raise PermissionDenied("Role management requires a global admin or workspace owner")
