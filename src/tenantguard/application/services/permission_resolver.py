"""Permission resolver - the allow/deny decision function."""

import asyncio
import logging
from uuid import UUID

from tenantguard.application.services.membership_resolver import resolve_in_uow
from tenantguard.application.services.role_registry import RoleRegistry
from tenantguard.domain.value_objects import (
    MemberWithCustomRole,
    MemberWithSystemRole,
    NoRelationship,
    Owner,
    PermissionKey,
)

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Decides whether a principal may perform ``action`` on ``resource``.

    Order, first match wins:

    1. global admin -> allow
    2. owner of the given workspace -> allow
    3. no resolved role -> deny
    4. custom role -> membership of (resource, action) in its permission set
    5. system role -> same test against the system role's seeded permission set

    Any error while resolving denies; a check never raises.
    """

    def __init__(self, unit_of_work_factory: type, role_registry: RoleRegistry) -> None:
        self._uow_factory = unit_of_work_factory
        self._role_registry = role_registry

    async def has_permission(
        self,
        user_id: str,
        resource: str,
        action: str,
        workspace_id: UUID | None = None,
    ) -> bool:
        try:
            return await self._evaluate(user_id, PermissionKey(resource, action), workspace_id)
        except Exception:
            logger.exception(
                "Permission check failed for user %s (%s.%s, workspace %s); denying",
                user_id,
                resource,
                action,
                workspace_id,
            )
            return False

    async def has_permissions_batch(
        self,
        user_id: str,
        keys: list[PermissionKey],
        workspace_id: UUID | None = None,
    ) -> dict[str, bool]:
        """Evaluate every pair independently; result keyed "resource.action".

        Names containing a dot would collide in the result; the gateway rejects them.
        """
        unique = list(dict.fromkeys(keys))
        results = await asyncio.gather(
            *(self.has_permission(user_id, k.resource, k.action, workspace_id) for k in unique)
        )
        return {k.key: allowed for k, allowed in zip(unique, results)}

    async def _evaluate(
        self, user_id: str, key: PermissionKey, workspace_id: UUID | None
    ) -> bool:
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(user_id)
            if principal and principal.is_global_admin:
                return True
            if workspace_id is None:
                # Workspace-scoped roles cannot apply without a workspace.
                return False
            resolved = await resolve_in_uow(uow, user_id, workspace_id)

        match resolved:
            case Owner():
                return True
            case NoRelationship():
                return False
            case MemberWithCustomRole(role_id=role_id):
                permissions = await self._role_registry.get_role_permissions(role_id)
            case MemberWithSystemRole(role_name=role_name):
                role = await self._role_registry.get_role_by_name(role_name)
                if not role or not role.is_system_role:
                    return False
                permissions = await self._role_registry.get_role_permissions(role.id)

        return any(p.key == key for p in permissions)
