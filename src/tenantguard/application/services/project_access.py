"""Project access scoper - which projects of a workspace a principal may see."""

import logging
from uuid import UUID

from tenantguard.application.dto.access_dto import ProjectAccessContext
from tenantguard.application.services.membership_resolver import resolve_in_uow
from tenantguard.domain.value_objects import (
    MemberWithCustomRole,
    MemberWithSystemRole,
    NoRelationship,
    Owner,
    ProjectAccessScope,
    SystemRole,
)

logger = logging.getLogger(__name__)

_PRIVILEGED_ROLES = frozenset({SystemRole.OWNER.value, SystemRole.ADMIN.value})


class ProjectAccessScoper:
    """Resolves unrestricted vs. explicitly granted project visibility.

    Every call re-reads membership and grants; nothing is cached, so projects
    created or grants revoked after a previous call are reflected immediately.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def get_project_access_context(
        self, workspace_id: UUID, user_id: str
    ) -> ProjectAccessContext:
        async with self._uow_factory() as uow:
            resolved = await resolve_in_uow(uow, user_id, workspace_id)

            match resolved:
                case NoRelationship():
                    return ProjectAccessContext.denied()
                case Owner():
                    return ProjectAccessContext(
                        has_full_access=True,
                        is_owner=True,
                        role_name=resolved.role_name,
                        scope=resolved.project_access_scope,
                    )
                case MemberWithCustomRole(system_role_name=system_role):
                    privileged = system_role in _PRIVILEGED_ROLES
                case MemberWithSystemRole(role_name=system_role):
                    privileged = system_role in _PRIVILEGED_ROLES

            scope = resolved.project_access_scope
            if privileged or scope == ProjectAccessScope.ALL:
                return ProjectAccessContext(
                    has_full_access=True,
                    role_name=resolved.role_name,
                    scope=scope,
                )

            candidate_ids = list(
                dict.fromkeys(await uow.projects.list_member_project_ids(user_id))
            )
            if not candidate_ids:
                accessible: list[UUID] = []
            else:
                # Grants to projects that moved to another workspace or were deleted drop out here.
                in_workspace = set(
                    await uow.projects.filter_ids_in_workspace(workspace_id, candidate_ids)
                )
                accessible = [pid for pid in candidate_ids if pid in in_workspace]

        return ProjectAccessContext(
            has_full_access=False,
            accessible_project_ids=accessible,
            role_name=resolved.role_name,
            scope=scope,
        )

    async def can_access_project(
        self, workspace_id: UUID, project_id: UUID, user_id: str
    ) -> bool:
        access = await self.get_project_access_context(workspace_id, user_id)
        if access.has_full_access:
            return True
        return project_id in access.accessible_project_ids
