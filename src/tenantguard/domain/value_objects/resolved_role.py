"""Effective role of a principal in a workspace.

One of four cases, so callers must handle each explicitly:

- ``Owner`` - principal is the workspace ``owner_id``, or holds a legacy
  membership row with role "owner"; wins over custom role rows.
- ``MemberWithSystemRole`` - membership row, no custom role assignment.
- ``MemberWithCustomRole`` - membership row plus a user role assignment; the
  custom role replaces the system role for naming and permissions.
- ``NoRelationship`` - workspace missing, or no ownership and no membership.
"""

from dataclasses import dataclass
from uuid import UUID

from tenantguard.domain.value_objects.project_access_scope import ProjectAccessScope
from tenantguard.domain.value_objects.system_role import SystemRole


@dataclass(frozen=True)
class Owner:
    """Scope is the owner's membership row scope, if any; it never limits access."""

    project_access_scope: ProjectAccessScope = ProjectAccessScope.ALL

    @property
    def role_name(self) -> str:
        return SystemRole.OWNER.value


@dataclass(frozen=True)
class MemberWithSystemRole:
    role_name: str
    project_access_scope: ProjectAccessScope = ProjectAccessScope.ALL


@dataclass(frozen=True)
class MemberWithCustomRole:
    role_id: UUID
    role_name: str
    system_role_name: str = SystemRole.MEMBER.value
    project_access_scope: ProjectAccessScope = ProjectAccessScope.ALL


@dataclass(frozen=True)
class NoRelationship:
    @property
    def role_name(self) -> None:
        return None


ResolvedRole = Owner | MemberWithSystemRole | MemberWithCustomRole | NoRelationship
