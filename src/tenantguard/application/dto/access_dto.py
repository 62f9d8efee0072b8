"""Access DTOs returned by the authorization services."""

from dataclasses import dataclass, field
from uuid import UUID

from tenantguard.domain.entities import Workspace
from tenantguard.domain.value_objects import ProjectAccessScope


@dataclass
class ProjectAccessContext:
    """Project visibility of a principal in one workspace.

    An empty ``accessible_project_ids`` means "unrestricted" when
    ``has_full_access`` is true and "nothing" otherwise; branch on
    ``has_full_access``, never on the list alone.
    """

    has_full_access: bool
    accessible_project_ids: list[UUID] = field(default_factory=list)
    is_owner: bool = False
    role_name: str | None = None
    scope: ProjectAccessScope = ProjectAccessScope.RESTRICTED

    @classmethod
    def denied(cls) -> "ProjectAccessContext":
        """Fail-closed context (workspace not found)."""
        return cls(has_full_access=False)


@dataclass
class AccessibleWorkspace:
    """Workspace visible to a principal together with the principal's role in it."""

    workspace: Workspace
    role_name: str
