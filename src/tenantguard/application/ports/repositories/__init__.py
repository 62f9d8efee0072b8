"""Repository ports."""

from tenantguard.application.ports.repositories.membership_repository import (
    MembershipRepository,
)
from tenantguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from tenantguard.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from tenantguard.application.ports.repositories.project_repository import (
    ProjectRepository,
)
from tenantguard.application.ports.repositories.role_repository import RoleRepository
from tenantguard.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)
from tenantguard.application.ports.repositories.workspace_repository import (
    WorkspaceRepository,
)

__all__ = [
    "MembershipRepository",
    "PermissionRepository",
    "PrincipalRepository",
    "ProjectRepository",
    "RoleRepository",
    "UserRoleRepository",
    "WorkspaceRepository",
]
