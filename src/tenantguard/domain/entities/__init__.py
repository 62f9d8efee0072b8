"""Domain entities."""

from tenantguard.domain.entities.permission import Permission
from tenantguard.domain.entities.principal import Principal
from tenantguard.domain.entities.project import Project, ProjectMembership
from tenantguard.domain.entities.role import Role, UserRoleAssignment
from tenantguard.domain.entities.workspace import Workspace, WorkspaceMembership

__all__ = [
    "Permission",
    "Principal",
    "Project",
    "ProjectMembership",
    "Role",
    "UserRoleAssignment",
    "Workspace",
    "WorkspaceMembership",
]
