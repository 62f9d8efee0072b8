"""Workspace and membership entities - the tenant boundary."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from tenantguard.domain.value_objects import ProjectAccessScope


@dataclass
class Workspace:
    """Tenant: owns projects, clients, tasks and a membership roster."""

    id: UUID
    name: str
    owner_id: str
    created_at: datetime | None = None


@dataclass
class WorkspaceMembership:
    """Principal's membership in a workspace with its system role and project scope."""

    workspace_id: UUID
    user_id: str
    role: str
    project_access_scope: ProjectAccessScope = ProjectAccessScope.ALL
