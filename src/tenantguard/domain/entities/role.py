"""Role entities for RBAC."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Role:
    """Role - seeded system role (owner, admin, member) or operator-defined custom role."""

    id: UUID
    name: str
    description: str | None = None
    is_system_role: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class UserRoleAssignment:
    """Custom role assigned to a user in one workspace (at most one per user per workspace)."""

    user_id: str
    workspace_id: UUID
    role_id: UUID
