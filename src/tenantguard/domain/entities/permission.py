"""Permission entity - a grantable (resource, action) pair."""

from dataclasses import dataclass
from uuid import UUID

from tenantguard.domain.value_objects import PermissionKey


@dataclass
class Permission:
    """Global capability, e.g. ("tasks", "read"). Only role assignment is workspace-scoped."""

    id: UUID
    resource: str
    action: str
    description: str | None = None

    @property
    def key(self) -> PermissionKey:
        return PermissionKey(self.resource, self.action)
