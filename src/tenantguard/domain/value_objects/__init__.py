"""Domain value objects."""

from tenantguard.domain.value_objects.permission_key import PermissionKey
from tenantguard.domain.value_objects.project_access_scope import ProjectAccessScope
from tenantguard.domain.value_objects.resolved_role import (
    MemberWithCustomRole,
    MemberWithSystemRole,
    NoRelationship,
    Owner,
    ResolvedRole,
)
from tenantguard.domain.value_objects.system_role import SystemRole

__all__ = [
    "MemberWithCustomRole",
    "MemberWithSystemRole",
    "NoRelationship",
    "Owner",
    "PermissionKey",
    "ProjectAccessScope",
    "ResolvedRole",
    "SystemRole",
]
