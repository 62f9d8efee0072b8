"""Role registry - lifecycle of custom roles and their permission sets."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from tenantguard.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantguard.domain.entities import Permission, Role
from tenantguard.domain.exceptions import (
    DuplicateName,
    InvalidPermissionIds,
    NotFound,
    RoleInUse,
    SystemRoleImmutable,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _sorted_permissions(permissions: list[Permission]) -> list[Permission]:
    return sorted(permissions, key=lambda p: (p.resource, p.action))


def _clean_name(name: str | None) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Role name is required")
    return name.strip()


class RoleRegistry:
    """Creates, renames, deletes roles and replaces their permission sets.

    Enforces catalog invariants: globally unique names, immutable seeded system
    roles, and no deletion while a user role assignment references the role.
    Callers are responsible for checking that the actor may manage roles.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def list_roles(self) -> list[Role]:
        """List all roles ordered by name."""
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        return sorted(roles, key=lambda r: r.name)

    async def get_role(self, role_id: UUID) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
        if not role:
            raise NotFound("Role", str(role_id))
        return role

    async def create_role(self, input_data: RoleCreateInput) -> Role:
        """Create custom role. Raises DuplicateName if the name is taken."""
        name = _clean_name(input_data.name)
        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise DuplicateName(f"Role with name {name!r} already exists")
            role = Role(
                id=uuid4(),
                name=name,
                description=input_data.description or None,
                is_system_role=False,
                created_at=now,
            )
            await uow.roles.create(role)
        logger.info("Created role %s (%s)", role.name, role.id)
        return role

    async def update_role(self, role_id: UUID, input_data: RoleUpdateInput) -> Role:
        """Rename or re-describe a custom role."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system_role:
                raise SystemRoleImmutable("Cannot modify system roles")

            if input_data.name is not None:
                name = _clean_name(input_data.name)
                existing = await uow.roles.get_by_name(name)
                if existing and existing.id != role.id:
                    raise DuplicateName(f"Role with name {name!r} already exists")
                role.name = name
            if input_data.description is not None:
                role.description = input_data.description or None
            role.updated_at = datetime.now(UTC)
            await uow.roles.update(role)
        logger.info("Updated role %s (%s)", role.name, role.id)
        return role

    async def delete_role(self, role_id: UUID) -> None:
        """Delete custom role after checking it is not assigned to anyone."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system_role:
                raise SystemRoleImmutable("Cannot delete system roles")
            if await uow.user_roles.exists_for_role(role_id):
                raise RoleInUse(
                    "Cannot delete role that is assigned to users. "
                    "Remove all assignments first."
                )
            await uow.roles.delete(role_id)
        logger.info("Deleted role %s (%s)", role.name, role_id)

    async def set_role_permissions(
        self, role_id: UUID, permission_ids: list[UUID]
    ) -> list[Permission]:
        """Replace the role's permission set with exactly ``permission_ids``.

        Either every id exists and the set is replaced in one transaction, or
        nothing changes and InvalidPermissionIds lists the unknown ids.
        """
        requested = list(dict.fromkeys(permission_ids))
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))

            found = await uow.permissions.get_by_ids(requested) if requested else []
            if len(found) != len(requested):
                found_ids = {p.id for p in found}
                raise InvalidPermissionIds([i for i in requested if i not in found_ids])

            await uow.permissions.replace_for_role(role_id, requested)
            permissions = await uow.permissions.list_for_role(role_id)
        logger.info("Set %d permissions on role %s (%s)", len(requested), role.name, role_id)
        return _sorted_permissions(permissions)

    async def get_role_permissions(self, role_id: UUID) -> list[Permission]:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_for_role(role_id)
        return _sorted_permissions(permissions)

    async def get_role_by_name(self, name: str) -> Role | None:
        async with self._uow_factory() as uow:
            return await uow.roles.get_by_name(name)

    async def list_permissions(self, resource: str | None = None) -> list[Permission]:
        """List the permission catalog sorted by (resource, action)."""
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_catalog(resource)
        return _sorted_permissions(permissions)
