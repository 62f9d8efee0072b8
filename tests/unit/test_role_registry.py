"""Unit tests for RoleRegistry."""

from uuid import uuid4

import pytest

from tenantguard.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantguard.application.services.role_registry import RoleRegistry
from tenantguard.application.use_cases.membership.remove_role_assignment import (
    RemoveRoleAssignmentUseCase,
)
from tenantguard.domain.exceptions import (
    DuplicateName,
    InvalidPermissionIds,
    NotFound,
    RoleInUse,
    SystemRoleImmutable,
    ValidationError,
)

from tests.conftest import FakeUnitOfWork


@pytest.fixture
def registry(uow_factory) -> RoleRegistry:
    return RoleRegistry(uow_factory)


@pytest.mark.asyncio
async def test_create_role_trims_name_and_is_not_system(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    role = await registry.create_role(RoleCreateInput(name="  Accountant ", description="Books"))

    assert role.name == "Accountant"
    assert role.description == "Books"
    assert role.is_system_role is False
    assert role.created_at is not None
    assert await fake_uow.roles.get_by_id(role.id) is role


@pytest.mark.asyncio
async def test_create_role_rejects_blank_name(registry: RoleRegistry) -> None:
    with pytest.raises(ValidationError):
        await registry.create_role(RoleCreateInput(name="   "))


@pytest.mark.asyncio
async def test_create_role_duplicate_name(registry: RoleRegistry) -> None:
    await registry.create_role(RoleCreateInput(name="Accountant"))

    with pytest.raises(DuplicateName):
        await registry.create_role(RoleCreateInput(name="Accountant"))


@pytest.mark.asyncio
async def test_create_role_cannot_shadow_system_role(registry: RoleRegistry) -> None:
    with pytest.raises(DuplicateName):
        await registry.create_role(RoleCreateInput(name="admin"))


@pytest.mark.asyncio
async def test_list_roles_ordered_by_name(registry: RoleRegistry) -> None:
    await registry.create_role(RoleCreateInput(name="Zeta"))
    await registry.create_role(RoleCreateInput(name="Beta"))

    names = [r.name for r in await registry.list_roles()]

    assert names == sorted(names)
    assert {"owner", "admin", "member", "Zeta", "Beta"} == set(names)


@pytest.mark.asyncio
async def test_get_role_not_found(registry: RoleRegistry) -> None:
    with pytest.raises(NotFound):
        await registry.get_role(uuid4())


@pytest.mark.asyncio
async def test_update_role_renames_and_clears_description(registry: RoleRegistry) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant", description="Books"))

    updated = await registry.update_role(
        role.id, RoleUpdateInput(name="Bookkeeper", description="")
    )

    assert updated.name == "Bookkeeper"
    assert updated.description is None
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_update_role_keeps_own_name(registry: RoleRegistry) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))

    updated = await registry.update_role(role.id, RoleUpdateInput(name="Accountant"))

    assert updated.name == "Accountant"


@pytest.mark.asyncio
async def test_update_role_duplicate_name(registry: RoleRegistry) -> None:
    await registry.create_role(RoleCreateInput(name="Accountant"))
    other = await registry.create_role(RoleCreateInput(name="Viewer"))

    with pytest.raises(DuplicateName):
        await registry.update_role(other.id, RoleUpdateInput(name="Accountant"))


@pytest.mark.asyncio
async def test_system_roles_are_immutable(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    admin = await fake_uow.roles.get_by_name("admin")

    with pytest.raises(SystemRoleImmutable):
        await registry.update_role(admin.id, RoleUpdateInput(name="superuser"))
    with pytest.raises(SystemRoleImmutable):
        await registry.delete_role(admin.id)
    assert (await fake_uow.roles.get_by_id(admin.id)).name == "admin"


@pytest.mark.asyncio
async def test_delete_role(fake_uow: FakeUnitOfWork, registry: RoleRegistry) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))

    await registry.delete_role(role.id)

    assert await fake_uow.roles.get_by_id(role.id) is None


@pytest.mark.asyncio
async def test_delete_role_in_use_until_unassigned(
    fake_uow: FakeUnitOfWork, uow_factory, registry: RoleRegistry
) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "bob")
    fake_uow.assign_role(ws, "bob", role)

    with pytest.raises(RoleInUse):
        await registry.delete_role(role.id)
    assert await fake_uow.roles.get_by_id(role.id) is not None

    await RemoveRoleAssignmentUseCase(uow_factory).execute("alice", ws.id, "bob")
    await registry.delete_role(role.id)

    assert await fake_uow.roles.get_by_id(role.id) is None


@pytest.mark.asyncio
async def test_delete_role_not_found(registry: RoleRegistry) -> None:
    with pytest.raises(NotFound):
        await registry.delete_role(uuid4())


@pytest.mark.asyncio
async def test_set_role_permissions_replaces_set(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    """{A, B} replaced with {B, C} leaves exactly {B, C}."""
    role = await registry.create_role(RoleCreateInput(name="Accountant"))
    a = fake_uow.permission("tasks", "read")
    b = fake_uow.permission("invoices", "read")
    c = fake_uow.permission("invoices", "create")
    await registry.set_role_permissions(role.id, [a.id, b.id])

    result = await registry.set_role_permissions(role.id, [b.id, c.id])

    assert {p.id for p in result} == {b.id, c.id}
    assert {p.id for p in await registry.get_role_permissions(role.id)} == {b.id, c.id}


@pytest.mark.asyncio
async def test_set_role_permissions_sorted_and_deduplicated(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))
    tasks_read = fake_uow.permission("tasks", "read")
    invoices_read = fake_uow.permission("invoices", "read")

    result = await registry.set_role_permissions(
        role.id, [tasks_read.id, invoices_read.id, tasks_read.id]
    )

    assert [p.key.key for p in result] == ["invoices.read", "tasks.read"]


@pytest.mark.asyncio
async def test_set_role_permissions_empty_clears(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))
    await registry.set_role_permissions(role.id, [fake_uow.permission("tasks", "read").id])

    assert await registry.set_role_permissions(role.id, []) == []
    assert await registry.get_role_permissions(role.id) == []


@pytest.mark.asyncio
async def test_set_role_permissions_unknown_ids_change_nothing(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    role = await registry.create_role(RoleCreateInput(name="Accountant"))
    known = fake_uow.permission("tasks", "read")
    await registry.set_role_permissions(role.id, [known.id])
    unknown = uuid4()

    with pytest.raises(InvalidPermissionIds) as exc_info:
        await registry.set_role_permissions(
            role.id, [fake_uow.permission("invoices", "read").id, unknown]
        )

    assert exc_info.value.invalid_ids == [unknown]
    assert [p.id for p in await registry.get_role_permissions(role.id)] == [known.id]


@pytest.mark.asyncio
async def test_set_role_permissions_role_not_found(
    fake_uow: FakeUnitOfWork, registry: RoleRegistry
) -> None:
    with pytest.raises(NotFound):
        await registry.set_role_permissions(uuid4(), [fake_uow.permission("tasks", "read").id])


@pytest.mark.asyncio
async def test_list_permissions_filters_and_sorts(registry: RoleRegistry) -> None:
    everything = await registry.list_permissions()
    invoices = await registry.list_permissions("invoices")

    assert [(p.resource, p.action) for p in everything] == sorted(
        (p.resource, p.action) for p in everything
    )
    assert [p.action for p in invoices] == ["create", "read"]
