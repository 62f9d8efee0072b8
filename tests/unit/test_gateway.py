"""Unit tests for AuthorizationGateway."""

from uuid import uuid4

import pytest

from tenantguard.application.dto.access_dto import ProjectAccessContext
from tenantguard.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantguard.domain.entities import Principal
from tenantguard.domain.exceptions import PermissionDenied, ValidationError
from tenantguard.domain.value_objects import ProjectAccessScope
from tenantguard.main import build_gateway

from tests.conftest import FakeUnitOfWork, failing_uow_factory


@pytest.fixture
def gateway(uow_factory):
    return build_gateway(uow_factory)


@pytest.mark.asyncio
async def test_check_delegates_to_resolver(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "bob")

    assert await gateway.check("bob", "tasks", "read", ws.id) is True
    assert await gateway.check("bob", "roles", "delete", ws.id) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("resource", "action"),
    [("", "read"), ("tasks", "  "), (None, "read"), ("tasks", 5), (" tasks", "read"), ("a.b", "c")],
)
async def test_check_rejects_invalid_input(gateway, resource, action) -> None:
    with pytest.raises(ValidationError):
        await gateway.check("bob", resource, action, uuid4())


@pytest.mark.asyncio
async def test_check_batch(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "bob")

    result = await gateway.check_batch(
        "bob", [("tasks", "read"), ("invoices", "create")], ws.id
    )

    assert result == {"tasks.read": True, "invoices.create": False}


@pytest.mark.asyncio
async def test_check_batch_requires_pairs(gateway) -> None:
    with pytest.raises(ValidationError):
        await gateway.check_batch("bob", [], uuid4())
    with pytest.raises(ValidationError):
        await gateway.check_batch("bob", [("tasks", "")], uuid4())


@pytest.mark.asyncio
async def test_store_failures_collapse_to_deny() -> None:
    gateway = build_gateway(failing_uow_factory)
    ws_id = uuid4()

    assert await gateway.check("bob", "tasks", "read", ws_id) is False
    assert await gateway.check_batch("bob", [("tasks", "read")], ws_id) == {"tasks.read": False}
    assert await gateway.list_workspaces("bob") == []
    assert await gateway.project_access(ws_id, uuid4(), "bob") is False
    assert await gateway.project_access_context(ws_id, "bob") == ProjectAccessContext.denied()


@pytest.mark.asyncio
async def test_list_workspaces(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice", name="Acme")
    fake_uow.add_member(ws, "bob", role="admin")

    result = await gateway.list_workspaces("bob")

    assert [(w.workspace.id, w.role_name) for w in result] == [(ws.id, "admin")]


@pytest.mark.asyncio
async def test_project_access(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "bob", scope=ProjectAccessScope.RESTRICTED)
    granted = fake_uow.add_project(ws)
    hidden = fake_uow.add_project(ws)
    fake_uow.projects.grant(granted.id, "bob")

    assert await gateway.project_access(ws.id, granted.id, "bob") is True
    assert await gateway.project_access(ws.id, hidden.id, "bob") is False
    assert await gateway.project_access(ws.id, hidden.id, "alice") is True


@pytest.mark.asyncio
async def test_list_permissions_empty_filter_means_all(gateway) -> None:
    everything = await gateway.list_permissions()

    assert await gateway.list_permissions("") == everything
    assert {p.resource for p in await gateway.list_permissions("tasks")} == {"tasks"}


@pytest.mark.asyncio
async def test_role_management_requires_admin_or_owner(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "bob", role="admin")

    with pytest.raises(PermissionDenied):
        await gateway.list_roles("bob")
    with pytest.raises(PermissionDenied):
        await gateway.create_role("bob", RoleCreateInput(name="Accountant"))
    with pytest.raises(PermissionDenied):
        await gateway.set_role_permissions("mallory", uuid4(), [])


@pytest.mark.asyncio
async def test_workspace_owner_manages_roles(fake_uow: FakeUnitOfWork, gateway) -> None:
    fake_uow.add_workspace(owner_id="alice")
    tasks_read = fake_uow.permission("tasks", "read")

    role = await gateway.create_role("alice", RoleCreateInput(name="Accountant"))
    role = await gateway.update_role("alice", role.id, RoleUpdateInput(description="Books"))
    permissions = await gateway.set_role_permissions("alice", role.id, [tasks_read.id])

    assert role.description == "Books"
    assert [p.id for p in permissions] == [tasks_read.id]
    assert [p.id for p in await gateway.get_role_permissions("alice", role.id)] == [tasks_read.id]
    assert (await gateway.get_role("alice", role.id)).name == "Accountant"

    await gateway.delete_role("alice", role.id)
    assert "Accountant" not in {r.name for r in await gateway.list_roles("alice")}


@pytest.mark.asyncio
async def test_global_admin_manages_roles(fake_uow: FakeUnitOfWork, gateway) -> None:
    fake_uow.principals.add(Principal(id="root", is_global_admin=True))

    roles = await gateway.list_roles("root")

    assert {"owner", "admin", "member"} <= {r.name for r in roles}


@pytest.mark.asyncio
async def test_check_batch_keys_cannot_collide(fake_uow: FakeUnitOfWork, gateway) -> None:
    """("a.b", "c") and ("a", "b.c") would share the key "a.b.c"."""
    ws = fake_uow.add_workspace(owner_id="alice")

    with pytest.raises(ValidationError):
        await gateway.check_batch("alice", [("a.b", "c"), ("a", "b.c")], ws.id)


@pytest.mark.asyncio
async def test_legacy_owner_membership_manages_roles(fake_uow: FakeUnitOfWork, gateway) -> None:
    ws = fake_uow.add_workspace(owner_id="alice")
    fake_uow.add_member(ws, "olivia", role="owner")

    role = await gateway.create_role("olivia", RoleCreateInput(name="Accountant"))

    assert role.name in {r.name for r in await gateway.list_roles("olivia")}
