"""Pytest fixtures for TenantGuard tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from tenantguard.domain.entities import (
    Permission,
    Principal,
    Project,
    ProjectMembership,
    Role,
    UserRoleAssignment,
    Workspace,
    WorkspaceMembership,
)
from tenantguard.domain.exceptions import StoreFailure
from tenantguard.domain.value_objects import ProjectAccessScope


# --- Fake repositories ---


class FakePrincipalRepository:
    """In-memory principal repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Principal] = {}

    async def get_by_id(self, user_id: str) -> Principal | None:
        return self._by_id.get(user_id)

    def add(self, principal: Principal) -> None:
        self._by_id[principal.id] = principal


class FakeWorkspaceRepository:
    """In-memory workspace repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Workspace] = {}

    async def get_by_id(self, workspace_id: UUID) -> Workspace | None:
        return self._by_id.get(workspace_id)

    async def list_by_owner(self, user_id: str) -> list[Workspace]:
        return [w for w in self._by_id.values() if w.owner_id == user_id]

    async def list_by_ids(self, workspace_ids: list[UUID]) -> list[Workspace]:
        return [self._by_id[i] for i in workspace_ids if i in self._by_id]

    def add(self, workspace: Workspace) -> None:
        self._by_id[workspace.id] = workspace


class FakeMembershipRepository:
    """In-memory workspace membership repository."""

    def __init__(self) -> None:
        self._rows: dict[tuple[UUID, str], WorkspaceMembership] = {}

    async def get(self, workspace_id: UUID, user_id: str) -> WorkspaceMembership | None:
        return self._rows.get((workspace_id, user_id))

    async def list_by_user(self, user_id: str) -> list[WorkspaceMembership]:
        return [m for m in self._rows.values() if m.user_id == user_id]

    async def update_role(self, workspace_id: UUID, user_id: str, role: str) -> None:
        self._rows[(workspace_id, user_id)].role = role

    async def update_project_access_scope(
        self, workspace_id: UUID, user_id: str, scope: ProjectAccessScope
    ) -> None:
        self._rows[(workspace_id, user_id)].project_access_scope = scope

    def add(self, membership: WorkspaceMembership) -> None:
        self._rows[(membership.workspace_id, membership.user_id)] = membership


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        return next((r for r in self._by_id.values() if r.name == name), None)

    async def list_all(self) -> list[Role]:
        return list(self._by_id.values())

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)

    def add_role(self, role: Role) -> None:
        self._by_id[role.id] = role


class FakePermissionRepository:
    """In-memory permission catalog with role links."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}
        self._links: dict[UUID, set[UUID]] = {}

    async def list_catalog(self, resource: str | None = None) -> list[Permission]:
        return [p for p in self._by_id.values() if resource is None or p.resource == resource]

    async def get_by_ids(self, permission_ids: list[UUID]) -> list[Permission]:
        return [self._by_id[i] for i in permission_ids if i in self._by_id]

    async def list_for_role(self, role_id: UUID) -> list[Permission]:
        return [self._by_id[i] for i in self._links.get(role_id, set()) if i in self._by_id]

    async def replace_for_role(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        self._links[role_id] = set(permission_ids)

    def add(self, resource: str, action: str) -> Permission:
        permission = Permission(id=uuid4(), resource=resource, action=action)
        self._by_id[permission.id] = permission
        return permission

    def grant(self, role_id: UUID, *permissions: Permission) -> None:
        self._links.setdefault(role_id, set()).update(p.id for p in permissions)


class FakeUserRoleRepository:
    """In-memory custom role assignments, unique per (workspace, user)."""

    def __init__(self) -> None:
        self._rows: dict[tuple[UUID, str], UserRoleAssignment] = {}

    async def get_for_user(
        self, workspace_id: UUID, user_id: str
    ) -> UserRoleAssignment | None:
        return self._rows.get((workspace_id, user_id))

    async def exists_for_role(self, role_id: UUID) -> bool:
        return any(a.role_id == role_id for a in self._rows.values())

    async def upsert(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        self._rows[(assignment.workspace_id, assignment.user_id)] = assignment
        return assignment

    async def delete(self, workspace_id: UUID, user_id: str) -> None:
        self._rows.pop((workspace_id, user_id), None)


class FakeProjectRepository:
    """In-memory projects and project grants."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Project] = {}
        self._members: list[ProjectMembership] = []

    async def list_member_project_ids(self, user_id: str) -> list[UUID]:
        return [m.project_id for m in self._members if m.user_id == user_id]

    async def filter_ids_in_workspace(
        self, workspace_id: UUID, project_ids: list[UUID]
    ) -> list[UUID]:
        return [
            i
            for i in project_ids
            if i in self._by_id and self._by_id[i].workspace_id == workspace_id
        ]

    def add(self, project: Project) -> Project:
        self._by_id[project.id] = project
        return project

    def grant(self, project_id: UUID, user_id: str) -> None:
        self._members.append(ProjectMembership(project_id=project_id, user_id=user_id))

    def move(self, project_id: UUID, workspace_id: UUID) -> None:
        self._by_id[project_id].workspace_id = workspace_id


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories and seeding helpers."""

    def __init__(self) -> None:
        self.principals = FakePrincipalRepository()
        self.workspaces = FakeWorkspaceRepository()
        self.memberships = FakeMembershipRepository()
        self.roles = FakeRoleRepository()
        self.permissions = FakePermissionRepository()
        self.user_roles = FakeUserRoleRepository()
        self.projects = FakeProjectRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    # --- seeding helpers ---

    def add_workspace(self, owner_id: str, name: str = "Acme") -> Workspace:
        workspace = Workspace(
            id=uuid4(), name=name, owner_id=owner_id, created_at=datetime.now(UTC)
        )
        self.workspaces.add(workspace)
        return workspace

    def add_member(
        self,
        workspace: Workspace,
        user_id: str,
        role: str = "member",
        scope: ProjectAccessScope = ProjectAccessScope.ALL,
    ) -> WorkspaceMembership:
        membership = WorkspaceMembership(
            workspace_id=workspace.id,
            user_id=user_id,
            role=role,
            project_access_scope=scope,
        )
        self.memberships.add(membership)
        return membership

    def add_role(self, name: str, is_system_role: bool = False) -> Role:
        role = Role(id=uuid4(), name=name, is_system_role=is_system_role)
        self.roles.add_role(role)
        return role

    def assign_role(self, workspace: Workspace, user_id: str, role: Role) -> None:
        self.user_roles._rows[(workspace.id, user_id)] = UserRoleAssignment(
            user_id=user_id, workspace_id=workspace.id, role_id=role.id
        )

    def add_project(self, workspace: Workspace, name: str = "Project") -> Project:
        return self.projects.add(Project(id=uuid4(), workspace_id=workspace.id, name=name))

    def seed_system_roles(self) -> dict[str, Role]:
        """Seed owner/admin/member with the default grants (member: tasks.read, tasks.write)."""
        roles = {name: self.add_role(name, is_system_role=True) for name in ("owner", "admin", "member")}
        catalog = [
            self.permissions.add(resource, action)
            for resource, action in [
                ("tasks", "read"),
                ("tasks", "write"),
                ("tasks", "delete"),
                ("invoices", "read"),
                ("invoices", "create"),
                ("roles", "read"),
            ]
        ]
        self.permissions.grant(roles["admin"].id, *catalog)
        self.permissions.grant(roles["member"].id, catalog[0], catalog[1])
        return roles

    def permission(self, resource: str, action: str) -> Permission:
        return next(
            p
            for p in self.permissions._by_id.values()
            if p.resource == resource and p.action == action
        )


def shared_factory(uow: FakeUnitOfWork):
    """Factory that yields the same UoW on every call so state survives across calls."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


@asynccontextmanager
async def failing_uow_factory() -> AsyncIterator[FakeUnitOfWork]:
    """Factory whose store is unreachable."""
    raise StoreFailure("connection refused")
    yield  # pragma: no cover


class FakeSchemaCapabilities:
    """Schema capabilities with a fixed answer."""

    def __init__(self, project_access_scope: bool = True) -> None:
        self.project_access_scope = project_access_scope

    async def supports_project_access_scope(self) -> bool:
        return self.project_access_scope


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork with system roles seeded."""
    uow = FakeUnitOfWork()
    uow.seed_system_roles()
    return uow


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return shared_factory(fake_uow)
