"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from tenantguard.application.ports.repositories import (
    MembershipRepository,
    PermissionRepository,
    PrincipalRepository,
    ProjectRepository,
    RoleRepository,
    UserRoleRepository,
    WorkspaceRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def principals(self) -> PrincipalRepository: ...

    @property
    def workspaces(self) -> WorkspaceRepository: ...

    @property
    def memberships(self) -> MembershipRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def user_roles(self) -> UserRoleRepository: ...

    @property
    def projects(self) -> ProjectRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
