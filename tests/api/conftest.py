"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from tenantguard.application.use_cases.membership.change_member_role import (
    ChangeMemberRoleUseCase,
)
from tenantguard.application.use_cases.membership.remove_role_assignment import (
    RemoveRoleAssignmentUseCase,
)
from tenantguard.application.use_cases.membership.set_project_access_scope import (
    SetProjectAccessScopeUseCase,
)
from tenantguard.interfaces.api.app import create_app
from tenantguard.interfaces.api.middleware.auth import RequestUser
from tenantguard.main import build_gateway

from tests.conftest import FakeSchemaCapabilities


class HeaderUserMiddleware:
    """Middleware that takes the caller from X-Test-User for testing."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        req.context.user = RequestUser(user_id=user_id) if user_id else None


@pytest.fixture
def app(uow_factory):
    """Falcon ASGI app wired to the in-memory unit of work."""
    return create_app(
        gateway=build_gateway(uow_factory),
        change_member_role=ChangeMemberRoleUseCase(uow_factory),
        remove_role_assignment=RemoveRoleAssignmentUseCase(uow_factory),
        set_project_access_scope=SetProjectAccessScopeUseCase(
            uow_factory, FakeSchemaCapabilities()
        ),
        capabilities=FakeSchemaCapabilities(),
        middleware=[HeaderUserMiddleware()],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
