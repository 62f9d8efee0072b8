"""Application entry point and composition root."""

import logging

from tenantguard import __version__
from tenantguard.application.services.gateway import AuthorizationGateway
from tenantguard.application.services.membership_resolver import WorkspaceMembershipResolver
from tenantguard.application.services.permission_resolver import PermissionResolver
from tenantguard.application.services.project_access import ProjectAccessScoper
from tenantguard.application.services.role_registry import RoleRegistry
from tenantguard.application.use_cases.membership.change_member_role import (
    ChangeMemberRoleUseCase,
)
from tenantguard.application.use_cases.membership.remove_role_assignment import (
    RemoveRoleAssignmentUseCase,
)
from tenantguard.application.use_cases.membership.set_project_access_scope import (
    SetProjectAccessScopeUseCase,
)
from tenantguard.config import get_settings
from tenantguard.infrastructure.auth.keycloak_provider import KeycloakProvider
from tenantguard.infrastructure.persistence.postgres.connection import create_pool
from tenantguard.infrastructure.persistence.postgres.schema_capabilities import (
    PostgresSchemaCapabilities,
)
from tenantguard.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from tenantguard.interfaces.api.app import create_app
from tenantguard.interfaces.api.middleware.auth import AuthMiddleware
from tenantguard.interfaces.api.middleware.lifespan import LifespanMiddleware

logger = logging.getLogger(__name__)


def build_gateway(unit_of_work_factory) -> AuthorizationGateway:
    """Wire the authorization services around one unit of work factory."""
    role_registry = RoleRegistry(unit_of_work_factory)
    return AuthorizationGateway(
        unit_of_work_factory=unit_of_work_factory,
        membership_resolver=WorkspaceMembershipResolver(unit_of_work_factory),
        permission_resolver=PermissionResolver(unit_of_work_factory, role_registry),
        project_access_scoper=ProjectAccessScoper(unit_of_work_factory),
        role_registry=role_registry,
    )


def create_tenantguard_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pool = create_pool(settings)
    capabilities = PostgresSchemaCapabilities(pool, settings.project_access_scope_column)
    uow_factory = create_uow_factory(pool, capabilities)

    keycloak = None
    if settings.keycloak_client_secret:
        keycloak = KeycloakProvider.from_settings(settings)
    else:
        logger.warning("Keycloak client secret not set; all requests are unauthenticated")

    logger.info("TenantGuard v%s (%s)", __version__, settings.environment)
    return create_app(
        gateway=build_gateway(uow_factory),
        change_member_role=ChangeMemberRoleUseCase(uow_factory),
        remove_role_assignment=RemoveRoleAssignmentUseCase(uow_factory),
        set_project_access_scope=SetProjectAccessScopeUseCase(uow_factory, capabilities),
        capabilities=capabilities,
        middleware=[
            LifespanMiddleware(pool, capabilities),
            AuthMiddleware(keycloak),
        ],
    )


def main() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_tenantguard_app(), host="0.0.0.0", port=8000)
