"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from tenantguard.application.ports import SchemaCapabilities
from tenantguard.application.services.gateway import AuthorizationGateway
from tenantguard.application.use_cases.membership.change_member_role import (
    ChangeMemberRoleUseCase,
)
from tenantguard.application.use_cases.membership.remove_role_assignment import (
    RemoveRoleAssignmentUseCase,
)
from tenantguard.application.use_cases.membership.set_project_access_scope import (
    SetProjectAccessScopeUseCase,
)
from tenantguard.domain.exceptions import TenantGuardError
from tenantguard.interfaces.api.errors import handle_domain_error, handle_unexpected_error
from tenantguard.interfaces.api.resources.authorization import (
    CheckPermissionResource,
    CheckPermissionsBatchResource,
)
from tenantguard.interfaces.api.resources.health import HealthResource
from tenantguard.interfaces.api.resources.permissions import PermissionsResource
from tenantguard.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from tenantguard.interfaces.api.resources.workspaces import (
    MemberCustomRoleResource,
    MemberProjectScopeResource,
    MemberRoleResource,
    ProjectAccessContextResource,
    ProjectAccessResource,
    WorkspacesResource,
)


def create_app(
    gateway: AuthorizationGateway,
    change_member_role: ChangeMemberRoleUseCase,
    remove_role_assignment: RemoveRoleAssignmentUseCase,
    set_project_access_scope: SetProjectAccessScopeUseCase,
    capabilities: SchemaCapabilities | None = None,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(TenantGuardError, handle_domain_error)

    workspace = "/v1/workspaces/{workspace_id:uuid}"
    member = workspace + "/members/{user_id}"

    health = HealthResource(capabilities)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/auth/check-permission", CheckPermissionResource(gateway))
    app.add_route("/v1/auth/check-permissions-batch", CheckPermissionsBatchResource(gateway))
    app.add_route("/v1/permissions", PermissionsResource(gateway))
    app.add_route("/v1/admin/roles", RolesResource(gateway))
    app.add_route("/v1/admin/roles/{role_id:uuid}", RoleResource(gateway))
    app.add_route("/v1/admin/roles/{role_id:uuid}/permissions", RolePermissionsResource(gateway))
    app.add_route("/v1/workspaces", WorkspacesResource(gateway))
    app.add_route(workspace + "/project-access", ProjectAccessContextResource(gateway))
    app.add_route(
        workspace + "/projects/{project_id:uuid}/access", ProjectAccessResource(gateway)
    )
    app.add_route(member + "/role", MemberRoleResource(change_member_role))
    app.add_route(member + "/custom-role", MemberCustomRoleResource(remove_role_assignment))
    app.add_route(
        member + "/project-access-scope", MemberProjectScopeResource(set_project_access_scope)
    )
    return app
