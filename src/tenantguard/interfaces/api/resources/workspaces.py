"""Workspace access and membership API resources."""

from uuid import UUID

import falcon.asgi

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
from tenantguard.interfaces.api.resources._helpers import current_user_id, json_body


class WorkspacesResource:
    """GET /v1/workspaces - workspaces the caller owns or belongs to."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        workspaces = await self._gateway.list_workspaces(user_id)
        resp.media = {
            "items": [
                {
                    "id": str(w.workspace.id),
                    "name": w.workspace.name,
                    "owner_id": w.workspace.owner_id,
                    "role": w.role_name,
                }
                for w in workspaces
            ]
        }
        resp.status = falcon.HTTP_200


class ProjectAccessContextResource:
    """GET /v1/workspaces/{workspace_id}/project-access - caller's project visibility."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, workspace_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        access = await self._gateway.project_access_context(workspace_id, user_id)
        resp.media = {
            "has_full_access": access.has_full_access,
            "accessible_project_ids": [str(p) for p in access.accessible_project_ids],
            "is_owner": access.is_owner,
            "role": access.role_name,
            "scope": access.scope.value,
        }
        resp.status = falcon.HTTP_200


class ProjectAccessResource:
    """GET /v1/workspaces/{workspace_id}/projects/{project_id}/access."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: UUID,
        project_id: UUID,
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        allowed = await self._gateway.project_access(workspace_id, project_id, user_id)
        resp.media = {"allowed": allowed}
        resp.status = falcon.HTTP_200


class MemberRoleResource:
    """PATCH /v1/workspaces/{workspace_id}/members/{user_id}/role - set system or custom role."""

    def __init__(self, change_member_role: ChangeMemberRoleUseCase) -> None:
        self._change = change_member_role

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: UUID,
        user_id: str,
    ) -> None:
        actor_id = current_user_id(req, resp)
        if not actor_id:
            return

        body = await json_body(req)
        role_name = await self._change.execute(actor_id, workspace_id, user_id, body.get("role"))
        resp.media = {"role": role_name}
        resp.status = falcon.HTTP_200


class MemberCustomRoleResource:
    """DELETE /v1/workspaces/{workspace_id}/members/{user_id}/custom-role."""

    def __init__(self, remove_role_assignment: RemoveRoleAssignmentUseCase) -> None:
        self._remove = remove_role_assignment

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: UUID,
        user_id: str,
    ) -> None:
        actor_id = current_user_id(req, resp)
        if not actor_id:
            return

        await self._remove.execute(actor_id, workspace_id, user_id)
        resp.status = falcon.HTTP_204


class MemberProjectScopeResource:
    """PATCH /v1/workspaces/{workspace_id}/members/{user_id}/project-access-scope."""

    def __init__(self, set_project_access_scope: SetProjectAccessScopeUseCase) -> None:
        self._set_scope = set_project_access_scope

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: UUID,
        user_id: str,
    ) -> None:
        actor_id = current_user_id(req, resp)
        if not actor_id:
            return

        body = await json_body(req)
        scope = await self._set_scope.execute(actor_id, workspace_id, user_id, body.get("scope"))
        resp.media = {"scope": scope.value}
        resp.status = falcon.HTTP_200
