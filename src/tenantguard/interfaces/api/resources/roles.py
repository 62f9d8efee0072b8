"""Role catalog admin API resources."""

from uuid import UUID

import falcon.asgi

from tenantguard.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from tenantguard.application.services.gateway import AuthorizationGateway
from tenantguard.domain.exceptions import ValidationError
from tenantguard.interfaces.api.resources._helpers import (
    current_user_id,
    json_body,
    optional_uuid,
    permission_to_dict,
    role_to_dict,
)


class RolesResource:
    """GET/POST /v1/admin/roles - list and create roles."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        roles = await self._gateway.list_roles(user_id)
        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        body = await json_body(req)
        role = await self._gateway.create_role(
            user_id,
            RoleCreateInput(name=body.get("name"), description=body.get("description")),
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PATCH/DELETE /v1/admin/roles/{role_id}."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        role = await self._gateway.get_role(user_id, role_id)
        permissions = await self._gateway.get_role_permissions(user_id, role_id)
        resp.media = {
            **role_to_dict(role),
            "permissions": [permission_to_dict(p) for p in permissions],
        }
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        body = await json_body(req)
        description = body.get("description")
        if "description" in body and description is None:
            description = ""
        role = await self._gateway.update_role(
            user_id,
            role_id,
            RoleUpdateInput(name=body.get("name"), description=description),
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        await self._gateway.delete_role(user_id, role_id)
        resp.status = falcon.HTTP_204


class RolePermissionsResource:
    """GET/PUT /v1/admin/roles/{role_id}/permissions - read or replace a role's permissions."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        permissions = await self._gateway.get_role_permissions(user_id, role_id)
        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        body = await json_body(req)
        raw_ids = body.get("permission_ids")
        if not isinstance(raw_ids, list):
            raise ValidationError("permission_ids must be an array")
        permission_ids = [optional_uuid(i, "permission id") for i in raw_ids]
        if any(i is None for i in permission_ids):
            raise ValidationError("Invalid permission id")

        permissions = await self._gateway.set_role_permissions(user_id, role_id, permission_ids)
        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200
