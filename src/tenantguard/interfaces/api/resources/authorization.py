"""Permission check API resources."""

import falcon.asgi

from tenantguard.application.services.gateway import AuthorizationGateway
from tenantguard.domain.exceptions import ValidationError
from tenantguard.interfaces.api.resources._helpers import (
    current_user_id,
    json_body,
    optional_uuid,
)


class CheckPermissionResource:
    """POST /v1/auth/check-permission - single permission check for the caller."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        body = await json_body(req)
        workspace_id = optional_uuid(body.get("workspace_id"), "workspace_id")
        allowed = await self._gateway.check(
            user_id, body.get("resource"), body.get("action"), workspace_id
        )
        resp.media = {"allowed": allowed}
        resp.status = falcon.HTTP_200


class CheckPermissionsBatchResource:
    """POST /v1/auth/check-permissions-batch - several checks in one call."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = current_user_id(req, resp)
        if not user_id:
            return

        body = await json_body(req)
        permissions = body.get("permissions")
        if not isinstance(permissions, list) or not permissions:
            raise ValidationError("Invalid permissions array")
        if not all(isinstance(p, dict) for p in permissions):
            raise ValidationError("Each permission must be an object with resource and action")

        workspace_id = optional_uuid(body.get("workspace_id"), "workspace_id")
        result = await self._gateway.check_batch(
            user_id,
            [(p.get("resource"), p.get("action")) for p in permissions],
            workspace_id,
        )
        resp.media = {"permissions": result}
        resp.status = falcon.HTTP_200
