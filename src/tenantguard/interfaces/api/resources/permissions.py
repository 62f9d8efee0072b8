"""Permission catalog API resource."""

import falcon.asgi

from tenantguard.application.services.gateway import AuthorizationGateway
from tenantguard.interfaces.api.resources._helpers import current_user_id, permission_to_dict


class PermissionsResource:
    """GET /v1/permissions - permission catalog, optionally filtered by resource."""

    def __init__(self, gateway: AuthorizationGateway) -> None:
        self._gateway = gateway

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not current_user_id(req, resp):
            return

        permissions = await self._gateway.list_permissions(req.get_param("resource"))
        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200
