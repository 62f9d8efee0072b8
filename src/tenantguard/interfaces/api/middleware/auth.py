"""Resolves the calling principal before any resource runs."""

from dataclasses import dataclass

import falcon.asgi


@dataclass(frozen=True)
class RequestUser:
    """Caller identity placed on ``req.context.user``."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets ``req.context.user`` from a Bearer token, or None.

    Resources answer a None user with 401. Without a provider every request
    is anonymous.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._provider = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.user = None
        scheme, _, token = (req.get_header("Authorization") or "").partition(" ")
        if scheme != "Bearer" or not token or self._provider is None:
            return
        identity = await self._provider.decode_token(token)
        if identity:
            req.context.user = RequestUser(identity.user_id, identity.email, identity.username)
