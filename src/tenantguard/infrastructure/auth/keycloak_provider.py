"""Caller identification through Keycloak token introspection."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from tenantguard.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OIDCUser:
    """Subject of an active access token."""

    user_id: str
    email: str | None = None
    username: str | None = None


class KeycloakProvider:
    """Turns bearer tokens into subjects; knows nothing about roles.

    Global admin status lives in the profile table and is read by the
    authorization core, never taken from token claims.
    """

    def __init__(self, client: KeycloakOpenID) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "KeycloakProvider":
        return cls(
            KeycloakOpenID(
                server_url=settings.keycloak_url,
                realm_name=settings.keycloak_realm,
                client_id=settings.keycloak_client_id,
                client_secret_key=settings.keycloak_client_secret,
            )
        )

    async def decode_token(self, token: str) -> OIDCUser | None:
        """Return the token's subject, or None for inactive tokens and introspection errors."""
        try:
            claims = await self._client.a_introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        subject = claims.get("sub") if claims.get("active") else None
        if not subject:
            return None
        return OIDCUser(
            user_id=subject,
            email=claims.get("email"),
            username=claims.get("preferred_username"),
        )
