"""Principal repository port."""

from typing import Protocol

from tenantguard.domain.entities import Principal


class PrincipalRepository(Protocol):
    """Port for reading principals (owned by the identity subsystem)."""

    async def get_by_id(self, user_id: str) -> Principal | None: ...
