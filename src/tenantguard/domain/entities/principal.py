"""Principal entity - authenticated user as seen by the authorization core."""

from dataclasses import dataclass


@dataclass
class Principal:
    """Authenticated user. Global admins bypass every check."""

    id: str
    is_global_admin: bool = False
