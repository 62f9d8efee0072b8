"""Role DTOs."""

from dataclasses import dataclass


@dataclass
class RoleCreateInput:
    """Input for creating a custom role."""

    name: str
    description: str | None = None


@dataclass
class RoleUpdateInput:
    """Partial role update. ``None`` leaves a field unchanged; an empty description clears it."""

    name: str | None = None
    description: str | None = None
