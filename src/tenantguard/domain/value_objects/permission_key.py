"""Addressable (resource, action) pair a check is made against."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionKey:
    """Resource namespace plus verb, e.g. tasks.read."""

    resource: str
    action: str

    @property
    def key(self) -> str:
        """Batch result key: "resource.action"."""
        return f"{self.resource}.{self.action}"

    def __str__(self) -> str:
        return self.key
