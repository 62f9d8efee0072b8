"""Project access scope of a workspace membership."""

from enum import StrEnum


class ProjectAccessScope(StrEnum):
    """Unrestricted project visibility or explicit project grants only."""

    ALL = "all"
    RESTRICTED = "restricted"

    @classmethod
    def parse(cls, value: str | None) -> "ProjectAccessScope":
        """Read a stored value. Anything but 'restricted' (NULL, unknown) is 'all'."""
        if value == cls.RESTRICTED.value:
            return cls.RESTRICTED
        return cls.ALL
