"""Fixed system role names stored on workspace memberships."""

from enum import StrEnum


class SystemRole(StrEnum):
    """Seeded, immutable roles."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def normalize(cls, value: str | None) -> str:
        """Map legacy membership role values onto current names."""
        if not value or value == "user":
            return cls.MEMBER.value
        return value

    @classmethod
    def is_system_role_name(cls, value: str) -> bool:
        return value in cls._value2member_map_
