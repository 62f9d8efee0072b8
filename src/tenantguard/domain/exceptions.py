"""Domain exceptions."""


class TenantGuardError(Exception):
    """Base exception for TenantGuard."""

    pass


class PermissionDenied(TenantGuardError):
    """Principal is not allowed to perform the requested operation."""

    pass


class NotFound(TenantGuardError):
    """Requested workspace, role, permission or membership was not found."""

    pass


class ValidationError(TenantGuardError):
    """Validation failed for input data."""

    pass


class DuplicateName(TenantGuardError):
    """Role with the same name already exists."""

    pass


class SystemRoleImmutable(TenantGuardError):
    """System roles cannot be modified or deleted."""

    pass


class RoleInUse(TenantGuardError):
    """Role is still assigned to at least one user."""

    pass


class InvalidPermissionIds(TenantGuardError):
    """Some of the supplied permission ids do not exist."""

    def __init__(self, invalid_ids: list) -> None:
        self.invalid_ids = list(invalid_ids)
        super().__init__(
            "Some permission IDs are invalid: "
            + ", ".join(str(i) for i in self.invalid_ids)
        )


class StoreFailure(TenantGuardError):
    """Catalog store failed (connection, query, constraint)."""

    pass
