"""Mapping of domain exceptions onto HTTP responses."""

import logging

import falcon
import falcon.asgi

from tenantguard.domain.exceptions import (
    DuplicateName,
    InvalidPermissionIds,
    NotFound,
    PermissionDenied,
    RoleInUse,
    StoreFailure,
    SystemRoleImmutable,
    TenantGuardError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def handle_domain_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: TenantGuardError,
    params: dict,
) -> None:
    """Translate typed errors. Denials never reveal why access was refused."""
    if isinstance(ex, PermissionDenied):
        resp.status = falcon.HTTP_403
        resp.media = {"error": "Permission denied"}
    elif isinstance(ex, NotFound):
        resp.status = falcon.HTTP_404
        resp.media = {"error": "Not found"}
    elif isinstance(ex, (DuplicateName, RoleInUse)):
        resp.status = falcon.HTTP_409
        resp.media = {"error": str(ex)}
    elif isinstance(ex, InvalidPermissionIds):
        resp.status = falcon.HTTP_400
        resp.media = {
            "error": "Some permission IDs are invalid",
            "invalid_ids": [str(i) for i in ex.invalid_ids],
        }
    elif isinstance(ex, (SystemRoleImmutable, ValidationError)):
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(ex)}
    else:
        if isinstance(ex, StoreFailure):
            logger.error("Store failure on %s %s: %s", req.method, req.path, ex)
        else:
            logger.exception("Unhandled domain error on %s %s", req.method, req.path)
        resp.status = falcon.HTTP_500
        resp.media = {"error": "Internal server error"}


async def handle_unexpected_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: Exception,
    params: dict,
) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}
