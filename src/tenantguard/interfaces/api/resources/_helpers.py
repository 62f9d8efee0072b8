"""Request helpers shared by API resources."""

from uuid import UUID

import falcon.asgi

from tenantguard.domain.entities import Permission, Role
from tenantguard.domain.exceptions import ValidationError


def current_user_id(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> str | None:
    """Return the caller's id, or set 401 on resp and return None."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    return user.user_id


async def json_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def optional_uuid(value: object, field: str) -> UUID | None:
    if value in (None, ""):
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}") from None


def permission_to_dict(p: Permission) -> dict:
    return {
        "id": str(p.id),
        "resource": p.resource,
        "action": p.action,
        "description": p.description,
    }


def role_to_dict(r: Role) -> dict:
    return {
        "id": str(r.id),
        "name": r.name,
        "description": r.description,
        "is_system_role": r.is_system_role,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }
