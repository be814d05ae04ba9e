"""Request guards shared by resources."""

from uuid import UUID

import falcon.asgi

from agrigov.application.ports import PermissionChecker
from agrigov.domain.exceptions import Forbidden, ValidationError


def current_user(req: falcon.asgi.Request, resp: falcon.asgi.Response):
    """Return the caller, or set 401 on the response and return None."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    return user


async def require_permission(
    checker: PermissionChecker, user_id: str, tenant_id: str, permission: str
) -> None:
    if not await checker.check(user_id, tenant_id, permission):
        raise Forbidden("Permission denied")


def parse_uuid(value: str, name: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}") from e


async def read_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def required(body: dict, field: str) -> object:
    value = body.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required field: {field}")
    return value
