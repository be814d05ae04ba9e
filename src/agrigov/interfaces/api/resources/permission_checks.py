"""Permission check API resource."""

import falcon.asgi

from agrigov.application.services.permission_resolver import PermissionResolver
from agrigov.domain.exceptions import ValidationError
from agrigov.domain.value_objects.permission_key import READ_PERMISSIONS_PERMISSION
from agrigov.interfaces.api.guards import current_user, read_body, require_permission, required


class PermissionChecksResource:
    """POST /v1/tenants/{tenant_id}/permission-checks - resolve a permission.

    Checking a subject other than the caller needs permissions.read.
    """

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        body = await read_body(req)
        permission = required(body, "permission")
        subject_id = body.get("subject_id") or user.user_id
        context = body.get("context")
        if context is not None and not isinstance(context, dict):
            raise ValidationError("context must be an object")

        if subject_id != user.user_id:
            await require_permission(self._resolver, user.user_id, tenant_id, READ_PERMISSIONS_PERMISSION)

        resolution = await self._resolver.resolve(
            subject_id,
            tenant_id,
            permission,
            resource_id=body.get("resource_id"),
            context=context,
        )
        resp.media = {
            "subject_id": subject_id,
            "permission": permission,
            "allowed": resolution.allowed,
            "reason": resolution.reason,
        }
        resp.status = falcon.HTTP_200
