"""Grant API resources."""

import falcon.asgi

from agrigov.application.ports import PermissionChecker
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.application.use_cases.grant.assign_role import AssignRoleUseCase
from agrigov.application.use_cases.grant.grant_temporary_permission import (
    GrantTemporaryPermissionUseCase,
)
from agrigov.application.use_cases.grant.revoke_grant import RevokeGrantUseCase
from agrigov.domain.value_objects.permission_key import READ_PERMISSIONS_PERMISSION
from agrigov.interfaces.api.guards import (
    current_user,
    parse_uuid,
    read_body,
    require_permission,
    required,
)
from agrigov.interfaces.api.serializers import grant_to_dict, parse_datetime


class GrantsResource:
    """GET/POST /v1/tenants/{tenant_id}/grants - list active grants, assign a role."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        grant_ledger: GrantLedger,
        assign_role: AssignRoleUseCase,
    ) -> None:
        self._permission_checker = permission_checker
        self._ledger = grant_ledger
        self._assign_role = assign_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        await require_permission(
            self._permission_checker, user.user_id, tenant_id, READ_PERMISSIONS_PERMISSION
        )

        subject_id = req.get_param("subject_id")
        if subject_id:
            grants = await self._ledger.list_active_grants(subject_id, tenant_id)
        else:
            grants = await self._ledger.list_tenant_grants(tenant_id)
        resp.media = {"items": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        body = await read_body(req)
        expires_at = body.get("expires_at")
        grant = await self._assign_role.execute(
            user.user_id,
            tenant_id,
            required(body, "subject_id"),
            required(body, "role"),
            expires_at=parse_datetime(expires_at, "expires_at") if expires_at else None,
            reason=body.get("reason") or "",
        )
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_201


class TemporaryGrantsResource:
    """POST /v1/tenants/{tenant_id}/grants/temporary - grant one permission until a time."""

    def __init__(self, grant_temporary_permission: GrantTemporaryPermissionUseCase) -> None:
        self._grant = grant_temporary_permission

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        body = await read_body(req)
        grant = await self._grant.execute(
            user.user_id,
            tenant_id,
            required(body, "subject_id"),
            required(body, "permission"),
            parse_datetime(required(body, "expires_at"), "expires_at"),
            required(body, "reason"),
        )
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_201


class GrantResource:
    """DELETE /v1/tenants/{tenant_id}/grants/{grant_id} - deactivate a grant."""

    def __init__(self, revoke_grant: RevokeGrantUseCase) -> None:
        self._revoke = revoke_grant

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        tenant_id: str,
        grant_id: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        grant = await self._revoke.execute(
            user.user_id,
            tenant_id,
            parse_uuid(grant_id, "grant ID"),
            reason=req.get_param("reason") or "",
        )
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_200
