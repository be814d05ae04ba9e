"""Access request API resources."""

import falcon.asgi

from agrigov.application.ports import PermissionChecker
from agrigov.application.use_cases.access_request.list_access_requests import (
    ListAccessRequestsUseCase,
)
from agrigov.application.use_cases.access_request.request_access import RequestAccessUseCase
from agrigov.application.use_cases.access_request.review_access_request import (
    ReviewAccessRequestUseCase,
)
from agrigov.domain.exceptions import ValidationError
from agrigov.domain.value_objects import AccessRequestStatus
from agrigov.domain.value_objects.permission_key import READ_PERMISSIONS_PERMISSION
from agrigov.interfaces.api.guards import (
    current_user,
    parse_uuid,
    read_body,
    require_permission,
    required,
)
from agrigov.interfaces.api.serializers import access_request_to_dict


class AccessRequestsResource:
    """GET/POST /v1/tenants/{tenant_id}/access-requests - list and file requests."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        request_access: RequestAccessUseCase,
        list_access_requests: ListAccessRequestsUseCase,
    ) -> None:
        self._permission_checker = permission_checker
        self._request_access = request_access
        self._list = list_access_requests

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        await require_permission(
            self._permission_checker, user.user_id, tenant_id, READ_PERMISSIONS_PERMISSION
        )

        status = req.get_param("status")
        try:
            status_filter = AccessRequestStatus(status) if status else None
        except ValueError as e:
            raise ValidationError(f"Unknown status: {status}") from e
        limit = req.get_param_as_int("limit") or 100
        limit = min(max(limit, 1), 500)

        requests = await self._list.execute(tenant_id, status=status_filter, limit=limit)
        resp.media = {"items": [access_request_to_dict(r) for r in requests]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        """File a request for the caller."""
        user = current_user(req, resp)
        if not user:
            return

        body = await read_body(req)
        request_id = await self._request_access.execute(
            subject_id=user.user_id,
            tenant_id=tenant_id,
            permission=required(body, "permission"),
            resource_type=required(body, "resource_type"),
            justification=required(body, "justification"),
            resource_id=body.get("resource_id"),
            emergency=bool(body.get("emergency", False)),
        )
        resp.media = {"id": str(request_id), "status": str(AccessRequestStatus.PENDING)}
        resp.status = falcon.HTTP_201


class AccessRequestReviewResource:
    """POST /v1/tenants/{tenant_id}/access-requests/{request_id}/review."""

    def __init__(self, review_access_request: ReviewAccessRequestUseCase) -> None:
        self._review = review_access_request

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        tenant_id: str,
        request_id: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        rid = parse_uuid(request_id, "request ID")
        body = await read_body(req)
        approve = required(body, "approve")
        if not isinstance(approve, bool):
            raise ValidationError("approve must be a boolean")

        request = await self._review.execute(
            rid, user.user_id, approve, body.get("notes"), tenant_id=tenant_id
        )
        resp.media = access_request_to_dict(request)
        resp.status = falcon.HTTP_200
