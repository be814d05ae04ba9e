"""Permission drift API resources."""

import falcon.asgi

from agrigov.application.ports import PermissionChecker
from agrigov.application.use_cases.drift.detect_permission_drift import (
    DetectPermissionDriftUseCase,
)
from agrigov.application.use_cases.drift.remediate_permission_drift import (
    RemediatePermissionDriftUseCase,
)
from agrigov.domain.value_objects.permission_key import AUDIT_PERMISSION
from agrigov.interfaces.api.guards import current_user, require_permission
from agrigov.interfaces.api.serializers import drift_to_dict


class DriftResource:
    """GET /v1/tenants/{tenant_id}/drift - detect permission drift."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        detect_drift: DetectPermissionDriftUseCase,
    ) -> None:
        self._permission_checker = permission_checker
        self._detect = detect_drift

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        await require_permission(self._permission_checker, user.user_id, tenant_id, AUDIT_PERMISSION)

        drifts = await self._detect.execute(tenant_id)
        resp.media = {"items": [drift_to_dict(d) for d in drifts]}
        resp.status = falcon.HTTP_200


class DriftRemediationResource:
    """POST /v1/tenants/{tenant_id}/drift/{drift_id}/remediate."""

    def __init__(self, remediate_drift: RemediatePermissionDriftUseCase) -> None:
        self._remediate = remediate_drift

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        tenant_id: str,
        drift_id: str,
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return

        drift = await self._remediate.execute(user.user_id, tenant_id, drift_id)
        resp.media = drift_to_dict(drift)
        resp.status = falcon.HTTP_200
