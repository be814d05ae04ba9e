"""Access analytics API resource."""

import falcon.asgi

from agrigov.application.ports import PermissionChecker
from agrigov.application.use_cases.analytics.get_access_analytics import (
    GetAccessAnalyticsUseCase,
)
from agrigov.domain.value_objects.permission_key import AUDIT_PERMISSION
from agrigov.interfaces.api.guards import current_user, require_permission
from agrigov.interfaces.api.serializers import summary_to_dict


class AnalyticsResource:
    """GET /v1/tenants/{tenant_id}/analytics?days=N - access summary."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        get_analytics: GetAccessAnalyticsUseCase,
    ) -> None:
        self._permission_checker = permission_checker
        self._get_analytics = get_analytics

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        await require_permission(self._permission_checker, user.user_id, tenant_id, AUDIT_PERMISSION)

        summary = await self._get_analytics.execute(tenant_id, req.get_param_as_int("days"))
        resp.media = summary_to_dict(summary)
        resp.status = falcon.HTTP_200
