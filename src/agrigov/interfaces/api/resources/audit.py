"""Access audit API resource."""

from datetime import timedelta

import falcon.asgi

from agrigov.application.ports import Clock, PermissionChecker
from agrigov.application.services.audit_log import AuditLog
from agrigov.domain.exceptions import ValidationError
from agrigov.domain.value_objects import AuditAction, AuditSource
from agrigov.domain.value_objects.permission_key import AUDIT_PERMISSION
from agrigov.interfaces.api.guards import current_user, require_permission
from agrigov.interfaces.api.serializers import audit_entry_to_dict


class AuditResource:
    """GET /v1/tenants/{tenant_id}/audit - query the access audit log, newest first."""

    def __init__(self, permission_checker: PermissionChecker, audit_log: AuditLog, clock: Clock) -> None:
        self._permission_checker = permission_checker
        self._audit_log = audit_log
        self._clock = clock

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, tenant_id: str
    ) -> None:
        user = current_user(req, resp)
        if not user:
            return
        await require_permission(self._permission_checker, user.user_id, tenant_id, AUDIT_PERMISSION)

        source = req.get_param("source")
        action = req.get_param("action")
        try:
            source_filter = AuditSource(source) if source else None
            actions = (AuditAction(action),) if action else None
        except ValueError as e:
            raise ValidationError(str(e)) from e
        days = req.get_param_as_int("days", min_value=1)
        limit = req.get_param_as_int("limit") or 100
        limit = min(max(limit, 1), 1000)

        entries = await self._audit_log.query(
            tenant_id=tenant_id,
            subject_id=req.get_param("subject_id"),
            source=source_filter,
            actions=actions,
            since=self._clock.now_utc() - timedelta(days=days) if days else None,
            limit=limit,
        )
        resp.media = {"items": [audit_entry_to_dict(e) for e in entries]}
        resp.status = falcon.HTTP_200
