"""Access analytics use case."""

import asyncio
import logging
import math
from collections import Counter
from datetime import timedelta

from agrigov.application.dto import AccessSummary, PermissionUsage, SubjectActivity
from agrigov.application.ports import Clock
from agrigov.application.services.audit_log import AuditLog
from agrigov.domain.exceptions import OperationCancelled, ValidationError
from agrigov.domain.value_objects import AccessRequestStatus, AuditAction

logger = logging.getLogger("agrigov.analytics")

TOP_PERMISSIONS = 5
TOP_SUBJECTS = 10
UNKNOWN_USER = "Unknown User"


def compute_risk_score(total: int, denied: int, emergency: int) -> int:
    """Denial rate weighted 0.5 plus emergency rate weighted 2, in [0, 100].

    Rates are percentages of `total`; halves round up.
    """
    if total <= 0:
        return 0
    denial_rate = denied / total * 100
    emergency_rate = emergency / total * 100
    score = min(100.0, denial_rate * 0.5 + emergency_rate * 2)
    return max(0, min(100, math.floor(score + 0.5)))


class GetAccessAnalyticsUseCase:
    """Summarize a tenant's access requests and access activity over a window."""

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_log: AuditLog,
        clock: Clock,
        default_window_days: int = 30,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit_log = audit_log
        self._clock = clock
        self._default_window_days = default_window_days

    async def execute(
        self,
        tenant_id: str,
        window_days: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AccessSummary:
        """Raises OperationCancelled when `cancel_event` is set between stages."""
        days = self._default_window_days if window_days is None else window_days
        if days <= 0:
            raise ValidationError("window_days must be positive")
        since = self._clock.now_utc() - timedelta(days=days)
        _raise_if_cancelled(cancel_event)

        async with self._uow_factory() as uow:
            requests = await uow.access_requests.list_by_tenant(tenant_id, since=since)
        _raise_if_cancelled(cancel_event)

        total = len(requests)
        approved = sum(1 for r in requests if r.status is AccessRequestStatus.APPROVED)
        denied = sum(1 for r in requests if r.status is AccessRequestStatus.DENIED)
        emergency = sum(1 for r in requests if r.emergency)
        requested = Counter(r.requested_permission for r in requests)

        entries = await self._audit_log.query(
            tenant_id=tenant_id,
            actions=(AuditAction.ACCESS_REQUEST, AuditAction.ACCESS_REVIEW),
            since=since,
            limit=None,
        )
        _raise_if_cancelled(cancel_event)
        activity = Counter(e.subject_id for e in entries)

        async with self._uow_factory() as uow:
            profiles = await uow.subjects.list_by_tenant(tenant_id)
        _raise_if_cancelled(cancel_event)
        names = {p.subject_id: p.full_name for p in profiles}

        top_permissions = sorted(requested.items(), key=lambda kv: (-kv[1], kv[0]))
        top_subjects = sorted(activity.items(), key=lambda kv: (-kv[1], kv[0]))

        summary = AccessSummary(
            tenant_id=tenant_id,
            window_days=days,
            total_requests=total,
            approved_requests=approved,
            denied_requests=denied,
            emergency_accesses=emergency,
            risk_score=compute_risk_score(total, denied, emergency),
            top_requested_permissions=[
                PermissionUsage(permission=p, count=c)
                for p, c in top_permissions[:TOP_PERMISSIONS]
            ],
            access_by_user=[
                SubjectActivity(
                    subject_id=s,
                    full_name=names.get(s) or UNKNOWN_USER,
                    access_count=c,
                )
                for s, c in top_subjects[:TOP_SUBJECTS]
            ],
        )
        logger.debug("Analytics for %s over %d days: %s requests", tenant_id, days, total)
        return summary


def _raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelled("Analytics computation cancelled")
