"""Expire overdue access requests."""

import logging

from agrigov.application.ports import Clock
from agrigov.application.services.audit_log import AuditLog
from agrigov.application.use_cases.access_request.review_access_request import audit_expired
from agrigov.domain.exceptions import ValidationError
from agrigov.domain.value_objects import AccessRequestStatus, AuditSource

logger = logging.getLogger("agrigov.workflow")


class ExpireAccessRequestsUseCase:
    """Move pending requests past their review deadline to `expired`.

    Safe to run concurrently with reviews and other sweeps: each transition
    is a compare-and-set on `pending`.
    """

    def __init__(self, unit_of_work_factory: type, audit_log: AuditLog, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit_log = audit_log
        self._clock = clock

    async def execute(self, limit: int = 500) -> int:
        """Expire up to `limit` overdue requests. Returns how many this call expired."""
        if limit < 1:
            raise ValidationError("limit must be positive")
        now = self._clock.now_utc()
        async with self._uow_factory() as uow:
            overdue = await uow.access_requests.list_overdue(now, limit)

        expired = []
        for request in overdue:
            async with self._uow_factory() as uow:
                resolved = await uow.access_requests.resolve(
                    request.id,
                    status=AccessRequestStatus.EXPIRED,
                    reviewed_at=now,
                )
            if resolved is not None:
                expired.append(resolved)

        for request in expired:
            await audit_expired(self._audit_log, request, AuditSource.SWEEP)
        if expired:
            logger.info("Expired %d overdue access requests", len(expired))
        return len(expired)
