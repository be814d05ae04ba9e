"""Request access use case."""

import asyncio
import logging
from uuid import UUID, uuid4

from agrigov.application.policy import AccessPolicy
from agrigov.application.ports import Clock, ReviewerNotifier
from agrigov.application.services.audit_log import AuditLog
from agrigov.domain.catalog import PermissionCatalog
from agrigov.domain.entities import AccessRequest
from agrigov.domain.exceptions import ValidationError
from agrigov.domain.value_objects import AuditAction, AuditSource

logger = logging.getLogger("agrigov.workflow")


class RequestAccessUseCase:
    """File a justified request for one permission.

    Standard requests notify reviewers in the background; emergency requests
    skip notification and get the short review deadline.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog: PermissionCatalog,
        audit_log: AuditLog,
        clock: Clock,
        policy: AccessPolicy,
        notifier: ReviewerNotifier | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog
        self._audit_log = audit_log
        self._clock = clock
        self._policy = policy
        self._notifier = notifier
        self._notifications: set[asyncio.Task] = set()

    async def execute(
        self,
        subject_id: str,
        tenant_id: str,
        permission: str,
        resource_type: str,
        justification: str,
        resource_id: str | None = None,
        emergency: bool = False,
    ) -> UUID:
        """Persist a pending request and return its id."""
        for name, value in (
            ("subject_id", subject_id),
            ("tenant_id", tenant_id),
            ("permission", permission),
            ("resource_type", resource_type),
            ("justification", justification),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{name} is required")
        if not self._catalog.has_permission(permission):
            raise ValidationError(f"Unknown permission: {permission}")

        now = self._clock.now_utc()
        request = AccessRequest(
            id=uuid4(),
            subject_id=subject_id,
            tenant_id=tenant_id,
            requested_permission=permission,
            resource_type=resource_type,
            resource_id=resource_id,
            justification=justification.strip(),
            emergency=emergency,
            requested_at=now,
            review_deadline=now + self._policy.review_period(emergency),
        )
        async with self._uow_factory() as uow:
            await uow.access_requests.create(request)

        logger.info(
            "Access request %s: %s wants %s in %s%s",
            request.id,
            subject_id,
            permission,
            tenant_id,
            " (emergency)" if emergency else "",
        )
        suffix = f" ({resource_id})" if resource_id else ""
        await self._audit_log.log_event(
            subject_id=subject_id,
            tenant_id=tenant_id,
            permission=permission,
            action=AuditAction.ACCESS_REQUEST,
            granted=True,
            reason=f"Access requested for {resource_type}{suffix}",
            source=AuditSource.WORKFLOW,
            resource_type=resource_type,
            resource_id=resource_id,
        )

        if not emergency and self._notifier is not None:
            task = asyncio.create_task(self._notifier.notify(request))
            self._notifications.add(task)
            task.add_done_callback(self._notification_done)
        return request.id

    async def wait_for_notifications(self) -> None:
        """Wait for in-flight reviewer notifications (shutdown and tests)."""
        if self._notifications:
            await asyncio.gather(*self._notifications, return_exceptions=True)

    def _notification_done(self, task: asyncio.Task) -> None:
        self._notifications.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Reviewer notification failed: %s", exc)
