"""Review access request use case."""

import logging
from uuid import UUID

from agrigov.application.policy import AccessPolicy
from agrigov.application.ports import Clock, PermissionChecker
from agrigov.application.services.audit_log import AuditLog
from agrigov.application.services.grant_ledger import GrantLedger, temporary_set_name
from agrigov.domain.entities import AccessRequest
from agrigov.domain.exceptions import Forbidden, InvalidState, NotFound
from agrigov.domain.value_objects import (
    AccessRequestStatus,
    AuditAction,
    AuditSource,
    GrantWindowMode,
)
from agrigov.domain.value_objects.permission_key import REVIEW_PERMISSION, TEMPORARY_ROLE

logger = logging.getLogger("agrigov.workflow")


class ReviewAccessRequestUseCase:
    """Approve or deny a pending request.

    Approval issues a temporary grant of exactly the requested permission in
    the same transaction as the status change. The status change is a
    compare-and-set on `pending`, so of two concurrent reviews one wins and
    the other gets InvalidState.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        grant_ledger: GrantLedger,
        audit_log: AuditLog,
        clock: Clock,
        policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._ledger = grant_ledger
        self._audit_log = audit_log
        self._clock = clock
        self._policy = policy

    async def execute(
        self,
        request_id: UUID,
        reviewer_id: str,
        approve: bool,
        notes: str | None = None,
        tenant_id: str | None = None,
    ) -> AccessRequest:
        """`tenant_id`, when given, scopes the lookup to that tenant."""
        async with self._uow_factory() as uow:
            request = await uow.access_requests.get_by_id(request_id)
        if request is None or (tenant_id is not None and request.tenant_id != tenant_id):
            raise NotFound("AccessRequest", str(request_id))

        allowed = await self._permission_checker.check(
            reviewer_id, request.tenant_id, REVIEW_PERMISSION
        )
        if not allowed:
            raise Forbidden("Insufficient permissions to review access requests")

        if not request.is_pending:
            raise InvalidState(f"Access request {request_id} already resolved ({request.status})")

        now = self._clock.now_utc()
        if request.is_overdue_at(now):
            await self._expire(request, now)
            raise InvalidState(
                f"Access request {request_id} expired at {request.review_deadline.isoformat()}"
            )

        status = AccessRequestStatus.APPROVED if approve else AccessRequestStatus.DENIED
        grant = None
        async with self._uow_factory() as uow:
            if approve:
                grant = await self._ledger.issue_grant(
                    uow,
                    request.subject_id,
                    request.tenant_id,
                    TEMPORARY_ROLE,
                    (request.requested_permission,),
                    granted_by=reviewer_id,
                    reason=f"Approved request: {request_id}",
                    expires_at=self._grant_expiry(request, now),
                    set_name=temporary_set_name(request.requested_permission),
                    set_description=f"Temporary access granted: Approved request: {request_id}",
                )
            resolved = await uow.access_requests.resolve(
                request_id,
                status=status,
                reviewed_at=now,
                reviewed_by=reviewer_id,
                review_notes=notes,
                grant_id=grant.id if grant else None,
            )
            if resolved is None:
                raise InvalidState(f"Access request {request_id} already resolved")

        logger.info("Access request %s %s by %s", request_id, status, reviewer_id)
        await self._audit_log.log_event(
            subject_id=reviewer_id,
            tenant_id=request.tenant_id,
            permission=REVIEW_PERMISSION,
            action=AuditAction.ACCESS_REVIEW,
            granted=True,
            reason=f"{'Approved' if approve else 'Denied'} access request {request_id}",
            source=AuditSource.WORKFLOW,
            resource_type="access_request",
            resource_id=str(request_id),
        )
        if grant is not None:
            await self._ledger.audit_granted(grant, source=AuditSource.WORKFLOW)
        return resolved

    def _grant_expiry(self, request: AccessRequest, now):
        if self._policy.grant_window_mode is GrantWindowMode.FIXED:
            return now + self._policy.grant_window
        return request.review_deadline

    async def _expire(self, request: AccessRequest, now) -> None:
        async with self._uow_factory() as uow:
            expired = await uow.access_requests.resolve(
                request.id,
                status=AccessRequestStatus.EXPIRED,
                reviewed_at=now,
            )
        if expired is not None:
            await audit_expired(self._audit_log, expired, AuditSource.WORKFLOW)


async def audit_expired(audit_log: AuditLog, request: AccessRequest, source: AuditSource) -> None:
    await audit_log.log_event(
        subject_id=request.subject_id,
        tenant_id=request.tenant_id,
        permission=request.requested_permission,
        action=AuditAction.ACCESS_EXPIRED,
        granted=False,
        reason=f"Access request {request.id} expired without review",
        source=source,
        resource_type="access_request",
        resource_id=str(request.id),
    )
