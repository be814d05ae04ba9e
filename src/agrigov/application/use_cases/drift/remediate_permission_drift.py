"""Remediate permission drift use case."""

import logging
from dataclasses import replace

from agrigov.application.ports import PermissionChecker
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.application.use_cases.drift.detect_permission_drift import (
    DetectPermissionDriftUseCase,
)
from agrigov.domain.entities import PermissionDrift
from agrigov.domain.exceptions import Forbidden, InvalidState, NotFound
from agrigov.domain.value_objects import AuditSource, DriftRule
from agrigov.domain.value_objects.permission_key import REVOKE_PERMISSION

logger = logging.getLogger("agrigov.drift")

GRANT_DEACTIVATED = "grant_deactivated"


class RemediatePermissionDriftUseCase:
    """Deactivate the grant behind a stale or expired-but-active finding.

    The finding is re-derived from the current ledger, so a drift that was
    already remediated is no longer found.
    """

    def __init__(
        self,
        permission_checker: PermissionChecker,
        drift_detector: DetectPermissionDriftUseCase,
        grant_ledger: GrantLedger,
    ) -> None:
        self._permission_checker = permission_checker
        self._detector = drift_detector
        self._ledger = grant_ledger

    async def execute(self, actor_id: str, tenant_id: str, drift_id: str) -> PermissionDrift:
        if not await self._permission_checker.check(actor_id, tenant_id, REVOKE_PERMISSION):
            raise Forbidden("User cannot remediate drift in this tenant")

        drifts = await self._detector.execute(tenant_id)
        drift = next((d for d in drifts if d.drift_id == drift_id), None)
        if drift is None:
            raise NotFound("PermissionDrift", drift_id)
        if drift.rule is DriftRule.EXCESSIVE:
            raise InvalidState("Excessive permissions require manual review")

        await self._ledger.deactivate(
            drift.grant_id,
            actor=actor_id,
            reason=f"Remediated drift {drift_id}: {drift.description}",
            source=AuditSource.REMEDIATION,
        )
        logger.info("Remediated drift %s in %s by %s", drift_id, tenant_id, actor_id)
        return replace(drift, auto_remediated=True, remediation_action=GRANT_DEACTIVATED)
