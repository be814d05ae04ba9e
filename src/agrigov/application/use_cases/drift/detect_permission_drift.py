"""Permission drift detection."""

import logging
from collections.abc import Iterable
from datetime import datetime

from agrigov.application.policy import AccessPolicy
from agrigov.application.ports import Clock
from agrigov.domain.catalog import PermissionCatalog
from agrigov.domain.entities import Grant, PermissionDrift, SubjectProfile
from agrigov.domain.value_objects import DriftRule, DriftSeverity, DriftType

logger = logging.getLogger("agrigov.drift")

_FALLBACK_ROLE = "worker"


class DetectPermissionDriftUseCase:
    """Flag stale, excessive and expired-but-active grants of a tenant.

    Reads grants and the user directory from one read-only snapshot and never
    writes. Findings are sorted, so an unchanged ledger yields identical
    output on every run.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog: PermissionCatalog,
        clock: Clock,
        policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog
        self._clock = clock
        self._policy = policy

    async def execute(self, tenant_id: str) -> list[PermissionDrift]:
        now = self._clock.now_utc()
        async with self._uow_factory() as uow:
            await uow.begin_snapshot()
            grants = await uow.grants.list_by_tenant(tenant_id)
            profiles = await uow.subjects.list_by_tenant(tenant_id)

        drifts = find_drift(grants, profiles, self._catalog, self._policy, now)
        logger.info("Drift scan of %s: %d grants, %d findings", tenant_id, len(grants), len(drifts))
        return drifts


def find_drift(
    grants: Iterable[Grant],
    profiles: Iterable[SubjectProfile],
    catalog: PermissionCatalog,
    policy: AccessPolicy,
    now: datetime,
) -> list[PermissionDrift]:
    """Evaluate every drift rule independently against each flagged-active grant."""
    by_subject = {p.subject_id: p for p in profiles}
    stale_before = now - policy.stale_after
    ordered = sorted(
        (g for g in grants if g.is_active),
        key=lambda g: (g.subject_id, g.created_at, str(g.id)),
    )

    drifts: list[PermissionDrift] = []
    for grant in ordered:
        profile = by_subject.get(grant.subject_id)

        if profile is not None and profile.last_login_at is not None:
            if profile.last_login_at < stale_before:
                days = (now - profile.last_login_at).days
                drifts.append(
                    _drift(
                        DriftRule.STALE,
                        grant,
                        DriftType.STALE,
                        DriftSeverity.MEDIUM,
                        f"User has not logged in for {days} days",
                        now,
                    )
                )

        role = (profile.nominal_role if profile else None) or _FALLBACK_ROLE
        expected = catalog.expected_permission_count(role)
        count = len(grant.permissions)
        if count > expected * policy.excessive_factor:
            drifts.append(
                _drift(
                    DriftRule.EXCESSIVE,
                    grant,
                    DriftType.EXCESSIVE,
                    DriftSeverity.HIGH,
                    f"User has {count} permissions, expected ~{expected} for {role} role",
                    now,
                )
            )

        if grant.is_expired_but_active(now):
            drifts.append(
                _drift(
                    DriftRule.EXPIRED,
                    grant,
                    DriftType.STALE,
                    DriftSeverity.CRITICAL,
                    f"Role expired on {grant.expires_at.isoformat()} but is still active",
                    now,
                )
            )

    return drifts


def _drift(
    rule: DriftRule,
    grant: Grant,
    drift_type: DriftType,
    severity: DriftSeverity,
    description: str,
    now: datetime,
) -> PermissionDrift:
    return PermissionDrift(
        drift_id=f"{rule}_{grant.id}",
        rule=rule,
        subject_id=grant.subject_id,
        tenant_id=grant.tenant_id,
        grant_id=grant.id,
        permission_set_id=grant.permission_set_id,
        drift_type=drift_type,
        severity=severity,
        description=description,
        detected_at=now,
    )
