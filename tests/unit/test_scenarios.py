"""End-to-end scenarios across resolver, workflow, drift and analytics."""

from datetime import timedelta

import pytest

from agrigov.application.use_cases.access_request.request_access import RequestAccessUseCase
from agrigov.application.use_cases.access_request.review_access_request import (
    ReviewAccessRequestUseCase,
)
from agrigov.application.use_cases.analytics.get_access_analytics import (
    GetAccessAnalyticsUseCase,
)
from agrigov.application.use_cases.drift.detect_permission_drift import (
    DetectPermissionDriftUseCase,
)
from agrigov.domain.value_objects import (
    AccessRequestStatus,
    DriftSeverity,
    DriftType,
    Resolution,
)

from tests.conftest import T0, TENANT, seed_profile, seed_request, seed_role


@pytest.mark.asyncio
async def test_viewer_cannot_delete_farms(store, catalog, resolver) -> None:
    seed_role(store, catalog, "u1", "viewer")
    resolution = await resolver.resolve("u1", TENANT, "farms.delete")
    assert resolution == Resolution(False, "permission not found")


@pytest.mark.asyncio
async def test_emergency_backup_access_lasts_until_deadline(
    store, catalog, clock, uow_factory, audit_log, policy, ledger, resolver
) -> None:
    seed_role(store, catalog, "boss", "owner")
    request_access = RequestAccessUseCase(uow_factory, catalog, audit_log, clock, policy)
    review = ReviewAccessRequestUseCase(uow_factory, resolver, ledger, audit_log, clock, policy)

    request_id = await request_access.execute(
        "u1", TENANT, "system.backup", "system", "Disk failing", emergency=True
    )
    clock.advance(hours=1)
    result = await review.execute(request_id, "boss", approve=True)

    assert result.status is AccessRequestStatus.APPROVED
    assert store.grants[result.grant_id].expires_at == T0 + timedelta(hours=4)
    clock.advance(hours=2, minutes=59)
    assert await resolver.check("u1", TENANT, "system.backup")
    clock.advance(minutes=1)
    assert not await resolver.check("u1", TENANT, "system.backup")


@pytest.mark.asyncio
async def test_long_absent_user_is_stale(store, catalog, clock, uow_factory, policy) -> None:
    seed_role(store, catalog, "u1", "worker")
    seed_profile(store, "u1", full_name="Sam", last_login_at=T0 - timedelta(days=95))

    drifts = await DetectPermissionDriftUseCase(uow_factory, catalog, clock, policy).execute(TENANT)

    assert len(drifts) == 1
    assert drifts[0].drift_type is DriftType.STALE
    assert drifts[0].severity is DriftSeverity.MEDIUM
    assert "95" in drifts[0].description


@pytest.mark.asyncio
async def test_risk_score_of_busy_tenant(store, clock, uow_factory, audit_log) -> None:
    for i in range(15):
        seed_request(
            store,
            status=AccessRequestStatus.DENIED if i < 4 else AccessRequestStatus.APPROVED,
            emergency=i in (4, 5, 6),
        )

    summary = await GetAccessAnalyticsUseCase(uow_factory, audit_log, clock).execute(TENANT)
    assert summary.risk_score == 53
