"""Unit tests for access analytics."""

import asyncio
from datetime import timedelta

import pytest

from agrigov.application.use_cases.analytics.get_access_analytics import (
    GetAccessAnalyticsUseCase,
    compute_risk_score,
)
from agrigov.domain.exceptions import OperationCancelled, ValidationError
from agrigov.domain.value_objects import AccessRequestStatus, AuditAction, AuditSource

from tests.conftest import T0, TENANT, seed_profile, seed_request


@pytest.fixture
def analytics(uow_factory, audit_log, clock):
    return GetAccessAnalyticsUseCase(uow_factory, audit_log, clock)


async def _activity(audit_log, subject_id: str, action: AuditAction, times: int = 1) -> None:
    for _ in range(times):
        await audit_log.log_event(
            subject_id=subject_id,
            tenant_id=TENANT,
            permission="farms.read",
            action=action,
            granted=True,
            reason="activity",
            source=AuditSource.WORKFLOW,
        )


class TestRiskScore:
    @pytest.mark.parametrize(
        ("total", "denied", "emergency", "expected"),
        [
            (0, 0, 0, 0),
            (15, 4, 3, 53),
            (10, 0, 0, 0),
            (4, 1, 0, 13),
            (2, 0, 2, 100),
            (10, 10, 10, 100),
        ],
    )
    def test_compute_risk_score(self, total, denied, emergency, expected) -> None:
        assert compute_risk_score(total, denied, emergency) == expected


class TestAccessAnalytics:
    @pytest.mark.asyncio
    async def test_empty_tenant(self, analytics) -> None:
        summary = await analytics.execute(TENANT)
        assert summary.total_requests == 0
        assert summary.risk_score == 0
        assert summary.top_requested_permissions == []
        assert summary.access_by_user == []
        assert summary.window_days == 30

    @pytest.mark.asyncio
    async def test_counts_and_risk(self, store, analytics) -> None:
        for i in range(15):
            if i < 4:
                status = AccessRequestStatus.DENIED
            elif i < 9:
                status = AccessRequestStatus.APPROVED
            else:
                status = AccessRequestStatus.PENDING
            seed_request(store, status=status, emergency=i >= 12)

        summary = await analytics.execute(TENANT)

        assert summary.total_requests == 15
        assert summary.approved_requests == 5
        assert summary.denied_requests == 4
        assert summary.emergency_accesses == 3
        assert summary.risk_score == 53

    @pytest.mark.asyncio
    async def test_window_and_tenant_bounds(self, store, analytics) -> None:
        seed_request(store, requested_at=T0 - timedelta(days=6))
        seed_request(store, requested_at=T0 - timedelta(days=8))
        seed_request(store, tenant_id="farm-2")

        assert (await analytics.execute(TENANT, window_days=7)).total_requests == 1
        assert (await analytics.execute(TENANT)).total_requests == 2

    @pytest.mark.asyncio
    async def test_top_requested_permissions(self, store, analytics) -> None:
        counts = {
            "farms.read": 3,
            "crops.read": 3,
            "farms.delete": 5,
            "livestock.read": 1,
            "financial.read": 2,
            "users.read": 1,
            "system.backup": 1,
        }
        for permission, count in counts.items():
            for _ in range(count):
                seed_request(store, permission)

        summary = await analytics.execute(TENANT)

        assert [(u.permission, u.count) for u in summary.top_requested_permissions] == [
            ("farms.delete", 5),
            ("crops.read", 3),
            ("farms.read", 3),
            ("financial.read", 2),
            ("livestock.read", 1),
        ]

    @pytest.mark.asyncio
    async def test_access_by_user(self, store, audit_log, analytics) -> None:
        seed_profile(store, "u1", full_name="Ada Farmer")
        await _activity(audit_log, "u1", AuditAction.ACCESS_REQUEST, 2)
        await _activity(audit_log, "u1", AuditAction.ACCESS_REVIEW)
        await _activity(audit_log, "u2", AuditAction.ACCESS_REQUEST)
        await _activity(audit_log, "u3", AuditAction.PERMISSION_CHECK, 5)

        summary = await analytics.execute(TENANT)

        assert [(a.subject_id, a.full_name, a.access_count) for a in summary.access_by_user] == [
            ("u1", "Ada Farmer", 3),
            ("u2", "Unknown User", 1),
        ]

    @pytest.mark.asyncio
    async def test_access_by_user_top_ten(self, audit_log, analytics) -> None:
        for i in range(12):
            await _activity(audit_log, f"user-{i:02d}", AuditAction.ACCESS_REQUEST, 12 - i)

        summary = await analytics.execute(TENANT)

        assert len(summary.access_by_user) == 10
        assert summary.access_by_user[0].subject_id == "user-00"
        assert summary.access_by_user[0].access_count == 12
        assert summary.access_by_user[-1].subject_id == "user-09"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, -3])
    async def test_window_must_be_positive(self, analytics, days) -> None:
        with pytest.raises(ValidationError):
            await analytics.execute(TENANT, window_days=days)

    @pytest.mark.asyncio
    async def test_cancelled(self, store, analytics) -> None:
        seed_request(store)
        cancel = asyncio.Event()
        cancel.set()
        with pytest.raises(OperationCancelled):
            await analytics.execute(TENANT, cancel_event=cancel)
