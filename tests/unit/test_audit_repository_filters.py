"""Unit tests for audit query filter building."""

from datetime import UTC, datetime

from agrigov.domain.value_objects import AuditAction, AuditSource
from agrigov.infrastructure.persistence.postgres.audit_repository import _build_audit_filters


def test_no_filters() -> None:
    assert _build_audit_filters() == ("", [])


def test_tenant_and_subject() -> None:
    where, params = _build_audit_filters(tenant_id="farm-1", subject_id="u1")
    assert where == "WHERE tenant_id = %s AND subject_id = %s"
    assert params == ["farm-1", "u1"]


def test_all_filters() -> None:
    since = datetime(2026, 1, 1, tzinfo=UTC)
    where, params = _build_audit_filters(
        tenant_id="farm-1",
        source=AuditSource.SWEEP,
        actions=(AuditAction.ACCESS_REQUEST, AuditAction.ACCESS_REVIEW),
        since=since,
    )
    assert where == (
        "WHERE tenant_id = %s AND source = %s AND action = ANY(%s) AND created_at >= %s"
    )
    assert params == ["farm-1", "sweep", ["access_request", "access_review"], since]


def test_empty_actions_are_ignored() -> None:
    assert _build_audit_filters(actions=()) == ("", [])
