"""JSON representations of domain objects."""

from datetime import UTC, datetime

from agrigov.application.dto import AccessSummary
from agrigov.domain.entities import (
    AccessAuditEntry,
    AccessRequest,
    Grant,
    Permission,
    PermissionDrift,
    Role,
)
from agrigov.domain.exceptions import ValidationError


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_datetime(value: object, field: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO 8601 timestamp")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"{field} must be an ISO 8601 timestamp") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def permission_to_dict(p: Permission) -> dict:
    return {
        "key": p.key,
        "name": p.name,
        "description": p.description,
        "category": p.category,
        "resource_type": p.resource_type,
        "actions": list(p.actions),
        "conditions": [
            {"field": c.field, "operator": str(c.operator), "value": c.value}
            for c in p.conditions
        ],
        "is_system": p.is_system,
    }


def role_to_dict(r: Role) -> dict:
    return {
        "key": r.key,
        "name": r.name,
        "description": r.description,
        "permissions": list(r.permissions),
        "is_system": r.is_system,
        "can_delegate": r.can_delegate,
        "max_users": r.max_users,
        "tenant_id": r.tenant_id,
    }


def grant_to_dict(g: Grant) -> dict:
    return {
        "id": str(g.id),
        "subject_id": g.subject_id,
        "tenant_id": g.tenant_id,
        "role_name": g.role_name,
        "permission_set_id": str(g.permission_set_id),
        "permissions": list(g.permissions),
        "granted_by": g.granted_by,
        "reason": g.reason,
        "created_at": _iso(g.created_at),
        "expires_at": _iso(g.expires_at),
        "is_active": g.is_active,
        "deactivated_at": _iso(g.deactivated_at),
    }


def access_request_to_dict(r: AccessRequest) -> dict:
    return {
        "id": str(r.id),
        "subject_id": r.subject_id,
        "tenant_id": r.tenant_id,
        "requested_permission": r.requested_permission,
        "resource_type": r.resource_type,
        "resource_id": r.resource_id,
        "justification": r.justification,
        "emergency": r.emergency,
        "status": str(r.status),
        "requested_at": _iso(r.requested_at),
        "review_deadline": _iso(r.review_deadline),
        "reviewed_at": _iso(r.reviewed_at),
        "reviewed_by": r.reviewed_by,
        "review_notes": r.review_notes,
        "grant_id": str(r.grant_id) if r.grant_id else None,
    }


def drift_to_dict(d: PermissionDrift) -> dict:
    return {
        "id": d.drift_id,
        "subject_id": d.subject_id,
        "tenant_id": d.tenant_id,
        "grant_id": str(d.grant_id),
        "permission_set_id": str(d.permission_set_id),
        "drift_type": str(d.drift_type),
        "severity": str(d.severity),
        "description": d.description,
        "detected_at": _iso(d.detected_at),
        "auto_remediated": d.auto_remediated,
        "remediation_action": d.remediation_action,
    }


def audit_entry_to_dict(e: AccessAuditEntry) -> dict:
    return {
        "id": str(e.id),
        "subject_id": e.subject_id,
        "tenant_id": e.tenant_id,
        "permission": e.permission,
        "action": str(e.action),
        "granted": e.granted,
        "reason": e.reason,
        "source": str(e.source),
        "resource_type": e.resource_type,
        "resource_id": e.resource_id,
        "timestamp": _iso(e.timestamp),
    }


def summary_to_dict(s: AccessSummary) -> dict:
    return {
        "tenant_id": s.tenant_id,
        "window_days": s.window_days,
        "total_requests": s.total_requests,
        "approved_requests": s.approved_requests,
        "denied_requests": s.denied_requests,
        "emergency_accesses": s.emergency_accesses,
        "risk_score": s.risk_score,
        "top_requested_permissions": [
            {"permission": u.permission, "count": u.count} for u in s.top_requested_permissions
        ],
        "access_by_user": [
            {"subject_id": a.subject_id, "full_name": a.full_name, "access_count": a.access_count}
            for a in s.access_by_user
        ],
    }
