"""Access analytics DTOs."""

from dataclasses import dataclass, field


@dataclass
class PermissionUsage:
    permission: str
    count: int


@dataclass
class SubjectActivity:
    subject_id: str
    full_name: str
    access_count: int


@dataclass
class AccessSummary:
    """Access metrics of one tenant over a trailing window."""

    tenant_id: str
    window_days: int
    total_requests: int
    approved_requests: int
    denied_requests: int
    emergency_accesses: int
    risk_score: int
    top_requested_permissions: list[PermissionUsage] = field(default_factory=list)
    access_by_user: list[SubjectActivity] = field(default_factory=list)
