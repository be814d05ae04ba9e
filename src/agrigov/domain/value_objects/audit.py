"""Audit action kinds, outcomes and sources."""

from enum import StrEnum


class AuditAction(StrEnum):
    """Kind of access event recorded in the audit log."""

    PERMISSION_CHECK = "permission_check"
    ACCESS_REQUEST = "access_request"
    ACCESS_REVIEW = "access_review"
    PERMISSION_GRANTED = "permission_granted"
    PERMISSION_REVOKED = "permission_revoked"
    ACCESS_EXPIRED = "access_expired"


class AuditOutcome(StrEnum):
    GRANTED = "granted"
    DENIED = "denied"


class AuditSource(StrEnum):
    """Component that emitted the audit entry."""

    RESOLVER = "resolver"
    WORKFLOW = "workflow"
    LEDGER = "ledger"
    SWEEP = "sweep"
    REMEDIATION = "remediation"
