"""Outcome of a permission resolution."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Resolution:
    """Allow/deny decision with a machine-readable reason."""

    allowed: bool
    reason: str

    NO_ACTIVE_GRANTS = "no active grants"
    ADMIN_ACCESS = "admin access"
    CONDITIONS_NOT_MET = "conditions not met"
    PERMISSION_GRANTED = "permission granted"
    CATEGORY_WILDCARD = "category wildcard"
    PERMISSION_NOT_FOUND = "permission not found"
    SYSTEM_ERROR = "system error"
