"""Permission drift classification."""

from enum import StrEnum


class DriftType(StrEnum):
    STALE = "stale"
    EXCESSIVE = "excessive"
    CONFLICTING = "conflicting"
    SUSPICIOUS = "suspicious"


class DriftSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DriftRule(StrEnum):
    """Detection rule that produced a drift; prefixes the drift id."""

    STALE = "stale"
    EXCESSIVE = "excessive"
    EXPIRED = "expired"
