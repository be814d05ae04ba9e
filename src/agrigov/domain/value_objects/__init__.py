"""Domain value objects."""

from agrigov.domain.value_objects.access_request_status import AccessRequestStatus
from agrigov.domain.value_objects.audit import AuditAction, AuditOutcome, AuditSource
from agrigov.domain.value_objects.condition import Condition, ConditionOperator
from agrigov.domain.value_objects.drift import DriftRule, DriftSeverity, DriftType
from agrigov.domain.value_objects.grant_window import GrantWindowMode
from agrigov.domain.value_objects.resolution import Resolution

__all__ = [
    "AccessRequestStatus",
    "AuditAction",
    "AuditOutcome",
    "AuditSource",
    "Condition",
    "ConditionOperator",
    "DriftRule",
    "DriftSeverity",
    "DriftType",
    "GrantWindowMode",
    "Resolution",
]
