"""Permission drift - derived finding, re-computable from the ledger."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from agrigov.domain.value_objects import DriftRule, DriftSeverity, DriftType


@dataclass(frozen=True)
class PermissionDrift:
    """Divergence between a subject's privileges and the expected baseline."""

    drift_id: str
    rule: DriftRule
    subject_id: str
    tenant_id: str
    grant_id: UUID
    permission_set_id: UUID
    drift_type: DriftType
    severity: DriftSeverity
    description: str
    detected_at: datetime = field(compare=False)
    auto_remediated: bool = False
    remediation_action: str | None = None
