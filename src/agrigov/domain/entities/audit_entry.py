"""Access audit entry - append-only record of an access event."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from agrigov.domain.value_objects import AuditAction, AuditOutcome, AuditSource


@dataclass(frozen=True)
class AccessAuditEntry:
    """Never mutated or deleted once recorded."""

    id: UUID
    subject_id: str
    tenant_id: str
    permission: str
    action: AuditAction
    outcome: AuditOutcome
    reason: str
    timestamp: datetime
    source: AuditSource
    resource_type: str = "permission"
    resource_id: str | None = None

    @property
    def granted(self) -> bool:
        return self.outcome is AuditOutcome.GRANTED
