"""Access request entity - justified request for a single permission."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from agrigov.domain.value_objects import AccessRequestStatus


@dataclass
class AccessRequest:
    """Request for temporary elevation, resolved exactly once."""

    id: UUID
    subject_id: str
    tenant_id: str
    requested_permission: str
    resource_type: str
    justification: str
    requested_at: datetime
    review_deadline: datetime
    resource_id: str | None = None
    emergency: bool = False
    status: AccessRequestStatus = AccessRequestStatus.PENDING
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    review_notes: str | None = None
    grant_id: UUID | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is AccessRequestStatus.PENDING

    def is_overdue_at(self, now: datetime) -> bool:
        """Still pending at or past its review deadline."""
        return self.is_pending and self.review_deadline <= now
