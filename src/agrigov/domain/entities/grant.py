"""Grant entity - assignment of a permission set to a subject in a tenant."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Grant:
    """Role or temporary assignment.

    `is_active` is only an administrative override for early revocation;
    whether a grant is currently valid also depends on `expires_at`.
    """

    id: UUID
    subject_id: str
    tenant_id: str
    role_name: str
    permission_set_id: UUID
    permissions: tuple[str, ...]
    created_at: datetime
    granted_by: str
    reason: str = ""
    expires_at: datetime | None = None
    is_active: bool = True
    deactivated_at: datetime | None = None

    def is_valid_at(self, now: datetime) -> bool:
        """Active flag set and not yet expired."""
        return self.is_active and (self.expires_at is None or self.expires_at > now)

    def is_expired_but_active(self, now: datetime) -> bool:
        """Expired while the active flag lags behind - a ledger hygiene failure."""
        return self.is_active and self.expires_at is not None and self.expires_at < now
