"""Access audit repository port."""

from datetime import datetime
from typing import Protocol

from agrigov.domain.entities import AccessAuditEntry
from agrigov.domain.value_objects import AuditAction, AuditSource


class AuditRepository(Protocol):
    """Port for the append-only access audit store."""

    async def append(self, entry: AccessAuditEntry) -> None: ...

    async def query(
        self,
        *,
        tenant_id: str | None = None,
        subject_id: str | None = None,
        source: AuditSource | None = None,
        actions: tuple[AuditAction, ...] | None = None,
        since: datetime | None = None,
        limit: int | None = 100,
    ) -> list[AccessAuditEntry]:
        """Entries matching all given filters, newest first."""
        ...
