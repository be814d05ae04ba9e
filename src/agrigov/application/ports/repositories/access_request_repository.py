"""Access request repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from agrigov.domain.entities import AccessRequest
from agrigov.domain.value_objects import AccessRequestStatus


class AccessRequestRepository(Protocol):
    """Port for access request persistence."""

    async def get_by_id(self, request_id: UUID) -> AccessRequest | None: ...

    async def create(self, request: AccessRequest) -> AccessRequest: ...

    async def list_by_tenant(
        self,
        tenant_id: str,
        *,
        status: AccessRequestStatus | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[AccessRequest]: ...

    async def list_overdue(self, now: datetime, limit: int) -> list[AccessRequest]:
        """Pending requests whose review deadline is at or before `now`."""
        ...

    async def resolve(
        self,
        request_id: UUID,
        *,
        status: AccessRequestStatus,
        reviewed_at: datetime,
        reviewed_by: str | None = None,
        review_notes: str | None = None,
        grant_id: UUID | None = None,
    ) -> AccessRequest | None:
        """Compare-and-set pending -> `status`.

        Returns the updated request, or None when it was no longer pending.
        """
        ...
