"""Grant repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from agrigov.domain.entities import Grant


class GrantRepository(Protocol):
    """Port for grant persistence. Grants carry the permissions of their set."""

    async def get_by_id(self, grant_id: UUID) -> Grant | None: ...

    async def list_for_subject(self, subject_id: str, tenant_id: str) -> list[Grant]:
        """Grants with the active flag set, expired or not."""
        ...

    async def list_by_tenant(self, tenant_id: str) -> list[Grant]:
        """All grants of the tenant with the active flag set."""
        ...

    async def create(self, grant: Grant) -> Grant: ...

    async def deactivate(self, grant_id: UUID, deactivated_at: datetime) -> bool:
        """Clear the active flag. Returns False if it was already cleared."""
        ...
