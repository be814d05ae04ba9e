"""Subject directory port."""

from typing import Protocol

from agrigov.domain.entities import SubjectProfile


class SubjectRepository(Protocol):
    """Port for the tenant user directory (names, nominal role, last login)."""

    async def get(self, subject_id: str, tenant_id: str) -> SubjectProfile | None: ...

    async def list_by_tenant(self, tenant_id: str) -> list[SubjectProfile]: ...
