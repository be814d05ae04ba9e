"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from agrigov.application.ports.repositories import (
    AccessRequestRepository,
    AuditRepository,
    GrantRepository,
    PermissionSetRepository,
    RoleRepository,
    SubjectRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def grants(self) -> GrantRepository: ...

    @property
    def permission_sets(self) -> PermissionSetRepository: ...

    @property
    def access_requests(self) -> AccessRequestRepository: ...

    @property
    def audit(self) -> AuditRepository: ...

    @property
    def subjects(self) -> SubjectRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    async def begin_snapshot(self) -> None:
        """Make subsequent reads in this unit see one consistent, read-only snapshot."""
        ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AsyncIterator[UnitOfWork]: ...
