"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from agrigov.domain.exceptions import SystemFailure
from agrigov.infrastructure.persistence.postgres.access_request_repository import (
    PostgresAccessRequestRepository,
)
from agrigov.infrastructure.persistence.postgres.audit_repository import (
    PostgresAuditRepository,
)
from agrigov.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from agrigov.infrastructure.persistence.postgres.permission_set_repository import (
    PostgresPermissionSetRepository,
)
from agrigov.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from agrigov.infrastructure.persistence.postgres.subject_repository import (
    PostgresSubjectRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._grants = PostgresGrantRepository(self._conn)
        self._permission_sets = PostgresPermissionSetRepository(self._conn)
        self._access_requests = PostgresAccessRequestRepository(self._conn)
        self._audit = PostgresAuditRepository(self._conn)
        self._subjects = PostgresSubjectRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    @property
    def permission_sets(self) -> PostgresPermissionSetRepository:
        return self._permission_sets

    @property
    def access_requests(self) -> PostgresAccessRequestRepository:
        return self._access_requests

    @property
    def audit(self) -> PostgresAuditRepository:
        return self._audit

    @property
    def subjects(self) -> PostgresSubjectRepository:
        return self._subjects

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    async def begin_snapshot(self) -> None:
        """Must run before any other statement of the transaction."""
        if self._conn:
            await self._conn.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ, READ ONLY")

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Database errors leave the factory as SystemFailure.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            raise SystemFailure(f"Database error: {e}") from e

    return factory
