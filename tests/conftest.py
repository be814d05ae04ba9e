"""Pytest fixtures for agrigov tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from agrigov.application.policy import AccessPolicy
from agrigov.application.services.audit_log import AuditLog
from agrigov.application.services.grant_ledger import GrantLedger
from agrigov.application.services.permission_resolver import PermissionResolver
from agrigov.domain.catalog import PermissionCatalog, build_system_catalog
from agrigov.domain.entities import (
    AccessAuditEntry,
    AccessRequest,
    Grant,
    PermissionSet,
    Role,
    SubjectProfile,
)
from agrigov.domain.value_objects import AccessRequestStatus, AuditAction, AuditSource

TENANT = "farm-1"
T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


async def _switch() -> None:
    """Let other tasks run, as a real database round trip would."""
    await asyncio.sleep(0)


# --- Shared in-memory state ---


@dataclass
class FakeStore:
    """State shared by every FakeUnitOfWork of a test."""

    grants: dict[UUID, Grant] = field(default_factory=dict)
    permission_sets: dict[UUID, PermissionSet] = field(default_factory=dict)
    access_requests: dict[UUID, AccessRequest] = field(default_factory=dict)
    audit: list[AccessAuditEntry] = field(default_factory=list)
    subjects: dict[tuple[str, str], SubjectProfile] = field(default_factory=dict)
    roles: list[Role] = field(default_factory=list)
    snapshots: int = 0
    fail_grant_create: bool = False
    fail_audit_append: bool = False
    fail_grant_reads: bool = False


# --- Fake repositories ---


class FakeGrantRepository:
    """In-memory grant repository."""

    def __init__(self, store: FakeStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def get_by_id(self, grant_id: UUID) -> Grant | None:
        await _switch()
        grant = self._store.grants.get(grant_id)
        return replace(grant) if grant else None

    async def list_for_subject(self, subject_id: str, tenant_id: str) -> list[Grant]:
        await _switch()
        if self._store.fail_grant_reads:
            raise RuntimeError("grant store unavailable")
        return [
            replace(g)
            for g in self._store.grants.values()
            if g.subject_id == subject_id and g.tenant_id == tenant_id and g.is_active
        ]

    async def list_by_tenant(self, tenant_id: str) -> list[Grant]:
        await _switch()
        return [
            replace(g)
            for g in self._store.grants.values()
            if g.tenant_id == tenant_id and g.is_active
        ]

    async def create(self, grant: Grant) -> Grant:
        await _switch()
        if self._store.fail_grant_create:
            raise RuntimeError("grant insert failed")
        self._store.grants[grant.id] = replace(grant)
        self._undo.append(lambda: self._store.grants.pop(grant.id, None))
        return grant

    async def deactivate(self, grant_id: UUID, deactivated_at: datetime) -> bool:
        await _switch()
        current = self._store.grants.get(grant_id)
        if current is None or not current.is_active:
            return False
        self._store.grants[grant_id] = replace(
            current, is_active=False, deactivated_at=deactivated_at
        )
        self._undo.append(lambda: self._store.grants.__setitem__(grant_id, current))
        return True


class FakePermissionSetRepository:
    """In-memory permission set repository."""

    def __init__(self, store: FakeStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def get_by_id(self, permission_set_id: UUID) -> PermissionSet | None:
        await _switch()
        return self._store.permission_sets.get(permission_set_id)

    async def create(self, permission_set: PermissionSet) -> PermissionSet:
        await _switch()
        self._store.permission_sets[permission_set.id] = permission_set
        self._undo.append(lambda: self._store.permission_sets.pop(permission_set.id, None))
        return permission_set


class FakeAccessRequestRepository:
    """In-memory access request repository with compare-and-set resolve."""

    def __init__(self, store: FakeStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def get_by_id(self, request_id: UUID) -> AccessRequest | None:
        await _switch()
        request = self._store.access_requests.get(request_id)
        return replace(request) if request else None

    async def create(self, request: AccessRequest) -> AccessRequest:
        await _switch()
        self._store.access_requests[request.id] = replace(request)
        self._undo.append(lambda: self._store.access_requests.pop(request.id, None))
        return request

    async def list_by_tenant(
        self,
        tenant_id: str,
        *,
        status: AccessRequestStatus | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[AccessRequest]:
        await _switch()
        items = [
            replace(r)
            for r in self._store.access_requests.values()
            if r.tenant_id == tenant_id
            and (status is None or r.status is status)
            and (since is None or r.requested_at >= since)
        ]
        items.sort(key=lambda r: r.requested_at, reverse=True)
        return items if limit is None else items[:limit]

    async def list_overdue(self, now: datetime, limit: int) -> list[AccessRequest]:
        await _switch()
        items = [
            replace(r)
            for r in self._store.access_requests.values()
            if r.is_overdue_at(now)
        ]
        items.sort(key=lambda r: r.review_deadline)
        return items[:limit]

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
        await _switch()
        current = self._store.access_requests.get(request_id)
        if current is None or not current.is_pending:
            return None
        updated = replace(
            current,
            status=status,
            reviewed_at=reviewed_at,
            reviewed_by=reviewed_by,
            review_notes=review_notes,
            grant_id=grant_id,
        )
        self._store.access_requests[request_id] = updated
        self._undo.append(lambda: self._store.access_requests.__setitem__(request_id, current))
        return replace(updated)


class FakeAuditRepository:
    """In-memory append-only audit repository."""

    def __init__(self, store: FakeStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def append(self, entry: AccessAuditEntry) -> None:
        await _switch()
        if self._store.fail_audit_append:
            raise RuntimeError("audit store unavailable")
        self._store.audit.append(entry)
        self._undo.append(lambda: self._store.audit.remove(entry))

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
        await _switch()
        items = [
            e
            for e in self._store.audit
            if (tenant_id is None or e.tenant_id == tenant_id)
            and (subject_id is None or e.subject_id == subject_id)
            and (source is None or e.source is source)
            and (not actions or e.action in actions)
            and (since is None or e.timestamp >= since)
        ]
        # Stable sort keeps insertion order among equal timestamps; reverse it for newest first.
        items = list(reversed(items))
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items if limit is None else items[:limit]


class FakeSubjectRepository:
    """In-memory subject directory."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get(self, subject_id: str, tenant_id: str) -> SubjectProfile | None:
        await _switch()
        return self._store.subjects.get((subject_id, tenant_id))

    async def list_by_tenant(self, tenant_id: str) -> list[SubjectProfile]:
        await _switch()
        return [p for (_, t), p in sorted(self._store.subjects.items()) if t == tenant_id]


class FakeRoleRepository:
    """In-memory tenant custom roles."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def list_custom(self) -> list[Role]:
        await _switch()
        return sorted(self._store.roles, key=lambda r: (r.tenant_id, r.key))


class FakeUnitOfWork:
    """In-memory Unit of Work; rollback undoes this unit's writes in reverse order."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self._undo: list = []
        self.grants = FakeGrantRepository(self.store, self._undo)
        self.permission_sets = FakePermissionSetRepository(self.store, self._undo)
        self.access_requests = FakeAccessRequestRepository(self.store, self._undo)
        self.audit = FakeAuditRepository(self.store, self._undo)
        self.subjects = FakeSubjectRepository(self.store)
        self.roles = FakeRoleRepository(self.store)

    async def begin_snapshot(self) -> None:
        self.store.snapshots += 1

    async def commit(self) -> None:
        self._undo.clear()

    async def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()


def make_uow_factory(store: FakeStore):
    """Factory with the commit/rollback contract of the PostgreSQL one."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def now_utc(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# --- Seeding helpers ---


def seed_grant(
    store: FakeStore,
    subject_id: str,
    permissions: tuple[str, ...],
    *,
    tenant_id: str = TENANT,
    role_name: str = "custom",
    created_at: datetime = T0 - timedelta(days=1),
    expires_at: datetime | None = None,
    is_active: bool = True,
) -> Grant:
    """Insert a permission set and a grant of it directly into the store."""
    permission_set = PermissionSet(
        id=uuid4(),
        tenant_id=tenant_id,
        name=role_name,
        description="",
        permissions=tuple(permissions),
        created_at=created_at,
    )
    grant = Grant(
        id=uuid4(),
        subject_id=subject_id,
        tenant_id=tenant_id,
        role_name=role_name,
        permission_set_id=permission_set.id,
        permissions=permission_set.permissions,
        created_at=created_at,
        granted_by="seed",
        expires_at=expires_at,
        is_active=is_active,
    )
    store.permission_sets[permission_set.id] = permission_set
    store.grants[grant.id] = grant
    return grant


def seed_role(
    store: FakeStore,
    catalog: PermissionCatalog,
    subject_id: str,
    role_key: str,
    **kwargs,
) -> Grant:
    role = catalog.require_role(role_key)
    return seed_grant(store, subject_id, role.permissions, role_name=role.key, **kwargs)


def seed_request(
    store: FakeStore,
    permission: str = "farms.read",
    *,
    subject_id: str = "u1",
    tenant_id: str = TENANT,
    status: AccessRequestStatus = AccessRequestStatus.PENDING,
    emergency: bool = False,
    requested_at: datetime = T0 - timedelta(days=1),
) -> AccessRequest:
    request = AccessRequest(
        id=uuid4(),
        subject_id=subject_id,
        tenant_id=tenant_id,
        requested_permission=permission,
        resource_type="farm",
        justification="why",
        requested_at=requested_at,
        review_deadline=requested_at + timedelta(hours=4 if emergency else 24),
        emergency=emergency,
        status=status,
    )
    store.access_requests[request.id] = request
    return request


def seed_profile(
    store: FakeStore,
    subject_id: str,
    *,
    tenant_id: str = TENANT,
    full_name: str = "",
    nominal_role: str | None = None,
    last_login_at: datetime | None = None,
) -> SubjectProfile:
    profile = SubjectProfile(
        subject_id=subject_id,
        tenant_id=tenant_id,
        full_name=full_name,
        nominal_role=nominal_role,
        last_login_at=last_login_at,
    )
    store.subjects[(subject_id, tenant_id)] = profile
    return profile


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory state for each test."""
    return FakeStore()


@pytest.fixture
def uow_factory(store):
    """Factory returning async context manager with FakeUnitOfWork over `store`."""
    return make_uow_factory(store)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def catalog() -> PermissionCatalog:
    return build_system_catalog()


@pytest.fixture
def policy() -> AccessPolicy:
    return AccessPolicy()


@pytest.fixture
def audit_log(uow_factory, clock) -> AuditLog:
    """Inline audit log (writes are awaited)."""
    return AuditLog(uow_factory, clock)


@pytest.fixture
def ledger(uow_factory, catalog, audit_log, clock) -> GrantLedger:
    return GrantLedger(uow_factory, catalog, audit_log, clock)


@pytest.fixture
def resolver(catalog, ledger, audit_log) -> PermissionResolver:
    return PermissionResolver(catalog, ledger, audit_log)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock
