"""Append-only access audit log.

Recording never raises and never blocks a decision on durability. Entries
that cannot be persisted go to the `agrigov.audit.fallback` logger.
"""

import asyncio
import logging
from datetime import datetime
from uuid import uuid4

from agrigov.application.ports import Clock
from agrigov.domain.entities import AccessAuditEntry
from agrigov.domain.value_objects import AuditAction, AuditOutcome, AuditSource

logger = logging.getLogger("agrigov.audit")
fallback_logger = logging.getLogger("agrigov.audit.fallback")


class AuditLog:
    """Audit sink over the audit repository.

    Inline mode awaits each write. Background mode (after `start()`) queues
    entries on one FIFO queue drained by a single writer task, so entries
    of one subject are written in the order they were recorded.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        *,
        background: bool = False,
        queue_size: int = 0,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._background = background
        self._queue: asyncio.Queue[AccessAuditEntry | None] | None = None
        self._queue_size = queue_size
        self._writer: asyncio.Task | None = None

    @property
    def background(self) -> bool:
        return self._background

    @property
    def running(self) -> bool:
        return self._writer is not None and not self._writer.done()

    async def start(self) -> None:
        """Start the background writer (no-op in inline mode)."""
        if not self._background or self.running:
            return
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._writer = asyncio.create_task(self._drain(), name="agrigov-audit-writer")
        logger.info("Audit writer started")

    async def stop(self) -> None:
        """Write everything still queued, then stop the writer."""
        if not self.running or self._queue is None:
            return
        await self._queue.join()
        await self._queue.put(None)
        await self._writer
        self._writer = None
        self._queue = None
        logger.info("Audit writer stopped")

    async def flush(self) -> None:
        """Wait until every queued entry has been written."""
        if self.running and self._queue is not None:
            await self._queue.join()

    async def record(self, entry: AccessAuditEntry) -> None:
        """Append an entry. Never raises."""
        if self.running and self._queue is not None:
            try:
                self._queue.put_nowait(entry)
            except asyncio.QueueFull:
                fallback_logger.error("Audit queue full, entry not persisted: %s", _describe(entry))
            return
        await self._write(entry)

    async def log_event(
        self,
        *,
        subject_id: str,
        tenant_id: str,
        permission: str,
        action: AuditAction,
        granted: bool,
        reason: str,
        source: AuditSource,
        resource_type: str = "permission",
        resource_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> AccessAuditEntry:
        """Build an entry stamped with the current time and record it."""
        entry = AccessAuditEntry(
            id=uuid4(),
            subject_id=subject_id,
            tenant_id=tenant_id,
            permission=permission,
            action=action,
            outcome=AuditOutcome.GRANTED if granted else AuditOutcome.DENIED,
            reason=reason,
            timestamp=timestamp or self._clock.now_utc(),
            source=source,
            resource_type=resource_type,
            resource_id=resource_id,
        )
        await self.record(entry)
        return entry

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
        """Entries matching all filters, newest first. Queued entries are flushed first."""
        await self.flush()
        async with self._uow_factory() as uow:
            return await uow.audit.query(
                tenant_id=tenant_id,
                subject_id=subject_id,
                source=source,
                actions=actions,
                since=since,
                limit=limit,
            )

    async def _write(self, entry: AccessAuditEntry) -> None:
        try:
            async with self._uow_factory() as uow:
                await uow.audit.append(entry)
        except Exception as e:
            fallback_logger.error("Audit write failed (%s), entry: %s", e, _describe(entry))

    async def _drain(self) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            entry = await queue.get()
            try:
                if entry is None:
                    return
                await self._write(entry)
            finally:
                queue.task_done()


def _describe(entry: AccessAuditEntry) -> str:
    return (
        f"{entry.timestamp.isoformat()} {entry.source}/{entry.action} "
        f"subject={entry.subject_id} tenant={entry.tenant_id} "
        f"permission={entry.permission} outcome={entry.outcome} reason={entry.reason!r}"
    )
