"""Lifespan middleware - opens the pool and audit writer on startup, closes on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from agrigov.application.services.audit_log import AuditLog

logger = logging.getLogger("agrigov.api")


class PoolLifespanMiddleware:
    """Opens the connection pool, then starts the audit writer; reverse on shutdown."""

    def __init__(self, pool: AsyncConnectionPool, audit_log: AuditLog | None = None) -> None:
        self._pool = pool
        self._audit_log = audit_log

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        if self._audit_log is not None:
            await self._audit_log.start()
        logger.info("Started")

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        if self._audit_log is not None:
            await self._audit_log.stop()
        await self._pool.close()
        logger.info("Stopped")
