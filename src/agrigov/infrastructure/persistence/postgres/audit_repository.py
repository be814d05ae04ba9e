"""PostgreSQL access audit repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from agrigov.domain.entities import AccessAuditEntry
from agrigov.domain.value_objects import AuditAction, AuditOutcome, AuditSource


def _build_audit_filters(
    *,
    tenant_id: str | None = None,
    subject_id: str | None = None,
    source: AuditSource | None = None,
    actions: tuple[AuditAction, ...] | None = None,
    since: datetime | None = None,
) -> tuple[str, list]:
    """Build WHERE clause and params for audit queries.

    Returns ("", []) when no filter is given.
    """
    conditions: list[str] = []
    params: list = []
    if tenant_id is not None:
        conditions.append("tenant_id = %s")
        params.append(tenant_id)
    if subject_id is not None:
        conditions.append("subject_id = %s")
        params.append(subject_id)
    if source is not None:
        conditions.append("source = %s")
        params.append(str(source))
    if actions:
        conditions.append("action = ANY(%s)")
        params.append([str(a) for a in actions])
    if since is not None:
        conditions.append("created_at >= %s")
        params.append(since)
    if not conditions:
        return "", []
    return "WHERE " + " AND ".join(conditions), params


class PostgresAuditRepository:
    """Append-only audit repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: AccessAuditEntry) -> None:
        await self._conn.execute(
            "INSERT INTO access_audit (id, subject_id, tenant_id, permission, action, outcome, "
            "reason, source, resource_type, resource_id, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.subject_id,
                entry.tenant_id,
                entry.permission,
                str(entry.action),
                str(entry.outcome),
                entry.reason,
                str(entry.source),
                entry.resource_type,
                entry.resource_id,
                entry.timestamp,
            ),
        )

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
        where, params = _build_audit_filters(
            tenant_id=tenant_id,
            subject_id=subject_id,
            source=source,
            actions=actions,
            since=since,
        )
        sql = (
            "SELECT id, subject_id, tenant_id, permission, action, outcome, reason, "
            "created_at, source, resource_type, resource_id "
            f"FROM access_audit {where} ORDER BY created_at DESC, id"
        )
        if limit is not None:
            sql += " LIMIT %s"
            params.append(limit)
        cur = await self._conn.execute(sql, params)
        rows = await cur.fetchall()
        return [
            AccessAuditEntry(
                id=r[0],
                subject_id=r[1],
                tenant_id=r[2],
                permission=r[3],
                action=AuditAction(r[4]),
                outcome=AuditOutcome(r[5]),
                reason=r[6],
                timestamp=r[7],
                source=AuditSource(r[8]),
                resource_type=r[9],
                resource_id=r[10],
            )
            for r in rows
        ]
