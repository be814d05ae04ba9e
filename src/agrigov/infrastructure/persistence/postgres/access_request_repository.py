"""PostgreSQL access request repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from agrigov.domain.entities import AccessRequest
from agrigov.domain.value_objects import AccessRequestStatus

_COLUMNS = (
    "id, subject_id, tenant_id, requested_permission, resource_type, resource_id, "
    "justification, emergency, status, requested_at, review_deadline, reviewed_at, "
    "reviewed_by, review_notes, grant_id"
)


def _row_to_request(r: tuple) -> AccessRequest:
    return AccessRequest(
        id=r[0],
        subject_id=r[1],
        tenant_id=r[2],
        requested_permission=r[3],
        resource_type=r[4],
        resource_id=r[5],
        justification=r[6],
        emergency=r[7],
        status=AccessRequestStatus(r[8]),
        requested_at=r[9],
        review_deadline=r[10],
        reviewed_at=r[11],
        reviewed_by=r[12],
        review_notes=r[13],
        grant_id=r[14],
    )


class PostgresAccessRequestRepository:
    """Access request repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, request_id: UUID) -> AccessRequest | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_requests WHERE id = %s",
            (request_id,),
        )
        r = await cur.fetchone()
        return _row_to_request(r) if r else None

    async def create(self, request: AccessRequest) -> AccessRequest:
        await self._conn.execute(
            f"INSERT INTO access_requests ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                request.id,
                request.subject_id,
                request.tenant_id,
                request.requested_permission,
                request.resource_type,
                request.resource_id,
                request.justification,
                request.emergency,
                str(request.status),
                request.requested_at,
                request.review_deadline,
                request.reviewed_at,
                request.reviewed_by,
                request.review_notes,
                request.grant_id,
            ),
        )
        return request

    async def list_by_tenant(
        self,
        tenant_id: str,
        *,
        status: AccessRequestStatus | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[AccessRequest]:
        conditions = ["tenant_id = %s"]
        params: list = [tenant_id]
        if status is not None:
            conditions.append("status = %s")
            params.append(str(status))
        if since is not None:
            conditions.append("requested_at >= %s")
            params.append(since)
        sql = (
            f"SELECT {_COLUMNS} FROM access_requests WHERE {' AND '.join(conditions)} "
            "ORDER BY requested_at DESC, id"
        )
        if limit is not None:
            sql += " LIMIT %s"
            params.append(limit)
        cur = await self._conn.execute(sql, params)
        return [_row_to_request(r) for r in await cur.fetchall()]

    async def list_overdue(self, now: datetime, limit: int) -> list[AccessRequest]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_requests "
            "WHERE status = 'pending' AND review_deadline <= %s "
            "ORDER BY review_deadline LIMIT %s",
            (now, limit),
        )
        return [_row_to_request(r) for r in await cur.fetchall()]

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
        cur = await self._conn.execute(
            "UPDATE access_requests SET status = %s, reviewed_at = %s, reviewed_by = %s, "
            "review_notes = %s, grant_id = %s "
            f"WHERE id = %s AND status = 'pending' RETURNING {_COLUMNS}",
            (str(status), reviewed_at, reviewed_by, review_notes, grant_id, request_id),
        )
        r = await cur.fetchone()
        return _row_to_request(r) if r else None
