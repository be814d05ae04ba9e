"""PostgreSQL grant repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from agrigov.domain.entities import Grant

_SELECT = (
    "SELECT g.id, g.subject_id, g.tenant_id, g.role_name, g.permission_set_id, "
    "ps.permissions, g.created_at, g.granted_by, g.reason, g.expires_at, "
    "g.is_active, g.deactivated_at "
    "FROM grants g JOIN permission_sets ps ON ps.id = g.permission_set_id "
)


def _row_to_grant(r: tuple) -> Grant:
    return Grant(
        id=r[0],
        subject_id=r[1],
        tenant_id=r[2],
        role_name=r[3],
        permission_set_id=r[4],
        permissions=tuple(r[5] or ()),
        created_at=r[6],
        granted_by=r[7],
        reason=r[8],
        expires_at=r[9],
        is_active=r[10],
        deactivated_at=r[11],
    )


class PostgresGrantRepository:
    """Grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, grant_id: UUID) -> Grant | None:
        cur = await self._conn.execute(_SELECT + "WHERE g.id = %s", (grant_id,))
        r = await cur.fetchone()
        return _row_to_grant(r) if r else None

    async def list_for_subject(self, subject_id: str, tenant_id: str) -> list[Grant]:
        cur = await self._conn.execute(
            _SELECT + "WHERE g.subject_id = %s AND g.tenant_id = %s AND g.is_active "
            "ORDER BY g.created_at, g.id",
            (subject_id, tenant_id),
        )
        return [_row_to_grant(r) for r in await cur.fetchall()]

    async def list_by_tenant(self, tenant_id: str) -> list[Grant]:
        cur = await self._conn.execute(
            _SELECT + "WHERE g.tenant_id = %s AND g.is_active "
            "ORDER BY g.subject_id, g.created_at, g.id",
            (tenant_id,),
        )
        return [_row_to_grant(r) for r in await cur.fetchall()]

    async def create(self, grant: Grant) -> Grant:
        await self._conn.execute(
            "INSERT INTO grants (id, subject_id, tenant_id, role_name, permission_set_id, "
            "granted_by, reason, expires_at, is_active, created_at, deactivated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                grant.id,
                grant.subject_id,
                grant.tenant_id,
                grant.role_name,
                grant.permission_set_id,
                grant.granted_by,
                grant.reason,
                grant.expires_at,
                grant.is_active,
                grant.created_at,
                grant.deactivated_at,
            ),
        )
        return grant

    async def deactivate(self, grant_id: UUID, deactivated_at: datetime) -> bool:
        cur = await self._conn.execute(
            "UPDATE grants SET is_active = false, deactivated_at = %s "
            "WHERE id = %s AND is_active",
            (deactivated_at, grant_id),
        )
        return cur.rowcount > 0
