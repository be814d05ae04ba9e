"""PostgreSQL permission set repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from agrigov.domain.entities import PermissionSet


class PostgresPermissionSetRepository:
    """Permission set repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_set_id: UUID) -> PermissionSet | None:
        cur = await self._conn.execute(
            "SELECT id, tenant_id, name, description, permissions, created_at, is_system "
            "FROM permission_sets WHERE id = %s",
            (permission_set_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return PermissionSet(
            id=r[0],
            tenant_id=r[1],
            name=r[2],
            description=r[3],
            permissions=tuple(r[4] or ()),
            created_at=r[5],
            is_system=r[6],
        )

    async def create(self, permission_set: PermissionSet) -> PermissionSet:
        await self._conn.execute(
            "INSERT INTO permission_sets (id, tenant_id, name, description, permissions, created_at, is_system) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                permission_set.id,
                permission_set.tenant_id,
                permission_set.name,
                permission_set.description,
                list(permission_set.permissions),
                permission_set.created_at,
                permission_set.is_system,
            ),
        )
        return permission_set
