"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection

from agrigov.domain.entities import Role


class PostgresRoleRepository:
    """Reads tenant custom roles from the roles table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_custom(self) -> list[Role]:
        cur = await self._conn.execute(
            "SELECT key, tenant_id, name, description, permissions, can_delegate, max_users "
            "FROM roles WHERE tenant_id IS NOT NULL ORDER BY tenant_id, key"
        )
        rows = await cur.fetchall()
        return [
            Role(
                key=r[0],
                tenant_id=r[1],
                name=r[2],
                description=r[3],
                permissions=tuple(r[4]),
                is_system=False,
                can_delegate=r[5],
                max_users=r[6],
            )
            for r in rows
        ]
