"""PostgreSQL subject directory repository implementation."""

from psycopg import AsyncConnection

from agrigov.domain.entities import SubjectProfile


class PostgresSubjectRepository:
    """Reads the subject_profiles directory table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, subject_id: str, tenant_id: str) -> SubjectProfile | None:
        cur = await self._conn.execute(
            "SELECT subject_id, tenant_id, full_name, nominal_role, last_login_at "
            "FROM subject_profiles WHERE subject_id = %s AND tenant_id = %s",
            (subject_id, tenant_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return SubjectProfile(
            subject_id=r[0],
            tenant_id=r[1],
            full_name=r[2],
            nominal_role=r[3],
            last_login_at=r[4],
        )

    async def list_by_tenant(self, tenant_id: str) -> list[SubjectProfile]:
        cur = await self._conn.execute(
            "SELECT subject_id, tenant_id, full_name, nominal_role, last_login_at "
            "FROM subject_profiles WHERE tenant_id = %s ORDER BY subject_id",
            (tenant_id,),
        )
        rows = await cur.fetchall()
        return [
            SubjectProfile(
                subject_id=r[0],
                tenant_id=r[1],
                full_name=r[2],
                nominal_role=r[3],
                last_login_at=r[4],
            )
            for r in rows
        ]
