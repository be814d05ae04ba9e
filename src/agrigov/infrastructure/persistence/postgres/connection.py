"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create the agrigov connection pool, unopened.

    The sweep CLI opens and closes it itself; the API does so in
    PoolLifespanMiddleware. `timeout` bounds the wait for a free connection.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        name="agrigov",
        open=False,
    )
