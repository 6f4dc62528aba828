"""Async Postgres connection pool.

Request handlers share one psycopg3 async pool. Every pooled connection is pinned to UTC and
returns rows as dictionaries keyed by column name; `pool.connection()` commits on clean exit and
rolls back when the block raises.
"""

from __future__ import annotations

from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool


async def configure_session(conn: AsyncConnection) -> None:
    """Lock the session timezone to UTC and switch to dict rows."""

    conn.row_factory = dict_row
    async with conn.cursor() as cur:
        await cur.execute("SET TIME ZONE 'UTC'", prepare=False)
    # `SET` opens a transaction when autocommit is off; commit so the pool doesn't see INTRANS.
    await conn.commit()


def create_pool(
        database_url: str,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create an async DB pool for `database_url` (usually `Settings.database_url`).

    The pool is created with `open=False`; `App.start()` opens it.
    """

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=configure_session,
    )
