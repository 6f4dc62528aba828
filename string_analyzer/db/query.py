"""Safe DB query helpers.

These helpers never interpolate user values into SQL: every value travels in `params`. DB errors
are not swallowed; the caller decides how to classify them.
"""

from __future__ import annotations

from typing import Any, LiteralString, cast

from psycopg import AsyncConnection


async def fetch_all(
        conn: AsyncConnection, sql: str, params: tuple[Any, ...] = ()
) -> list[dict[str, Any]]:
    """Execute a query and return every row as a dict."""

    async with conn.cursor() as cur:
        await cur.execute(cast(LiteralString, sql), params)
        rows = await cur.fetchall()
    return [dict(row) for row in rows]


async def fetch_one(
        conn: AsyncConnection, sql: str, params: tuple[Any, ...] = ()
) -> dict[str, Any] | None:
    """Execute a query and return the first row, or `None` if there is none."""

    async with conn.cursor() as cur:
        await cur.execute(cast(LiteralString, sql), params)
        row = await cur.fetchone()
    if row is None:
        return None
    return dict(row)


async def execute_rowcount(conn: AsyncConnection, sql: str, params: tuple[Any, ...] = ()) -> int:
    """Execute a statement and return the number of affected rows."""

    async with conn.cursor() as cur:
        await cur.execute(cast(LiteralString, sql), params)
        return cur.rowcount
