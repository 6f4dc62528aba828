"""Application composition root.

This module wires together configuration, the DB pool and the string store. The process entry
point owns the container's lifecycle (see `string_analyzer.api.main`).
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from string_analyzer.config.settings import Settings
from string_analyzer.db.pool import create_pool
from string_analyzer.db.store import PostgresStringStore, StringStore


@dataclass(frozen=True)
class App:
    """Shared application dependencies for request handlers.

    `pool` is `None` when the store does not need one (e.g. an in-memory store in tests).
    """

    settings: Settings
    store: StringStore
    pool: AsyncConnectionPool | None = None

    async def start(self) -> None:
        if self.pool is not None:
            await self.pool.open(wait=True)

    async def stop(self) -> None:
        if self.pool is not None:
            await self.pool.close()


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The returned DB pool is not opened. Call `await app.start()` at startup.
    """

    pool = create_pool(settings.database_url, max_size=settings.db_pool_max_size)
    return App(settings=settings, store=PostgresStringStore(pool), pool=pool)
