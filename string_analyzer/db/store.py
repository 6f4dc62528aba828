"""String storage.

`StringStore` is the contract the service layer relies on; `PostgresStringStore` implements it on
top of the async pool and the deterministic SQL builder.

Uniqueness is enforced by the table itself (PRIMARY KEY on `id`, UNIQUE on `value`). The service's
lookup-then-insert is not atomic, so a concurrent duplicate insert surfaces here as
`ConflictError`.
"""

from __future__ import annotations

from typing import Any, Protocol

from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from string_analyzer.db.query import execute_rowcount, fetch_all, fetch_one
from string_analyzer.errors import ConflictError
from string_analyzer.filters.predicate import Predicate
from string_analyzer.records.properties import derive_properties
from string_analyzer.records.schema import StringProperties, StringRecord
from string_analyzer.sql.builder import (
    build_delete_by_id,
    build_find_by_id,
    build_find_by_value,
    build_insert,
    build_query,
)


class StringStore(Protocol):
    """Storage operations required by the service layer."""

    async def find_by_value(self, value: str) -> StringRecord | None: ...

    async def find_by_id(self, identity: str) -> StringRecord | None: ...

    async def insert(self, value: str) -> StringRecord: ...

    async def delete_by_id(self, identity: str) -> bool: ...

    async def query(self, predicate: Predicate) -> list[StringRecord]: ...


def record_from_row(row: dict[str, Any]) -> StringRecord:
    """Convert a `strings` table row into a `StringRecord`."""

    return StringRecord(
        id=row["id"],
        value=row["value"],
        properties=StringProperties(
            length=row["length"],
            is_palindrome=row["is_palindrome"],
            unique_characters=row["unique_characters"],
            word_count=row["word_count"],
            sha256_hash=row["id"],
            character_frequency_map=row["character_frequency_map"] or {},
        ),
        created_at=row["created_at"],
    )


def row_from_properties(value: str, properties: StringProperties) -> dict[str, Any]:
    return {
        "id": properties.sha256_hash,
        "value": value,
        "length": properties.length,
        "is_palindrome": properties.is_palindrome,
        "unique_characters": properties.unique_characters,
        "word_count": properties.word_count,
        "character_frequency_map": Jsonb(properties.character_frequency_map),
    }


class PostgresStringStore:
    """`StringStore` backed by the `strings` table."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def find_by_value(self, value: str) -> StringRecord | None:
        built = build_find_by_value(value)
        async with self._pool.connection() as conn:
            row = await fetch_one(conn, built.sql, built.params)
        return record_from_row(row) if row is not None else None

    async def find_by_id(self, identity: str) -> StringRecord | None:
        built = build_find_by_id(identity)
        async with self._pool.connection() as conn:
            row = await fetch_one(conn, built.sql, built.params)
        return record_from_row(row) if row is not None else None

    async def insert(self, value: str) -> StringRecord:
        """Derive properties for `value` and insert it.

        Raises:
            ConflictError: If a record with the same identity or value already exists.
        """

        built = build_insert(row_from_properties(value, derive_properties(value)))
        try:
            async with self._pool.connection() as conn:
                row = await fetch_one(conn, built.sql, built.params)
        except UniqueViolation as exc:
            raise ConflictError("String already exists in the system") from exc

        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return record_from_row(row)

    async def delete_by_id(self, identity: str) -> bool:
        built = build_delete_by_id(identity)
        async with self._pool.connection() as conn:
            deleted = await execute_rowcount(conn, built.sql, built.params)
        return deleted > 0

    async def query(self, predicate: Predicate) -> list[StringRecord]:
        built = build_query(predicate)
        async with self._pool.connection() as conn:
            rows = await fetch_all(conn, built.sql, built.params)
        return [record_from_row(row) for row in rows]
