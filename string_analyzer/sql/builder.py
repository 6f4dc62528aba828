"""Deterministic SQL builder.

The builder converts a validated `Predicate` (and the point operations of the store) into
parameterized SQL. Identifiers are strictly allowlisted; only values become bound parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from string_analyzer.filters.predicate import Predicate
from string_analyzer.sql.columns import (
    CONTAINS_COLUMN,
    PREDICATE_COMPARISONS,
    RECORD_COLUMNS,
    TABLE,
)


class SQLBuilderError(ValueError):
    """Raised when a predicate cannot be converted into deterministic SQL."""


@dataclass(frozen=True)
class BuiltQuery:
    """A parameterized SQL query ready for execution."""

    sql: str
    params: tuple[Any, ...]


_SELECT_COLUMNS = ", ".join(f"s.{column}" for column in RECORD_COLUMNS)
_RETURNING_COLUMNS = ", ".join(RECORD_COLUMNS)
_ORDER_BY = "ORDER BY s.created_at ASC, s.id ASC"


def _where_and(clauses: list[str]) -> str:
    if not clauses:
        return ""
    return "WHERE " + " AND ".join(clauses)


def _append_comparisons(clauses: list[str], params: list[Any], predicate: Predicate) -> None:
    for field, (column, operator) in PREDICATE_COMPARISONS.items():
        value = getattr(predicate, field)
        if value is None:
            continue
        clauses.append(f"s.{column} {operator} %s")
        params.append(value)


def _append_contains(clauses: list[str], params: list[Any], predicate: Predicate) -> None:
    needle = predicate.contains_character
    if needle is None:
        return
    # Stored values are lower-case; strpos() keeps the needle literal (no LIKE wildcards).
    clauses.append(f"strpos(s.{CONTAINS_COLUMN}, %s) > 0")
    params.append(needle.lower())


def build_query(predicate: Predicate) -> BuiltQuery:
    """Build a SELECT over all matching records, oldest first."""

    clauses: list[str] = []
    params: list[Any] = []

    _append_comparisons(clauses, params, predicate)
    _append_contains(clauses, params, predicate)

    sql = f"SELECT {_SELECT_COLUMNS} FROM {TABLE} s {_where_and(clauses)} {_ORDER_BY}"
    return BuiltQuery(sql=" ".join(sql.split()), params=tuple(params))


def build_find_by_id(identity: str) -> BuiltQuery:
    return BuiltQuery(
        sql=f"SELECT {_SELECT_COLUMNS} FROM {TABLE} s WHERE s.id = %s",
        params=(identity,),
    )


def build_find_by_value(value: str) -> BuiltQuery:
    return BuiltQuery(
        sql=f"SELECT {_SELECT_COLUMNS} FROM {TABLE} s WHERE s.value = %s",
        params=(value,),
    )


def build_insert(row: dict[str, Any]) -> BuiltQuery:
    """Build an INSERT for one record row (every column except `created_at`)."""

    columns = [column for column in RECORD_COLUMNS if column != "created_at"]
    missing = [column for column in columns if column not in row]
    if missing:
        raise SQLBuilderError(f"insert row is missing columns: {', '.join(missing)}")

    placeholders = ", ".join("%s" for _ in columns)
    return BuiltQuery(
        sql=(
            f"INSERT INTO {TABLE} ({', '.join(columns)}) VALUES ({placeholders}) "
            f"RETURNING {_RETURNING_COLUMNS}"
        ),
        params=tuple(row[column] for column in columns),
    )


def build_delete_by_id(identity: str) -> BuiltQuery:
    return BuiltQuery(sql=f"DELETE FROM {TABLE} WHERE id = %s", params=(identity,))
