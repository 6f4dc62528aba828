"""Allowlisted SQL identifiers.

All column names referenced in generated SQL must come from these mappings; no user-provided
identifier should ever be interpolated into SQL.
"""

from __future__ import annotations

TABLE = "strings"

RECORD_COLUMNS: tuple[str, ...] = (
    "id",
    "value",
    "length",
    "is_palindrome",
    "unique_characters",
    "word_count",
    "character_frequency_map",
    "created_at",
)

# Predicate field -> (column, SQL comparison operator).
PREDICATE_COMPARISONS: dict[str, tuple[str, str]] = {
    "palindrome": ("is_palindrome", "="),
    "word_count": ("word_count", "="),
    "min_length": ("length", ">="),
    "max_length": ("length", "<="),
}

CONTAINS_COLUMN = "value"
