"""Structured filter builder.

Converts the optional, loosely-typed query parameters of `GET /strings` into a `Predicate`.
Numbers must parse as integers (otherwise `InvalidInputError`). `is_palindrome` is deliberately
permissive: only the literal string "true" means `True`, any other non-empty value means `False`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from string_analyzer.errors import InvalidInputError
from string_analyzer.filters.predicate import Predicate

# Request parameter name -> predicate field name.
PARAM_TO_FIELD: dict[str, str] = {
    "is_palindrome": "palindrome",
    "word_count": "word_count",
    "min_length": "min_length",
    "max_length": "max_length",
    "contains_character": "contains_character",
}

_FIELD_TO_PARAM: dict[str, str] = {field: param for param, field in PARAM_TO_FIELD.items()}


@dataclass(frozen=True)
class StructuredFilterParams:
    """Raw query parameters exactly as received (all optional strings)."""

    min_length: str | None = None
    max_length: str | None = None
    word_count: str | None = None
    is_palindrome: str | None = None
    contains_character: str | None = None


def _is_absent(raw: str | None) -> bool:
    return raw is None or raw == ""


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise InvalidInputError(f"Invalid value for {name!r}: expected an integer") from exc


def _parse_bool(raw: str) -> bool:
    return raw == "true"


def build_structured_predicate(params: StructuredFilterParams) -> Predicate:
    """Build a `Predicate` from structured query parameters.

    Raises:
        InvalidInputError: If a numeric parameter is not an integer.
    """

    fields: dict[str, Any] = {}

    for name in ("min_length", "max_length", "word_count"):
        raw = getattr(params, name)
        if not _is_absent(raw):
            fields[PARAM_TO_FIELD[name]] = _parse_int(name, raw)

    if not _is_absent(params.is_palindrome):
        fields["palindrome"] = _parse_bool(params.is_palindrome)

    if not _is_absent(params.contains_character):
        fields["contains_character"] = params.contains_character

    return Predicate(**fields)


def filters_applied(predicate: Predicate) -> dict[str, Any]:
    """Report the applied filters using the request parameter names."""

    return {_FIELD_TO_PARAM[field]: value for field, value in predicate.applied().items()}
