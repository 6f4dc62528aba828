"""Service operations behind the HTTP routes.

Each operation validates its request input, talks to the `StringStore` and returns data shaped for
response assembly. Classified errors (`string_analyzer.errors`) propagate unchanged to the API
boundary.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from string_analyzer.db.store import StringStore
from string_analyzer.errors import ConflictError, InvalidInputError, InvalidTypeError, NotFoundError
from string_analyzer.filters.nl_parser import InterpretedQuery, interpret_query
from string_analyzer.filters.structured import (
    StructuredFilterParams,
    build_structured_predicate,
    filters_applied,
)
from string_analyzer.records.properties import compute_identity
from string_analyzer.records.schema import StringRecord

logger = logging.getLogger(__name__)

_NOT_FOUND_MESSAGE = "String does not exist in the system"


@dataclass(frozen=True)
class CreateStringInput:
    """Validated body of a create request; `value` is already lower-cased."""

    value: str


@dataclass(frozen=True)
class FilteredStrings:
    """Result of a structured listing."""

    data: list[StringRecord]
    filters_applied: dict[str, Any] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class NaturalLanguageStrings:
    """Result of a natural-language listing, with the interpretation trace."""

    data: list[StringRecord]
    interpreted: InterpretedQuery

    @property
    def count(self) -> int:
        return len(self.data)


# Strings a JavaScript `Number()` conversion accepts: decimals with optional exponent, signed
# `Infinity`, and unsigned 0x/0o/0b literals. No digit separators, and "NaN" is not a number.
_NUMERIC_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+",
    flags=re.ASCII,
)


def _looks_numeric(value: str) -> bool:
    return _NUMERIC_RE.fullmatch(value.strip()) is not None


def parse_create_payload(payload: Any) -> CreateStringInput:
    """Validate a create request body.

    Raises:
        InvalidTypeError: If `value` is present but not a string.
        InvalidInputError: If the body is not an object, `value` is missing, blank or numeric.
    """

    if not isinstance(payload, Mapping) or "value" not in payload:
        raise InvalidInputError('Invalid request body or missing "value" field')

    value = payload["value"]
    if not isinstance(value, str):
        raise InvalidTypeError('Invalid data type for "value" (must be string)')

    if not value.strip() or _looks_numeric(value):
        raise InvalidInputError('Invalid request body or missing "value" field')

    return CreateStringInput(value=value.lower())


async def create_string(store: StringStore, payload: Any) -> StringRecord:
    """Analyze and store a new string.

    Raises:
        ConflictError: If the (lower-cased) value is already stored.
    """

    request = parse_create_payload(payload)

    if await store.find_by_value(request.value) is not None:
        raise ConflictError("String already exists in the system")

    record = await store.insert(request.value)
    logger.info("created id=%s length=%d", record.id, record.properties.length)
    return record


async def get_string_by_id(store: StringStore, identity: str) -> StringRecord:
    record = await store.find_by_id(identity)
    if record is None:
        raise NotFoundError(_NOT_FOUND_MESSAGE)
    return record


async def get_string(store: StringStore, value: str) -> StringRecord:
    """Look a string up by its value (case-insensitively, via its identity)."""

    return await get_string_by_id(store, compute_identity(value.lower()))


async def delete_string_by_id(store: StringStore, identity: str) -> None:
    if not await store.delete_by_id(identity):
        raise NotFoundError(_NOT_FOUND_MESSAGE)
    logger.info("deleted id=%s", identity)


async def delete_string(store: StringStore, value: str) -> None:
    await delete_string_by_id(store, compute_identity(value.lower()))


async def list_strings(store: StringStore, params: StructuredFilterParams) -> FilteredStrings:
    """List strings matching structured filters, oldest first.

    Raises:
        InvalidInputError: If a numeric parameter is not an integer.
    """

    predicate = build_structured_predicate(params)
    data = await store.query(predicate)
    return FilteredStrings(data=data, filters_applied=filters_applied(predicate))


async def filter_by_natural_language(store: StringStore, query: str) -> NaturalLanguageStrings:
    """List strings matching a natural-language query, oldest first.

    Raises:
        QueryParseError: If the query contains no recognized keyword.
    """

    interpreted = interpret_query(query)
    data = await store.query(interpreted.predicate)
    return NaturalLanguageStrings(data=data, interpreted=interpreted)
