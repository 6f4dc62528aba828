"""Rules-based natural-language filter interpreter.

This interpreter is intentionally strict and deterministic:
    - it only recognizes a small fixed English vocabulary,
    - each clause (palindrome, word count, length, contains) is recognized independently,
    - it produces a `Predicate` validated by the Pydantic model, or raises `QueryParseError`.

Clause keywords are matched verbatim against the tokens; only the trigger check that decides
whether the sentence is interpretable at all is case-insensitive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from string_analyzer.errors import QueryParseError
from string_analyzer.filters.normalize import tokenize
from string_analyzer.filters.predicate import Predicate
from string_analyzer.filters.vocabulary import (
    CONTAINS_TERMS,
    LENGTH_TRIGGER,
    LENGTH_VALUE_OFFSET,
    LETTER_TERM,
    LONGER_TERM,
    NEGATION_TERM,
    PALINDROME_TERMS,
    SHORTER_TERM,
    WORD_TERMS,
    detect_word_count,
    has_any,
    has_trigger_keyword,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterpretedQuery:
    """A parsed predicate plus the trace reported back to the caller."""

    original: str
    predicate: Predicate

    @property
    def parsed_filters(self) -> dict[str, Any]:
        return self.predicate.applied()

    def as_trace(self) -> dict[str, Any]:
        return {"original": self.original, "parsed_filters": self.parsed_filters}


def _palindrome_clause(tokens: list[str]) -> dict[str, Any]:
    if not has_any(tokens, PALINDROME_TERMS):
        return {}
    # Any bare "not" negates, wherever it appears in the sentence.
    return {"palindrome": NEGATION_TERM not in tokens}


def _word_count_clause(tokens: list[str]) -> dict[str, Any]:
    if not has_any(tokens, WORD_TERMS):
        return {}
    word_count = detect_word_count(tokens)
    if word_count is None:
        return {}
    return {"word_count": word_count}


def _read_length_bound(tokens: list[str], term: str) -> int:
    position = tokens.index(term) + LENGTH_VALUE_OFFSET
    try:
        return int(tokens[position])
    except (IndexError, ValueError) as exc:
        raise QueryParseError(f"expected a number after {term!r} {LENGTH_TRIGGER!r}") from exc


def _length_clause(tokens: list[str]) -> dict[str, Any]:
    if LENGTH_TRIGGER not in tokens:
        return {}

    fields: dict[str, Any] = {}
    if LONGER_TERM in tokens:
        fields["min_length"] = _read_length_bound(tokens, LONGER_TERM) + 1
    if SHORTER_TERM in tokens:
        fields["max_length"] = _read_length_bound(tokens, SHORTER_TERM) - 1
    return fields


def _contains_clause(tokens: list[str]) -> dict[str, Any]:
    if not has_any(tokens, CONTAINS_TERMS) or LETTER_TERM not in tokens:
        return {}

    position = tokens.index(LETTER_TERM) + 1
    if position >= len(tokens) or not tokens[position]:
        return {}
    return {"contains_character": tokens[position]}


def interpret_query(text: str) -> InterpretedQuery:
    """Interpret a natural-language sentence as a `Predicate`.

    Raises:
        QueryParseError: If the sentence is empty or contains no recognized keyword.
    """

    tokens = tokenize(text)
    if not any(tokens):
        raise QueryParseError("Unable to parse natural language query: empty input")

    if not has_trigger_keyword(tokens):
        raise QueryParseError("Unable to parse natural language query: no recognized keyword")

    fields: dict[str, Any] = {}
    fields.update(_palindrome_clause(tokens))
    fields.update(_word_count_clause(tokens))
    fields.update(_length_clause(tokens))
    fields.update(_contains_clause(tokens))

    interpreted = InterpretedQuery(original=text, predicate=Predicate(**fields))
    logger.debug("interpreted query=%r filters=%s", text, interpreted.parsed_filters)
    return interpreted
