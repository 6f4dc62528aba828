"""Fixed English vocabulary for the rules-based interpreter.

These sets should remain small and deterministic; the interpreter is a keyword matcher, not a
language model.
"""

from __future__ import annotations

from collections.abc import Iterable

# A sentence must contain at least one of these (case-insensitively) to be interpretable.
TRIGGER_KEYWORDS: frozenset[str] = frozenset(
    {
        "word",
        "than",
        "words",
        "contain",
        "containing",
        "palindrome",
        "palindromic",
    }
)

PALINDROME_TERMS: tuple[str, ...] = ("palindrome", "palindromic")
NEGATION_TERM = "not"

WORD_TERMS: tuple[str, ...] = ("word", "words")

# Checked in this order; the first present term wins.
WORD_COUNT_MAGNITUDES: tuple[tuple[str, int], ...] = (
    ("single", 1),
    ("double", 2),
    ("triple", 3),
)

LENGTH_TRIGGER = "than"
LONGER_TERM = "longer"
SHORTER_TERM = "shorter"
# The bound is read this many tokens after the comparison term ("longer than N").
LENGTH_VALUE_OFFSET = 2

CONTAINS_TERMS: tuple[str, ...] = ("contain", "containing")
LETTER_TERM = "letter"


def has_trigger_keyword(tokens: Iterable[str]) -> bool:
    """Whether any token case-insensitively matches a trigger keyword."""

    return any(token.lower() in TRIGGER_KEYWORDS for token in tokens)


def has_any(tokens: list[str], terms: Iterable[str]) -> bool:
    """Whether any of `terms` appears verbatim among `tokens`."""

    return any(term in tokens for term in terms)


def detect_word_count(tokens: list[str]) -> int | None:
    """Map the first magnitude keyword present (single/double/triple) to a word count."""

    for term, count in WORD_COUNT_MAGNITUDES:
        if term in tokens:
            return count
    return None
