"""Pure derivation of string properties.

Derivation runs on the already-normalized (lower-cased) value and has no side effects. Two policies
are kept exactly as observed by API clients:

    - palindrome detection compares the exact value with its reverse (spaces and punctuation
      included);
    - word count splits on single spaces, so runs of spaces produce empty tokens that still count.
"""

from __future__ import annotations

import hashlib
import re
from collections import Counter

from string_analyzer.records.schema import StringProperties

_LETTER_RE = re.compile(r"[a-z]")


def compute_identity(value: str) -> str:
    """Return the SHA-256 hex digest used as the record primary key."""

    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    return value == value[::-1]


def count_words(value: str) -> int:
    return len(value.split(" "))


def character_frequency(value: str) -> dict[str, int]:
    """Count occurrences of each `a`-`z` letter; everything else is ignored."""

    return dict(Counter(_LETTER_RE.findall(value.lower())))


def derive_properties(value: str) -> StringProperties:
    """Compute the complete property set for `value`."""

    frequency = character_frequency(value)
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(frequency),
        word_count=count_words(value),
        sha256_hash=compute_identity(value),
        character_frequency_map=frequency,
    )
