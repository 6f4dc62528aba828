"""Text normalization and tokenization for the natural-language interpreter."""

from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[^\w\s]", flags=re.ASCII)


def strip_punctuation(text: str) -> str:
    """Remove every character that is neither an ASCII word character nor whitespace."""

    return _NON_WORD_RE.sub("", text or "")


def tokenize(text: str) -> list[str]:
    """Split a sentence into tokens.

    Tokenization is intentionally naive: the cleaned text is trimmed and split on single spaces,
    so consecutive spaces yield empty tokens. Case is preserved.
    """

    return strip_punctuation(text).strip().split(" ")
