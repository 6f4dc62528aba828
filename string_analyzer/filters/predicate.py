"""Canonical filter predicate (Pydantic model).

This model is the contract between the two filter front-ends (structured parameters and the
natural-language interpreter) and the SQL builder. Unset fields leave that dimension
unconstrained; all set fields are combined with logical AND.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Predicate(BaseModel):
    """Filter over stored strings.

    `min_length > max_length` is accepted as-is and simply matches nothing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    palindrome: bool | None = None
    word_count: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    contains_character: str | None = None

    def is_empty(self) -> bool:
        return not self.applied()

    def applied(self) -> dict[str, Any]:
        """Return only the constrained fields, keyed by predicate field name."""

        return self.model_dump(exclude_none=True)
