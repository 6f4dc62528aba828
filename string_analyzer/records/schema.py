"""String record schema (Pydantic models).

A record is created once and never mutated. Its `id` is the SHA-256 digest of `value` and its
properties are derived solely from `value` (see `string_analyzer.records.properties`).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StringProperties(BaseModel):
    """Derived, read-only properties of a stored string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    length: int = Field(ge=0)
    is_palindrome: bool
    unique_characters: int = Field(ge=0)
    word_count: int = Field(ge=1)
    sha256_hash: str
    character_frequency_map: dict[str, int] = Field(default_factory=dict)


class StringRecord(BaseModel):
    """A stored string with its identity, properties and creation timestamp."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @model_validator(mode="after")
    def validate_identity(self) -> StringRecord:
        """The identity and the properties' hash must agree."""

        if self.properties.sha256_hash != self.id:
            raise ValueError("properties.sha256_hash must equal id")
        return self
