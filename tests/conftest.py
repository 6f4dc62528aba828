"""Pytest configuration and shared fixtures.

The in-memory store implements the same matching and ordering rules as the Postgres store so the
service and HTTP layers can be tested without a database.
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Ensure `import string_analyzer...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from string_analyzer.errors import ConflictError  # noqa: E402
from string_analyzer.filters.predicate import Predicate  # noqa: E402
from string_analyzer.records.properties import derive_properties  # noqa: E402
from string_analyzer.records.schema import StringRecord  # noqa: E402

_EPOCH = datetime(2025, 10, 20, tzinfo=UTC)


def _matches(record: StringRecord, predicate: Predicate) -> bool:
    props = record.properties
    if predicate.palindrome is not None and props.is_palindrome != predicate.palindrome:
        return False
    if predicate.word_count is not None and props.word_count != predicate.word_count:
        return False
    if predicate.min_length is not None and props.length < predicate.min_length:
        return False
    if predicate.max_length is not None and props.length > predicate.max_length:
        return False
    if (
            predicate.contains_character is not None
            and predicate.contains_character.lower() not in record.value.lower()
    ):
        return False
    return True


class InMemoryStringStore:
    """Dict-backed `StringStore` with deterministic, increasing `created_at` values."""

    def __init__(self) -> None:
        self.records: dict[str, StringRecord] = {}
        self._inserted = 0

    async def find_by_value(self, value: str) -> StringRecord | None:
        return next((r for r in self.records.values() if r.value == value), None)

    async def find_by_id(self, identity: str) -> StringRecord | None:
        return self.records.get(identity)

    async def insert(self, value: str) -> StringRecord:
        properties = derive_properties(value)
        if properties.sha256_hash in self.records:
            raise ConflictError("String already exists in the system")

        self._inserted += 1
        record = StringRecord(
            id=properties.sha256_hash,
            value=value,
            properties=properties,
            created_at=_EPOCH + timedelta(seconds=self._inserted),
        )
        self.records[record.id] = record
        return record

    async def delete_by_id(self, identity: str) -> bool:
        return self.records.pop(identity, None) is not None

    async def query(self, predicate: Predicate) -> list[StringRecord]:
        matched = [r for r in self.records.values() if _matches(r, predicate)]
        return sorted(matched, key=lambda r: (r.created_at, r.id))


@pytest.fixture
def memory_store() -> InMemoryStringStore:
    return InMemoryStringStore()


@pytest.fixture
async def populated_store(memory_store: InMemoryStringStore) -> InMemoryStringStore:
    for value in ("racecar", "hello world", "abc", "wow", "noon", "a man a plan", "zebra", "cat"):
        await memory_store.insert(value)
    return memory_store
