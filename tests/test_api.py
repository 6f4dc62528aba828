"""HTTP contract tests for the FastAPI application (in-memory store, no database)."""

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from string_analyzer.api.main import create_api
from string_analyzer.app import App
from string_analyzer.records.properties import compute_identity


@pytest.fixture
def client(memory_store: Any) -> Iterator[TestClient]:
    app = App(settings=SimpleNamespace(api_prefix="/api/v1"), store=memory_store)  # type: ignore[arg-type]
    with TestClient(create_api(app), raise_server_exceptions=False) as test_client:
        yield test_client


def _create(client: TestClient, value: Any) -> Any:
    return client.post("/api/v1/strings", json={"value": value})


def test_create_returns_record(client: TestClient) -> None:
    response = _create(client, "Hello World")

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == compute_identity("hello world")
    assert body["value"] == "hello world"
    assert body["properties"] == {
        "length": 11,
        "is_palindrome": False,
        "unique_characters": 7,
        "word_count": 2,
        "sha256_hash": compute_identity("hello world"),
        "character_frequency_map": {"h": 1, "e": 1, "l": 3, "o": 2, "w": 1, "r": 1, "d": 1},
    }
    assert "created_at" in body


def test_create_duplicate_is_conflict(client: TestClient) -> None:
    assert _create(client, "wow").status_code == 201

    response = _create(client, "WOW")
    assert response.status_code == 409
    assert response.json()["status"] == "error"


def test_create_rejects_bad_values(client: TestClient) -> None:
    assert _create(client, 42).status_code == 422
    assert _create(client, "42").status_code == 400
    assert _create(client, "   ").status_code == 400
    assert client.post("/api/v1/strings", json={}).status_code == 400
    assert client.post("/api/v1/strings").status_code == 400


def test_get_and_delete(client: TestClient) -> None:
    _create(client, "noon")

    response = client.get("/api/v1/strings/NOON")
    assert response.status_code == 200
    assert response.json()["value"] == "noon"

    assert client.delete("/api/v1/strings/noon").status_code == 204
    assert client.get("/api/v1/strings/noon").status_code == 404
    assert client.delete("/api/v1/strings/noon").status_code == 404


def test_get_and_delete_value_containing_slash(client: TestClient) -> None:
    assert _create(client, "A/B").status_code == 201

    response = client.get("/api/v1/strings/a%2Fb")
    assert response.status_code == 200
    assert response.json()["id"] == compute_identity("a/b")

    assert client.delete("/api/v1/strings/A%2FB").status_code == 204
    assert client.get("/api/v1/strings/a%2Fb").status_code == 404


def test_error_responses_are_documented(client: TestClient) -> None:
    paths = client.get("/openapi.json").json()["paths"]
    create = paths["/api/v1/strings"]["post"]["responses"]
    lookup = paths["/api/v1/strings/{string_value}"]["get"]["responses"]

    for code in ("400", "409", "422"):
        schema = create[code]["content"]["application/json"]["schema"]
        assert schema == {"$ref": "#/components/schemas/ErrorResponse"}
    assert "404" in lookup


def test_list_with_structured_filters(client: TestClient) -> None:
    for value in ("abc", "hello world", "wow", "cat", "zebra"):
        _create(client, value)

    response = client.get(
        "/api/v1/strings",
        params={"min_length": "3", "max_length": "3", "word_count": "1", "is_palindrome": "false"},
    )
    assert response.status_code == 200
    body = response.json()
    assert [item["value"] for item in body["data"]] == ["abc", "cat"]
    assert body["count"] == 2
    assert body["filters_applied"] == {
        "min_length": 3,
        "max_length": 3,
        "word_count": 1,
        "is_palindrome": False,
    }


def test_list_with_invalid_number_is_bad_request(client: TestClient) -> None:
    response = client.get("/api/v1/strings", params={"min_length": "abc"})
    assert response.status_code == 400
    assert "min_length" in response.json()["message"]


def test_natural_language_filter(client: TestClient) -> None:
    for value in ("racecar", "zebra", "a b"):
        _create(client, value)

    response = client.get(
        "/api/v1/strings/filter-by-natural-language",
        params={"query": "words containing the letter z"},
    )
    assert response.status_code == 200
    body = response.json()
    assert [item["value"] for item in body["data"]] == ["zebra"]
    assert body["count"] == 1
    assert body["interpreted_query"] == {
        "original": "words containing the letter z",
        "parsed_filters": {"contains_character": "z"},
    }


def test_natural_language_unparseable_is_bad_request(client: TestClient) -> None:
    response = client.get(
        "/api/v1/strings/filter-by-natural-language", params={"query": "banana"}
    )
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_natural_language_requires_query(client: TestClient) -> None:
    assert client.get("/api/v1/strings/filter-by-natural-language").status_code == 400


def test_unknown_route(client: TestClient) -> None:
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_unexpected_error_is_generic_500(client: TestClient, memory_store: Any) -> None:
    async def _broken_query(_predicate: Any) -> list[Any]:
        raise RuntimeError("database is on fire")

    memory_store.query = _broken_query

    response = client.get("/api/v1/strings")
    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Internal server error"}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
