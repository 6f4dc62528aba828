"""Response models for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from string_analyzer.records.schema import StringRecord


class StringListResponse(BaseModel):
    data: list[StringRecord]
    count: int
    filters_applied: dict[str, Any]


class InterpretedQueryResponse(BaseModel):
    original: str
    parsed_filters: dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: list[StringRecord]
    count: int
    interpreted_query: InterpretedQueryResponse


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str
