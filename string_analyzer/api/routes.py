"""HTTP routes for `/strings`."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from string_analyzer import service
from string_analyzer.api.schemas import (
    ErrorResponse,
    InterpretedQueryResponse,
    NaturalLanguageResponse,
    StringListResponse,
)
from string_analyzer.db.store import StringStore
from string_analyzer.filters.structured import StructuredFilterParams
from string_analyzer.records.schema import StringRecord

router = APIRouter(prefix="/strings", tags=["strings"])

_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_CREATE_ERRORS = {
    **_BAD_REQUEST,
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_422_UNPROCESSABLE_CONTENT: {"model": ErrorResponse},
}


def get_store(request: Request) -> StringStore:
    """Resolve the store from the application container attached at startup."""

    return request.app.state.container.store


@router.post(
    "",
    response_model=StringRecord,
    status_code=status.HTTP_201_CREATED,
    responses=_CREATE_ERRORS,
)
async def create_string(
        payload: Any = Body(default=None),
        store: StringStore = Depends(get_store),
) -> StringRecord:
    return await service.create_string(store, payload)


@router.get("", response_model=StringListResponse, responses=_BAD_REQUEST)
async def list_strings(
        min_length: str | None = Query(default=None),
        max_length: str | None = Query(default=None),
        word_count: str | None = Query(default=None),
        is_palindrome: str | None = Query(default=None),
        contains_character: str | None = Query(default=None),
        store: StringStore = Depends(get_store),
) -> StringListResponse:
    params = StructuredFilterParams(
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        is_palindrome=is_palindrome,
        contains_character=contains_character,
    )
    result = await service.list_strings(store, params)
    return StringListResponse(
        data=result.data,
        count=result.count,
        filters_applied=result.filters_applied,
    )


@router.get(
    "/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    responses=_BAD_REQUEST,
)
async def filter_by_natural_language(
        query: str = Query(..., description="e.g. 'all single word palindromic strings'"),
        store: StringStore = Depends(get_store),
) -> NaturalLanguageResponse:
    result = await service.filter_by_natural_language(store, query)
    return NaturalLanguageResponse(
        data=result.data,
        count=result.count,
        interpreted_query=InterpretedQueryResponse(**result.interpreted.as_trace()),
    )


# `:path` lets values containing "/" (sent percent-encoded as %2F) reach the handler.
@router.get("/{string_value:path}", response_model=StringRecord, responses=_NOT_FOUND)
async def get_string(string_value: str, store: StringStore = Depends(get_store)) -> StringRecord:
    return await service.get_string(store, string_value)


@router.delete(
    "/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND
)
async def delete_string(string_value: str, store: StringStore = Depends(get_store)) -> Response:
    await service.delete_string(store, string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
