"""Tests for the structured filter builder."""

from __future__ import annotations

import pytest

from string_analyzer.errors import InvalidInputError
from string_analyzer.filters.predicate import Predicate
from string_analyzer.filters.structured import (
    StructuredFilterParams,
    build_structured_predicate,
    filters_applied,
)


def test_no_params_yield_empty_predicate() -> None:
    predicate = build_structured_predicate(StructuredFilterParams())
    assert predicate == Predicate()
    assert predicate.is_empty()
    assert filters_applied(predicate) == {}


def test_all_params_are_parsed() -> None:
    predicate = build_structured_predicate(
        StructuredFilterParams(
            min_length="3",
            max_length=" 10 ",
            word_count="1",
            is_palindrome="true",
            contains_character="a",
        )
    )
    assert predicate == Predicate(
        palindrome=True,
        word_count=1,
        min_length=3,
        max_length=10,
        contains_character="a",
    )


def test_empty_strings_are_treated_as_absent() -> None:
    predicate = build_structured_predicate(
        StructuredFilterParams(min_length="", is_palindrome="", contains_character="")
    )
    assert predicate.is_empty()


@pytest.mark.parametrize("name", ["min_length", "max_length", "word_count"])
def test_non_numeric_value_is_invalid_input(name: str) -> None:
    with pytest.raises(InvalidInputError, match=name):
        build_structured_predicate(StructuredFilterParams(**{name: "three"}))


def test_fractional_value_is_invalid_input() -> None:
    with pytest.raises(InvalidInputError):
        build_structured_predicate(StructuredFilterParams(word_count="1.5"))


@pytest.mark.parametrize("raw", ["false", "True", "yes", "1"])
def test_is_palindrome_other_than_literal_true_means_false(raw: str) -> None:
    predicate = build_structured_predicate(StructuredFilterParams(is_palindrome=raw))
    assert predicate.palindrome is False


def test_conflicting_bounds_are_not_rejected() -> None:
    predicate = build_structured_predicate(StructuredFilterParams(min_length="9", max_length="2"))
    assert predicate.min_length == 9
    assert predicate.max_length == 2


def test_filters_applied_uses_request_parameter_names() -> None:
    predicate = build_structured_predicate(
        StructuredFilterParams(is_palindrome="true", min_length="5")
    )
    assert filters_applied(predicate) == {"is_palindrome": True, "min_length": 5}


def test_multi_character_contains_is_passed_verbatim() -> None:
    predicate = build_structured_predicate(StructuredFilterParams(contains_character="Ab"))
    assert predicate.contains_character == "Ab"
