"""Tests for filter signature canonicalization."""

from __future__ import annotations

import pytest

from dc_compose.engine.signatures import (
    NO_FILTER,
    canonical_expression,
    describe_signature,
    filter_signature,
    is_filtered,
)


pytestmark = pytest.mark.unit_compose


def test_absent_filter_has_no_signature() -> None:
    assert filter_signature(None) == NO_FILTER
    assert not is_filtered(filter_signature(None))


@pytest.mark.parametrize("spelling", ["wave==1", "wave == 1", "  wave  ==  1 ", "~ wave == 1", "(wave == 1)"])
def test_spelling_variants_share_a_signature(spelling) -> None:
    assert filter_signature(spelling) == filter_signature("wave == 1")


def test_different_predicates_differ() -> None:
    assert filter_signature("wave == 1") != filter_signature("wave == 2")


def test_empty_expression_is_not_the_same_as_no_filter() -> None:
    assert filter_signature("") != NO_FILTER
    assert is_filtered(filter_signature(""))


def test_unparseable_expression_falls_back_to_whitespace_collapse() -> None:
    assert canonical_expression("wave   %in%   c(1, 2)") == "wave %in% c(1, 2)"
    assert filter_signature("wave %in% c(1, 2)") == filter_signature(" wave  %in% c(1, 2)")


def test_mapping_filters_ignore_key_order() -> None:
    assert filter_signature({"wave": 1, "region": "north"}) == filter_signature(
        {"region": "north", "wave": 1}
    )
    assert filter_signature({"wave": 1}) != filter_signature("wave == 1")


def test_describe_signature_strips_prefix() -> None:
    assert describe_signature(filter_signature("wave==1")) == "wave == 1"
    assert describe_signature(NO_FILTER) == "(no filter)"


def test_lambdas_with_same_source_share_a_signature() -> None:
    first = lambda row: row["wave"] == 1  # noqa: E731
    second = lambda row: row["wave"]==1  # noqa: E731

    assert filter_signature(first) == filter_signature(second)
    assert describe_signature(filter_signature(first)) == "lambda row: row['wave'] == 1"


def test_lambdas_with_different_source_differ() -> None:
    first = lambda row: row["wave"] == 1  # noqa: E731
    second = lambda row: row["wave"] == 2  # noqa: E731
    assert filter_signature(first) != filter_signature(second)


def test_lambda_signature_ignores_surrounding_call() -> None:
    def wrap(predicate, **_):
        return predicate

    embedded = wrap(lambda row: row["wave"] == 1, title="Wave 1")
    assert describe_signature(filter_signature(embedded)) == "lambda row: row['wave'] == 1"


def test_captured_values_distinguish_closures() -> None:
    def wave_is(value):
        return lambda row: row["wave"] == value

    assert filter_signature(wave_is(1)) == filter_signature(wave_is(1))
    assert filter_signature(wave_is(1)) != filter_signature(wave_is(2))


def test_named_functions_use_their_body() -> None:
    def first_wave(row):
        return row["wave"] == 1

    def also_first_wave(row):
        return row["wave"]==1

    def second_wave(row):
        return row["wave"] == 2

    assert filter_signature(first_wave) == filter_signature(also_first_wave)
    assert filter_signature(first_wave) != filter_signature(second_wave)


def test_signatures_never_contain_memory_addresses() -> None:
    class Predicate:
        def __call__(self, row):
            return True

    signature = filter_signature(lambda row: True)
    assert " at 0x" not in signature
    assert " at 0x" not in filter_signature(Predicate())
    assert " at 0x" not in filter_signature(object())
