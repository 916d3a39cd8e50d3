"""Tests for per-root construction strategy selection."""

from __future__ import annotations

import pytest

from dc_compose.engine.classifier import ConstructionStrategy, classify_roots
from dc_compose.engine.entries import prepare_entries


pytestmark = pytest.mark.unit_compose


def _classify(items):
    return classify_roots(prepare_entries(items))


def test_parents_with_different_filters_are_filtered(make_item) -> None:
    strategies = _classify(
        [make_item(1, "wave", "wave == 1"), make_item(2, "wave", "wave == 2")]
    )
    assert strategies == {"wave": ConstructionStrategy.FILTERED}


def test_parents_with_same_filter_are_standard(make_item) -> None:
    strategies = _classify([make_item(1, "wave", "wave==1"), make_item(2, "wave", "wave == 1")])
    assert strategies["wave"] is ConstructionStrategy.STANDARD


def test_unfiltered_parents_are_standard(make_item) -> None:
    strategies = _classify([make_item(1, "wave"), make_item(2, "wave"), make_item(3, "wave/age")])
    assert strategies["wave"] is ConstructionStrategy.STANDARD


def test_single_filtered_parent_with_filtered_descendant_is_filtered(make_item) -> None:
    strategies = _classify([make_item(1, "sis", "wave == 1"), make_item(2, "sis/age", "wave == 1")])
    assert strategies["sis"] is ConstructionStrategy.FILTERED


def test_single_filtered_parent_with_unfiltered_descendants_is_standard(make_item) -> None:
    strategies = _classify([make_item(1, "sis", "wave == 1"), make_item(2, "sis/age")])
    assert strategies["sis"] is ConstructionStrategy.STANDARD


def test_unfiltered_parent_with_filtered_descendant_is_standard(make_item) -> None:
    strategies = _classify([make_item(1, "sis"), make_item(2, "sis/age", "wave == 1")])
    assert strategies["sis"] is ConstructionStrategy.STANDARD


def test_root_without_parents_is_standard(make_item) -> None:
    strategies = _classify(
        [make_item(1, "a/b", "wave == 1"), make_item(2, "a/c", "wave == 2")]
    )
    assert strategies["a"] is ConstructionStrategy.STANDARD


def test_roots_are_classified_independently(make_item) -> None:
    strategies = _classify(
        [
            make_item(1, "wave", "wave == 1"),
            make_item(2, "other"),
            make_item(3, "wave", "wave == 2"),
            make_item(4, "other"),
            make_item(5),
        ]
    )
    assert strategies == {
        "wave": ConstructionStrategy.FILTERED,
        "other": ConstructionStrategy.STANDARD,
    }
