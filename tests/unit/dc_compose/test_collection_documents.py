"""Tests for YAML collection files."""

from __future__ import annotations

from pathlib import Path

import pytest

from dc_common.errors import ConfigurationError
from dc_compose.documents import load_collection, parse_collection
from dc_compose.models import ItemKind, Standalone, TabGroup


pytestmark = pytest.mark.unit_compose


WAVES_YAML = """\
tabgroup_labels:
  wave: Survey Waves
defaults:
  type: histogram
items:
  - {x_var: score, title: Wave 1, tabgroup: wave, filter: "wave == 1"}
  - {x_var: score, title: Wave 2, tabgroup: wave, filter: "wave == 2"}
  - {type: bar, x_var: age, tabgroup: {1: wave, 2: age}, filter: "wave==1"}
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "page.yaml"
    path.write_text(text)
    return path


def test_load_collection_builds_items(tmp_path: Path) -> None:
    vizzes = load_collection(_write(tmp_path, WAVES_YAML))

    assert len(vizzes) == 3
    assert vizzes.tabgroup_labels == {"wave": "Survey Waves"}
    first, _, third = vizzes.items
    assert first.kind is ItemKind.HISTOGRAM
    assert first.params["x_var"] == "score"
    assert third.kind is ItemKind.BAR
    assert third.tabgroup == ("wave", "age")


def test_loaded_collection_composes(tmp_path: Path) -> None:
    result = load_collection(_write(tmp_path, WAVES_YAML)).compose()

    group = result[0]
    assert isinstance(group, TabGroup)
    assert group.label == "Survey Waves"
    first, second = group.children
    assert isinstance(first.nested_children[0], Standalone)
    assert first.nested_children[0].item.insertion_index == 3
    assert second.nested_children == ()


def test_empty_file_is_an_empty_collection(tmp_path: Path) -> None:
    assert len(load_collection(_write(tmp_path, ""))) == 0


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_collection(tmp_path / "absent.yaml")


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not valid YAML"):
        load_collection(_write(tmp_path, "items: [unclosed"))


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"items": [{"type": "bar"}], "unexpected": True},
        {"items": "bar"},
    ],
)
def test_invalid_documents_are_reported(data) -> None:
    with pytest.raises(ConfigurationError):
        parse_collection(data)


def test_extra_item_fields_become_params() -> None:
    vizzes = parse_collection({"items": [{"type": "bar", "x_var": "age", "color_palette": ["#fff"]}]})
    (item,) = vizzes.items
    assert item.params["x_var"] == "age"
    assert item.params["color_palette"] == ["#fff"]
