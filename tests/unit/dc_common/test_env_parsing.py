"""Tests for DC_* environment readers."""

from __future__ import annotations

import pytest

from dc_common.config import env_flag, env_int, env_text


pytestmark = pytest.mark.unit_common


def test_env_text_strips_and_treats_blank_as_unset() -> None:
    environ = {"DC_A": "  Over Time ", "DC_BLANK": "   "}
    assert env_text("DC_A", environ) == "Over Time"
    assert env_text("DC_BLANK", environ) is None
    assert env_text("DC_MISSING", environ) is None


def test_env_text_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("DC_LOG_FILE", "/tmp/dc.log")
    assert env_text("DC_LOG_FILE") == "/tmp/dc.log"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("off", False), ("nope", None)],
)
def test_env_flag(value, expected) -> None:
    assert env_flag("DC_LOG_JSON", {"DC_LOG_JSON": value}) is expected


def test_env_flag_unset_is_none() -> None:
    assert env_flag("DC_LOG_JSON", {}) is None


@pytest.mark.parametrize(("value", "expected"), [("42", 42), (" -3 ", -3), ("x", None), ("", None)])
def test_env_int(value, expected) -> None:
    assert env_int("DC_CHUNK_LABEL_MAX_LENGTH", {"DC_CHUNK_LABEL_MAX_LENGTH": value}) == expected
