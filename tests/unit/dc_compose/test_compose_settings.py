"""Tests for composition settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dc_common.errors import ConfigurationError
from dc_compose.settings import ComposeSettings


pytestmark = pytest.mark.unit_compose


def test_defaults() -> None:
    settings = ComposeSettings()
    assert settings.placeholder_label == "Over Time"
    assert settings.chunk_label_max_length == 50
    assert settings.chunk_label_default == "viz"


def test_from_env_reads_overrides() -> None:
    settings = ComposeSettings.from_env(
        {"DC_PLACEHOLDER_LABEL": "Trend", "DC_CHUNK_LABEL_MAX_LENGTH": "20"}
    )
    assert settings.placeholder_label == "Trend"
    assert settings.chunk_label_max_length == 20


def test_from_env_ignores_unparseable_numbers() -> None:
    assert ComposeSettings.from_env({"DC_CHUNK_LABEL_MAX_LENGTH": "many"}).chunk_label_max_length == 50


def test_from_env_wraps_validation_errors() -> None:
    with pytest.raises(ConfigurationError):
        ComposeSettings.from_env({"DC_CHUNK_LABEL_MAX_LENGTH": "3"})


def test_from_env_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("DC_PLACEHOLDER_LABEL", "Across Waves")
    assert ComposeSettings.from_env().placeholder_label == "Across Waves"


def test_blank_labels_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ComposeSettings(placeholder_label="   ")


def test_settings_are_frozen() -> None:
    settings = ComposeSettings()
    with pytest.raises(ValidationError):
        settings.placeholder_label = "Other"
