"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dc_common.logging import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_default_level_is_warning(restore_root_logger, monkeypatch) -> None:
    monkeypatch.delenv("DC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DC_LOG_FILE", raising=False)
    configure_logging(force=True)
    assert restore_root_logger.level == logging.WARNING


def test_level_from_environment(restore_root_logger, monkeypatch) -> None:
    monkeypatch.setenv("DC_LOG_LEVEL", "info")
    monkeypatch.delenv("DC_LOG_FILE", raising=False)
    configure_logging(force=True)
    assert restore_root_logger.level == logging.INFO


def test_debug_flag_wins(restore_root_logger, monkeypatch) -> None:
    monkeypatch.setenv("DC_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("DC_LOG_FILE", raising=False)
    configure_logging(debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_log_file_receives_json_records(restore_root_logger, monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DC_LOG_LEVEL", raising=False)
    log_file = tmp_path / "dc.log"
    configure_logging(level="INFO", log_file=str(log_file), json=True, force=True)

    logging.getLogger("dc_compose.test").info("composed page")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert '"event": "composed page"' in content
    assert '"level": "info"' in content


def test_existing_handlers_are_kept_without_force(restore_root_logger) -> None:
    sentinel = logging.NullHandler()
    restore_root_logger.addHandler(sentinel)
    configure_logging(level="DEBUG")
    assert sentinel in restore_root_logger.handlers
