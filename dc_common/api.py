"""Public API surface for dc_common."""

from dc_common.config import env_flag, env_int, env_text
from dc_common.errors import (
    AmbiguousFilterMatchWarning,
    CompositionError,
    ConfigurationError,
    DCError,
    EmptyPathError,
    InvalidItemError,
    InvalidPathShapeError,
    error_to_payload,
    wrap_error,
)
from dc_common.logging import configure_logging

__all__ = [
    "AmbiguousFilterMatchWarning",
    "CompositionError",
    "ConfigurationError",
    "DCError",
    "EmptyPathError",
    "InvalidItemError",
    "InvalidPathShapeError",
    "configure_logging",
    "env_flag",
    "env_int",
    "env_text",
    "error_to_payload",
    "wrap_error",
]
