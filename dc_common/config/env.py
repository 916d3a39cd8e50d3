"""Readers for ``DC_*`` environment variables.

Each reader accepts an optional mapping so callers can pass a prepared
environment instead of ``os.environ``. Unset and blank variables read as None.
"""

from __future__ import annotations

import os
from typing import Mapping

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def env_text(name: str, environ: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str, environ: Mapping[str, str] | None = None) -> bool | None:
    """Read a boolean switch; words other than on/off spellings read as None."""
    value = env_text(name, environ)
    if value is None:
        return None
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    return None


def env_int(name: str, environ: Mapping[str, str] | None = None) -> int | None:
    value = env_text(name, environ)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
