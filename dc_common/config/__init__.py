"""Configuration helpers for dc_common."""

from .env import env_flag, env_int, env_text

__all__ = [
    "env_flag",
    "env_int",
    "env_text",
]
