"""Shared helpers for dashboard-composer."""

from dc_common.api import DCError, configure_logging

__all__ = ["configure_logging", "DCError"]
