"""Typer application for dashboard-composer."""

from dc_ui.cli.main import app, main

__all__ = ["app", "main"]
