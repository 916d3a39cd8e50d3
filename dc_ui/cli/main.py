"""
Command-line interface for dashboard-composer.

Loads page collections and shows how their items compose into tab groups.
"""

from __future__ import annotations

import typer
from rich.console import Console

from dc_common.api import configure_logging
from dc_ui.cli.commands.compose import register_compose_command

console = Console()

app = typer.Typer(help="Compose dashboard pages into nested tab groups.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
) -> None:
    """Global options shared by all commands."""
    configure_logging(debug=debug, json=log_json or None, force=True)


register_compose_command(app, console)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
