from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from dc_common.api import DCError, error_to_payload
from dc_compose.api import ComposeSettings, compose, load_collection
from dc_ui.presenters.tree import build_render_tree


def _label_overrides(values: Optional[List[str]]) -> dict[str, str]:
    """Split each ``KEY=VALUE`` option once; the value may contain anything."""
    overrides: dict[str, str] = {}
    for value in values or []:
        key, separator, text = value.partition("=")
        if not separator or not key.strip():
            raise typer.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint="--label")
        overrides[key.strip()] = text.strip()
    return overrides


def register_compose_command(app: typer.Typer, console: Console) -> None:
    """Attach the `compose` command to the root app."""

    @app.command("compose")
    def compose_command(
        path: Path = typer.Argument(..., help="YAML collection file describing one page."),
        json_output: bool = typer.Option(
            False, "--json", help="Print the render tree as JSON instead of a tree view."
        ),
        label: Optional[List[str]] = typer.Option(
            None,
            "--label",
            "-l",
            help="Override a tab group label (KEY=VALUE); may be repeated.",
        ),
    ) -> None:
        """Compose a collection file and show the resulting tab structure."""
        overrides = _label_overrides(label)
        try:
            collection = load_collection(path)
            labels = dict(collection.tabgroup_labels)
            labels.update(overrides)
            result = compose(collection.items, labels, settings=ComposeSettings.from_env())
        except DCError as exc:
            if json_output:
                typer.echo(json.dumps(error_to_payload(exc), indent=2))
            else:
                console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
            raise typer.Exit(1)

        if json_output:
            typer.echo(json.dumps(result.to_dict(), indent=2))
            return

        console.print(build_render_tree(result, title=path.name))
        for warning in result.warnings:
            console.print(f"[yellow]Warning:[/yellow] {escape(str(warning))}", highlight=False)
