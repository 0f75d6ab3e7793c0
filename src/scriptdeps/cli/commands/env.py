"""CLI command for showing the detected runtime environment."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from scriptdeps.cli.commands._common import console, load_cli_config
from scriptdeps.runtime.environment import ScriptEnvironment


def env(
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project directory holding .scriptdeps/config.yaml"),
    json_output: bool = typer.Option(False, "--json", help="Print the environment as JSON"),
) -> None:
    """Show platform, architecture, RID, target framework and store folder."""
    environment = ScriptEnvironment.detect(load_cli_config(project))

    if json_output:
        typer.echo(json.dumps(environment.to_dict(), indent=2))
        return

    table = Table(title="Script environment", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in environment.to_dict().items():
        table.add_row(key, value)
    console.print(table)
