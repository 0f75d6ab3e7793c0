"""CLI command for checking runtime tags against this machine."""

from __future__ import annotations

from pathlib import Path

import typer

from scriptdeps.cli.commands._common import console, load_cli_config
from scriptdeps.runtime.environment import ScriptEnvironment
from scriptdeps.runtime.rid import RuntimeIdentifierMatcher


def match(
    tags: list[str] = typer.Argument(..., help="Runtime tags to check, e.g. win10-x64"),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project directory holding .scriptdeps/config.yaml"),
) -> None:
    """Report which runtime tags apply to the current platform.

    Exits with code 1 when any tag is incompatible.
    """
    environment = ScriptEnvironment.detect(load_cli_config(project))
    matcher = RuntimeIdentifierMatcher(environment.platform_identifier, environment.processor_architecture)

    all_compatible = True
    for tag in tags:
        if matcher.compatible(tag):
            console.print(f"[green]✓[/green] {tag or '<any>'}")
        else:
            all_compatible = False
            console.print(f"[red]✗[/red] {tag}")

    if not all_compatible:
        raise typer.Exit(1)
