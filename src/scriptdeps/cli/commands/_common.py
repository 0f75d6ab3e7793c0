"""Helpers shared by the scriptdeps commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from scriptdeps.core.config import ScriptDepsConfig, load_config
from scriptdeps.errors import ConfigError

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def load_cli_config(project_dir: Path | None) -> ScriptDepsConfig:
    """Load config or exit with a readable error."""
    try:
        return load_config(project_dir)
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
