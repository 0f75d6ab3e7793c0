"""CLI command for resolving runtime dependencies.

Usage:
    scriptdeps resolve ./scripts              # directory of inline script source
    scriptdeps resolve ./main.csx             # single script file
    scriptdeps resolve ./bin/script.dll       # precompiled artifact (no scripts)
    scriptdeps resolve ./scriptdeps.graph.yaml --json

The dependency graph itself must already exist as a snapshot next to the
input (``scriptdeps.graph.yaml``/``.json`` or ``<name>.graph.yaml``).
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from scriptdeps.cli.commands._common import console, err_console, load_cli_config
from scriptdeps.errors import AssemblyIdentityError, AssetNotFoundError, GraphUnavailableError
from scriptdeps.runtime.environment import ScriptEnvironment
from scriptdeps.runtime.models import RuntimeDependency
from scriptdeps.runtime.provider import (
    GRAPH_SUFFIXES,
    ExistingProjectProvider,
    SnapshotDependencyInfoProvider,
    load_graph_snapshot,
)
from scriptdeps.runtime.resolver import RuntimeDependencyResolver
from scriptdeps.runtime.scripts import ContentFilesScriptExtractor

COMPILED_SUFFIXES = (".dll", ".exe")


def _render_table(dependencies: list[RuntimeDependency]) -> Table:
    table = Table(title="Runtime dependencies")
    table.add_column("Library", style="cyan")
    table.add_column("Version")
    table.add_column("Assemblies", justify="right")
    table.add_column("Native", justify="right")
    table.add_column("Scripts", justify="right")
    for dependency in dependencies:
        table.add_row(
            dependency.name,
            dependency.version,
            str(len(dependency.assemblies)),
            str(len(dependency.native_libraries)),
            str(len(dependency.script_files)),
        )
    return table


def resolve(
    path: Path = typer.Argument(..., exists=True, help="Script directory, script file, compiled artifact or graph file"),
    sources: list[str] = typer.Option([], "--source", "-s", help="Package source URI (repeatable)"),
    compiled: bool = typer.Option(False, "--compiled", help="Treat the input as a precompiled artifact"),
    workers: int = typer.Option(0, "--workers", "-w", min=0, help="Resolve libraries in parallel (0 = use config)"),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project directory holding .scriptdeps/config.yaml"),
    json_output: bool = typer.Option(False, "--json", help="Print records as JSON"),
) -> None:
    """Resolve managed assemblies, native libraries and script files."""
    config = load_cli_config(project)
    environment = ScriptEnvironment.detect(config)
    resolver = RuntimeDependencyResolver(
        environment,
        SnapshotDependencyInfoProvider(),
        ExistingProjectProvider(),
        ContentFilesScriptExtractor(environment.target_framework),
        max_workers=workers or config.max_workers,
    )
    package_sources = sources or config.package_sources
    is_compiled = compiled or path.suffix.lower() in COMPILED_SUFFIXES

    try:
        if path.is_file() and path.suffix.lower() in GRAPH_SUFFIXES:
            dependencies = resolver.resolve_graph(load_graph_snapshot(path), restore_packages=not is_compiled)
        elif is_compiled:
            dependencies = resolver.get_dependencies_for_assembly(path)
        elif path.is_dir():
            dependencies = resolver.get_dependencies(path, package_sources)
        else:
            dependencies = resolver.get_dependencies_for_script(path, package_sources)
    except (AssetNotFoundError, AssemblyIdentityError, GraphUnavailableError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if json_output:
        typer.echo(json.dumps([dependency.to_dict() for dependency in dependencies], indent=2))
        return

    console.print(_render_table(dependencies))
    console.print(f"[dim]{environment.runtime_identifier} ({environment.target_framework})[/dim]")
