"""scriptdeps command line interface.

Usage:
    scriptdeps env                 # Show the detected runtime environment
    scriptdeps match win10-x64     # Check a runtime tag against this machine
    scriptdeps resolve ./script    # Resolve runtime dependencies
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from scriptdeps import __version__
from scriptdeps.cli.commands.env import env
from scriptdeps.cli.commands.match import match
from scriptdeps.cli.commands.resolve import resolve

app = typer.Typer(
    name="scriptdeps",
    help="Resolve the runtime assets a script host needs from a restored dependency graph",
    add_completion=False,
    no_args_is_help=True,
)

app.command(name="env")(env)
app.command(name="match")(match)
app.command(name="resolve")(resolve)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"scriptdeps {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution details to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit",
    ),
) -> None:
    """Configure logging for every subcommand."""
    del version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
            force=True,
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
