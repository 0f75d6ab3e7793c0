"""CLI command modules for scriptdeps.

Each module holds one command function; ``scriptdeps.cli`` registers them
on the Typer app.
"""
