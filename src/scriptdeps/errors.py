"""Exception hierarchy shared by the resolver, providers and CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scriptdeps.runtime.paths import AssetNotFound


class ScriptDepsError(RuntimeError):
    """Base class for every error raised by scriptdeps."""


class AssetNotFoundError(ScriptDepsError):
    """Raised when a required asset is missing from every package folder."""

    def __init__(self, not_found: AssetNotFound) -> None:
        self.not_found = not_found
        super().__init__(not_found.message)


class AssemblyIdentityError(ScriptDepsError):
    """Raised when a resolved file does not carry a managed assembly identity."""


class GraphUnavailableError(ScriptDepsError):
    """Raised when no dependency graph can be produced for a project or artifact."""


class ConfigError(ScriptDepsError):
    """Raised when a scriptdeps config file cannot be parsed or validated."""
