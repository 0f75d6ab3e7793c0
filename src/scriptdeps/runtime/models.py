"""Core data structures for dependency graphs and resolved runtime dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Trailing marker NuGet uses for "this group intentionally ships no files".
PLACEHOLDER_MARKER = "_._"


class ScriptMode(Enum):
    """How the host runs the code whose dependencies are resolved."""

    SCRIPT = "Script"
    REPL = "REPL"
    EVAL = "Eval"


@dataclass(frozen=True)
class AssetGroup:
    """Assets a library ships for one runtime tag.

    An empty ``runtime`` means the group applies to any runtime.
    """

    runtime: str
    asset_paths: tuple[str, ...] = ()

    @property
    def is_runtime_agnostic(self) -> bool:
        return not self.runtime.strip()


@dataclass(frozen=True)
class RuntimeLibrary:
    """A single (name, version) node of the dependency graph."""

    name: str
    version: str
    path: str
    runtime_assembly_groups: tuple[AssetGroup, ...] = ()
    native_library_groups: tuple[AssetGroup, ...] = ()
    type: str = "package"


@dataclass(frozen=True)
class DependencyGraph:
    """Read-only dependency graph produced by an external restore step."""

    libraries: tuple[RuntimeLibrary, ...]
    package_folders: tuple[Path, ...] = ()


@dataclass(frozen=True)
class AssemblyIdentity:
    """Identity metadata read from a managed assembly's metadata tables."""

    name: str
    version: str
    culture: str = ""
    public_key_token: str | None = None

    @property
    def full_name(self) -> str:
        culture = self.culture or "neutral"
        token = self.public_key_token or "null"
        return f"{self.name}, Version={self.version}, Culture={culture}, PublicKeyToken={token}"


@dataclass(frozen=True)
class RuntimeAssembly:
    identity: AssemblyIdentity
    path: Path


@dataclass(frozen=True)
class RuntimeDependency:
    """Everything a script host has to load for one library."""

    name: str
    version: str
    assemblies: tuple[RuntimeAssembly, ...] = ()
    native_libraries: tuple[Path, ...] = ()
    script_files: tuple[Path, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "assemblies": [
                {
                    "name": assembly.identity.name,
                    "version": assembly.identity.version,
                    "full_name": assembly.identity.full_name,
                    "path": str(assembly.path),
                }
                for assembly in self.assemblies
            ],
            "native_libraries": [str(path) for path in self.native_libraries],
            "script_files": [str(path) for path in self.script_files],
        }
