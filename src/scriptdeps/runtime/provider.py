"""Boundary to the collaborators that produce dependency graphs.

Restoring packages and synthesising project files happen elsewhere; this
module only defines what the resolver expects from them, plus a provider
that reads graph snapshots an external restore step already wrote to disk.

Snapshot format (YAML or JSON)::

    package_folders:
      - /home/me/.nuget/packages
    libraries:
      - name: Newtonsoft.Json
        version: 13.0.1
        path: newtonsoft.json/13.0.1
        runtime_assembly_groups:
          - runtime: ""
            asset_paths: [lib/netstandard2.0/Newtonsoft.Json.dll]
        native_library_groups: []
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML

from scriptdeps.errors import GraphUnavailableError
from scriptdeps.runtime.models import AssetGroup, DependencyGraph, RuntimeLibrary

logger = logging.getLogger(__name__)

GRAPH_BASENAME = "scriptdeps.graph"
GRAPH_SUFFIXES = (".yaml", ".yml", ".json")


class DependencyInfoProvider(Protocol):
    def get_dependency_info(
        self,
        path: Path,
        package_sources: Sequence[str] = (),
        *,
        restore: bool = True,
    ) -> DependencyGraph: ...


class ScriptProjectProvider(Protocol):
    def create_project(self, target_directory: Path, target_framework: str) -> Path: ...

    def create_project_for_script_file(self, script_file: Path) -> Path: ...

    def create_project_for_repl(self, code: str, target_directory: Path, target_framework: str) -> Path: ...


class AssetGroupSnapshot(BaseModel):
    runtime: str = ""
    asset_paths: list[str] = Field(default_factory=list)


class LibrarySnapshot(BaseModel):
    name: str
    version: str
    path: str = ""
    type: str = "package"
    runtime_assembly_groups: list[AssetGroupSnapshot] = Field(default_factory=list)
    native_library_groups: list[AssetGroupSnapshot] = Field(default_factory=list)


class GraphSnapshot(BaseModel):
    """On-disk shape of a materialised dependency graph."""

    package_folders: list[str] = Field(default_factory=list)
    libraries: list[LibrarySnapshot] = Field(default_factory=list)

    def to_graph(self) -> DependencyGraph:
        return DependencyGraph(
            libraries=tuple(
                RuntimeLibrary(
                    name=lib.name,
                    version=lib.version,
                    path=lib.path,
                    type=lib.type,
                    runtime_assembly_groups=tuple(_to_group(g) for g in lib.runtime_assembly_groups),
                    native_library_groups=tuple(_to_group(g) for g in lib.native_library_groups),
                )
                for lib in self.libraries
            ),
            package_folders=tuple(Path(folder).expanduser() for folder in self.package_folders),
        )


def _to_group(snapshot: AssetGroupSnapshot) -> AssetGroup:
    return AssetGroup(runtime=snapshot.runtime, asset_paths=tuple(snapshot.asset_paths))


def load_graph_snapshot(path: Path) -> DependencyGraph:
    """Parse and validate a graph snapshot file.

    Raises:
        GraphUnavailableError: If the file is unreadable or invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GraphUnavailableError(f"Unable to read dependency graph: {path}") from exc

    try:
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = YAML(typ="safe").load(text)
    except Exception as exc:
        raise GraphUnavailableError(f"Invalid dependency graph file {path}: {exc}") from exc

    try:
        snapshot = GraphSnapshot.model_validate(raw or {})
    except ValidationError as exc:
        raise GraphUnavailableError(f"Invalid dependency graph in {path}:\n{exc}") from exc

    logger.debug("Loaded %d libraries from %s", len(snapshot.libraries), path)
    return snapshot.to_graph()


def graph_candidates(path: Path) -> list[Path]:
    """Return the snapshot files that may describe ``path``, in lookup order."""
    if path.is_dir():
        return [path / f"{GRAPH_BASENAME}{suffix}" for suffix in GRAPH_SUFFIXES]
    if path.suffix.lower() in GRAPH_SUFFIXES:
        return [path]
    siblings = [path.with_name(f"{path.stem}.graph{suffix}") for suffix in GRAPH_SUFFIXES]
    return siblings + [path.parent / f"{GRAPH_BASENAME}{suffix}" for suffix in GRAPH_SUFFIXES]


class SnapshotDependencyInfoProvider:
    """Reads dependency graphs that a restore step has already materialised.

    Package sources and the restore flag are accepted for interface
    compatibility; snapshots are never refreshed here.
    """

    def get_dependency_info(
        self,
        path: Path,
        package_sources: Sequence[str] = (),
        *,
        restore: bool = True,
    ) -> DependencyGraph:
        del package_sources, restore
        for candidate in graph_candidates(Path(path)):
            if candidate.is_file():
                return load_graph_snapshot(candidate)
        raise GraphUnavailableError(
            f"No dependency graph found for {path}. Run restore first so that "
            f"{GRAPH_BASENAME}.yaml (or .json) exists."
        )


class ExistingProjectProvider:
    """Project provider for layouts where the project already exists on disk.

    Returns the directory or script path unchanged so that a snapshot
    provider can locate the graph written next to it. REPL code is not
    written anywhere; its graph lives in the mode folder (e.g. ``REPL/``).
    """

    def create_project(self, target_directory: Path, target_framework: str) -> Path:
        del target_framework
        return Path(target_directory)

    def create_project_for_script_file(self, script_file: Path) -> Path:
        return Path(script_file)

    def create_project_for_repl(self, code: str, target_directory: Path, target_framework: str) -> Path:
        del code, target_framework
        return Path(target_directory)
