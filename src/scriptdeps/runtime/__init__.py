"""Runtime asset selection and path resolution.

This subpackage turns a restored dependency graph into the concrete
assemblies, native libraries and script files a script host loads.
"""

from scriptdeps.runtime.environment import ScriptEnvironment
from scriptdeps.runtime.models import (
    AssemblyIdentity,
    AssetGroup,
    DependencyGraph,
    RuntimeAssembly,
    RuntimeDependency,
    RuntimeLibrary,
    ScriptMode,
)
from scriptdeps.runtime.paths import AssetNotFound, ResolvedAsset, build_search_roots, resolve_asset_path
from scriptdeps.runtime.provider import (
    ExistingProjectProvider,
    SnapshotDependencyInfoProvider,
    load_graph_snapshot,
)
from scriptdeps.runtime.resolver import RuntimeDependencyResolver
from scriptdeps.runtime.rid import RuntimeIdentifierMatcher, parse_runtime_identifier
from scriptdeps.runtime.scripts import ContentFilesScriptExtractor, ScriptAssetDelegate

__all__ = [
    "AssemblyIdentity",
    "AssetGroup",
    "AssetNotFound",
    "ContentFilesScriptExtractor",
    "DependencyGraph",
    "ExistingProjectProvider",
    "ResolvedAsset",
    "RuntimeAssembly",
    "RuntimeDependency",
    "RuntimeDependencyResolver",
    "RuntimeIdentifierMatcher",
    "RuntimeLibrary",
    "ScriptAssetDelegate",
    "ScriptEnvironment",
    "ScriptMode",
    "SnapshotDependencyInfoProvider",
    "build_search_roots",
    "load_graph_snapshot",
    "parse_runtime_identifier",
    "resolve_asset_path",
]
