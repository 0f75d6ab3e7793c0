"""Runtime dependency resolution: dependency graph in, loadable files out.

For every library of the graph, in order:
1. ASSEMBLIES -- best-matching runtime-assembly group (exact RID, then
                 runtime-agnostic, then none)
2. NATIVE     -- every native group compatible with this platform/arch
3. SCRIPTS    -- bundled script files, only when running from source

Asset paths are looked up under the graph's package folders first and the
global store last. A declared, non-placeholder asset that cannot be found
aborts the whole call; nothing is returned partially.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from scriptdeps.errors import AssetNotFoundError
from scriptdeps.runtime.assemblies import IdentityReader, ManagedAssemblySelector, read_assembly_identity
from scriptdeps.runtime.environment import ScriptEnvironment
from scriptdeps.runtime.models import DependencyGraph, RuntimeDependency, RuntimeLibrary, ScriptMode
from scriptdeps.runtime.native import NativeLibrarySelector
from scriptdeps.runtime.paths import AssetNotFound, build_search_roots
from scriptdeps.runtime.provider import DependencyInfoProvider, ScriptProjectProvider
from scriptdeps.runtime.rid import RuntimeIdentifierMatcher
from scriptdeps.runtime.scripts import ScriptAssetDelegate, ScriptFileExtractor

logger = logging.getLogger(__name__)


class RuntimeDependencyResolver:
    """Resolves the runtime dependencies of scripts, projects and artifacts."""

    def __init__(
        self,
        environment: ScriptEnvironment,
        dependency_info_provider: DependencyInfoProvider,
        project_provider: ScriptProjectProvider,
        script_extractor: ScriptFileExtractor,
        *,
        identity_reader: IdentityReader = read_assembly_identity,
        max_workers: int = 1,
    ) -> None:
        self.environment = environment
        self._dependency_info_provider = dependency_info_provider
        self._project_provider = project_provider
        self._matcher = RuntimeIdentifierMatcher(
            environment.platform_identifier,
            environment.processor_architecture,
        )
        self._assemblies = ManagedAssemblySelector(environment.runtime_identifier, identity_reader)
        self._native = NativeLibrarySelector(self._matcher)
        self._scripts = ScriptAssetDelegate(script_extractor)
        self._max_workers = max(1, max_workers)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def get_dependencies(
        self,
        target_directory: Path,
        package_sources: Sequence[str] = (),
        script_mode: ScriptMode = ScriptMode.SCRIPT,
        code: str | None = None,
    ) -> list[RuntimeDependency]:
        """Resolve dependencies for a directory of script source.

        In ``SCRIPT`` mode the project covers the scripts in
        ``target_directory``. Any other mode builds a project for ``code``
        under ``target_directory/<mode>`` (e.g. ``REPL``).
        """
        target_directory = Path(target_directory)
        if script_mode is ScriptMode.SCRIPT:
            project = self._project_provider.create_project(
                target_directory, self.environment.target_framework,
            )
        else:
            project = self._project_provider.create_project_for_repl(
                code or "", target_directory / script_mode.value, self.environment.target_framework,
            )
        return self._get_dependencies_internal(project, package_sources, restore_packages=True)

    def get_dependencies_for_script(
        self,
        script_file: Path,
        package_sources: Sequence[str] = (),
    ) -> list[RuntimeDependency]:
        """Resolve dependencies for an existing script file."""
        project = self._project_provider.create_project_for_script_file(Path(script_file))
        return self._get_dependencies_internal(project, package_sources, restore_packages=True)

    def get_dependencies_for_assembly(self, dll_path: Path) -> list[RuntimeDependency]:
        """Resolve dependencies for a precompiled artifact (no restore, no scripts)."""
        return self._get_dependencies_internal(Path(dll_path), (), restore_packages=False)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def _get_dependencies_internal(
        self,
        path: Path,
        package_sources: Sequence[str],
        *,
        restore_packages: bool,
    ) -> list[RuntimeDependency]:
        graph = self._dependency_info_provider.get_dependency_info(
            path, list(package_sources), restore=restore_packages,
        )
        return self.resolve_graph(graph, restore_packages=restore_packages)

    def resolve_graph(self, graph: DependencyGraph, *, restore_packages: bool = True) -> list[RuntimeDependency]:
        """Resolve every library of ``graph``, preserving graph order.

        Failures are reported for the first failing library in graph order,
        whether or not libraries are resolved in parallel.

        Raises:
            AssetNotFoundError: When a library declares an asset missing from
                every package folder.
            AssemblyIdentityError: When a resolved assembly has no readable
                identity.
        """
        roots = build_search_roots(graph.package_folders, self.environment.nuget_store_folder)
        logger.debug(
            "Resolving %d libraries for %s across %d package folder(s)",
            len(graph.libraries), self.environment.runtime_identifier, len(roots),
        )

        if self._max_workers == 1 or len(graph.libraries) < 2:
            return [
                _raise_if_missing(self._resolve_library(library, roots, restore_packages))
                for library in graph.libraries
            ]

        pool = ThreadPoolExecutor(max_workers=self._max_workers)
        futures = [
            pool.submit(self._resolve_library, library, roots, restore_packages)
            for library in graph.libraries
        ]
        try:
            dependencies = [_raise_if_missing(future.result()) for future in futures]
        except BaseException:
            # Queued libraries are dropped; only those already running finish.
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown()
        return dependencies

    def _resolve_library(
        self,
        library: RuntimeLibrary,
        roots: tuple[Path, ...],
        restore_packages: bool,
    ) -> RuntimeDependency | AssetNotFound:
        assemblies = self._assemblies.select(library, roots)
        if isinstance(assemblies, AssetNotFound):
            return assemblies
        native_libraries = self._native.select(library, roots)
        if isinstance(native_libraries, AssetNotFound):
            return native_libraries
        return RuntimeDependency(
            name=library.name,
            version=library.version,
            assemblies=assemblies,
            native_libraries=native_libraries,
            script_files=self._scripts.collect(library, roots, restore_packages),
        )


def _raise_if_missing(outcome: RuntimeDependency | AssetNotFound) -> RuntimeDependency:
    if isinstance(outcome, AssetNotFound):
        raise AssetNotFoundError(outcome)
    return outcome
