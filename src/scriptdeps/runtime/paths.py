"""Package-folder search roots and first-hit asset path resolution.

Roots are searched strictly in order: graph-supplied package folders
(project or user cache) first, the global store last. The first root under
which the relative path exists as a file wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from scriptdeps.runtime.models import PLACEHOLDER_MARKER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAsset:
    relative_path: str
    root: Path
    path: Path


@dataclass(frozen=True)
class AssetNotFound:
    """Resolution outcome for a path that exists under none of the roots."""

    relative_path: str
    roots: tuple[Path, ...]

    @property
    def message(self) -> str:
        searched = ", ".join(str(root) for root in self.roots) or "<none>"
        return (
            f"The requested dependency ({self.relative_path}) was not found in the "
            f"package cache(s) ({searched}). Try executing/publishing the script "
            f"again with the '--no-cache' option."
        )


def is_placeholder(asset_path: str) -> bool:
    """Return True for ``_._`` entries that stand for "no files in this group"."""
    return asset_path.endswith(PLACEHOLDER_MARKER)


def join_library_path(library_path: str, asset_path: str) -> str:
    """Join a library base path and an asset path into one relative path."""
    asset_path = asset_path.replace("\\", "/")
    if not library_path:
        return asset_path
    return str(PurePosixPath(library_path.replace("\\", "/")) / asset_path)


def build_search_roots(
    package_folders: Iterable[Path | str],
    store_folder: Path | str | None,
) -> tuple[Path, ...]:
    """Return graph package folders in order with the global store appended."""
    roots = [Path(folder) for folder in package_folders]
    if store_folder:
        roots.append(Path(store_folder))
    return tuple(roots)


def resolve_asset_path(relative_path: str, roots: Sequence[Path]) -> ResolvedAsset | AssetNotFound:
    """Find ``relative_path`` under the first root where it exists.

    Returns:
        ResolvedAsset for the winning root, or AssetNotFound carrying the
        relative path and every root that was searched.
    """
    for root in roots:
        candidate = Path(root) / relative_path
        if candidate.is_file():
            return ResolvedAsset(relative_path=relative_path, root=Path(root), path=candidate)
    logger.debug("%s not found under %d package folder(s)", relative_path, len(roots))
    return AssetNotFound(relative_path=relative_path, roots=tuple(Path(root) for root in roots))
