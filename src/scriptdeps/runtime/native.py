"""Native library selection for a single library."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from scriptdeps.runtime.models import RuntimeLibrary
from scriptdeps.runtime.paths import AssetNotFound, is_placeholder, join_library_path, resolve_asset_path
from scriptdeps.runtime.rid import RuntimeIdentifierMatcher

logger = logging.getLogger(__name__)


class NativeLibrarySelector:
    """Collects native assets from every group compatible with this machine.

    Packages may ship several compatible variants (``win-x64`` and
    ``win7-x64``), so every matching group contributes, not just the best.
    """

    def __init__(self, matcher: RuntimeIdentifierMatcher) -> None:
        self.matcher = matcher

    def select(self, library: RuntimeLibrary, roots: Sequence[Path]) -> tuple[Path, ...] | AssetNotFound:
        result: list[Path] = []
        for group in library.native_library_groups:
            if not self.matcher.compatible(group.runtime):
                continue
            for asset_path in group.asset_paths:
                if is_placeholder(asset_path):
                    continue
                outcome = resolve_asset_path(join_library_path(library.path, asset_path), roots)
                if isinstance(outcome, AssetNotFound):
                    return outcome
                logger.debug("Loading native library from %s", outcome.path)
                result.append(outcome.path)
        return tuple(result)
