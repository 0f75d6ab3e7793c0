"""Script files bundled inside script packages.

Script packages ship ``.csx`` files under ``contentFiles/csx/<tfm>/``. When
the host runs from restored source those files have to be loaded alongside
the assemblies; when it runs from a precompiled artifact they are already
compiled in and nothing is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from scriptdeps.runtime.models import RuntimeLibrary

logger = logging.getLogger(__name__)

SCRIPT_CONTENT_DIR = Path("contentFiles") / "csx"
MAIN_SCRIPT_NAME = "main.csx"


class ScriptFileExtractor(Protocol):
    def extract(self, library_path: str, roots: Sequence[Path]) -> tuple[Path, ...]: ...


class ContentFilesScriptExtractor:
    """Default extractor reading ``contentFiles/csx`` from the package folder.

    The framework-specific folder is preferred over ``any``. A folder with a
    ``main.csx`` contributes only that file; otherwise every ``.csx`` directly
    in it (subfolders are not searched), in sorted order.
    """

    def __init__(self, target_framework: str) -> None:
        self.target_framework = target_framework

    def extract(self, library_path: str, roots: Sequence[Path]) -> tuple[Path, ...]:
        package_dir = self._find_package_dir(library_path, roots)
        if package_dir is None:
            return ()

        for framework in (self.target_framework, "any"):
            script_dir = package_dir / SCRIPT_CONTENT_DIR / framework
            if not script_dir.is_dir():
                continue
            main_script = script_dir / MAIN_SCRIPT_NAME
            if main_script.is_file():
                return (main_script,)
            scripts = tuple(sorted(p for p in script_dir.glob("*.csx") if p.is_file()))
            if scripts:
                logger.debug("Found %d script file(s) in %s", len(scripts), script_dir)
                return scripts
        return ()

    @staticmethod
    def _find_package_dir(library_path: str, roots: Sequence[Path]) -> Path | None:
        if not library_path:
            return None
        for root in roots:
            candidate = Path(root) / library_path
            if candidate.is_dir():
                return candidate
        return None


class ScriptAssetDelegate:
    """Applies the source-vs-precompiled policy in front of an extractor."""

    def __init__(self, extractor: ScriptFileExtractor) -> None:
        self.extractor = extractor

    def collect(
        self,
        library: RuntimeLibrary,
        roots: Sequence[Path],
        restore_packages: bool,
    ) -> tuple[Path, ...]:
        if not restore_packages:
            return ()
        return tuple(self.extractor.extract(library.path, roots))
