"""Tests for bundled script file discovery and the source/compiled policy."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

from scriptdeps.runtime.models import RuntimeLibrary
from scriptdeps.runtime.scripts import ContentFilesScriptExtractor, ScriptAssetDelegate

LIB = "dotnet-script.helpers/1.0.0"


class TestContentFilesScriptExtractor:
    def test_main_csx_wins(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        csx = tmp_path / LIB / "contentFiles" / "csx" / "any"
        main = make_file(csx / "main.csx")
        make_file(csx / "other.csx")

        assert ContentFilesScriptExtractor("net8.0").extract(LIB, [tmp_path]) == (main,)

    def test_all_scripts_sorted_without_main(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        csx = tmp_path / LIB / "contentFiles" / "csx" / "any"
        b = make_file(csx / "b.csx")
        a = make_file(csx / "a.csx")
        make_file(csx / "readme.txt")

        assert ContentFilesScriptExtractor("net8.0").extract(LIB, [tmp_path]) == (a, b)

    def test_framework_folder_preferred_over_any(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        csx = tmp_path / LIB / "contentFiles" / "csx"
        specific = make_file(csx / "net8.0" / "main.csx")
        make_file(csx / "any" / "main.csx")

        assert ContentFilesScriptExtractor("net8.0").extract(LIB, [tmp_path]) == (specific,)

    def test_first_root_with_package_is_used(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        first, second = tmp_path / "a", tmp_path / "b"
        (first / LIB).mkdir(parents=True)
        make_file(second / LIB / "contentFiles" / "csx" / "any" / "main.csx")

        assert ContentFilesScriptExtractor("net8.0").extract(LIB, [first, second]) == ()

    def test_package_without_scripts(self, tmp_path: Path) -> None:
        assert ContentFilesScriptExtractor("net8.0").extract(LIB, [tmp_path]) == ()
        assert ContentFilesScriptExtractor("net8.0").extract("", [tmp_path]) == ()


class TestScriptAssetDelegate:
    def _library(self) -> RuntimeLibrary:
        return RuntimeLibrary(name="helpers", version="1.0.0", path=LIB)

    def test_compiled_artifact_never_asks_extractor(self, tmp_path: Path) -> None:
        extractor = MagicMock()

        assert ScriptAssetDelegate(extractor).collect(self._library(), [tmp_path], restore_packages=False) == ()
        extractor.extract.assert_not_called()

    def test_source_mode_returns_extractor_result(self, tmp_path: Path) -> None:
        extractor = MagicMock()
        extractor.extract.return_value = (tmp_path / "main.csx",)

        result = ScriptAssetDelegate(extractor).collect(self._library(), [tmp_path], restore_packages=True)

        assert result == (tmp_path / "main.csx",)
        extractor.extract.assert_called_once_with(LIB, [tmp_path])


def test_nested_script_folders_are_not_collected(tmp_path: Path, make_file: Callable[..., Path]) -> None:
    csx = tmp_path / LIB / "contentFiles" / "csx" / "any"
    top = make_file(csx / "top.csx")
    make_file(csx / "internal" / "nested.csx")

    assert ContentFilesScriptExtractor("net8.0").extract(LIB, [tmp_path]) == (top,)
