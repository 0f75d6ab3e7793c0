"""Tests for native library selection."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from scriptdeps.runtime.models import AssetGroup, RuntimeLibrary
from scriptdeps.runtime.native import NativeLibrarySelector
from scriptdeps.runtime.paths import AssetNotFound
from scriptdeps.runtime.rid import RuntimeIdentifierMatcher


@pytest.fixture()
def selector() -> NativeLibrarySelector:
    return NativeLibrarySelector(RuntimeIdentifierMatcher("win", "x64"))


def _library(*groups: AssetGroup) -> RuntimeLibrary:
    return RuntimeLibrary(name="SQLitePCLRaw", version="2.1.6", path="sqlite/2.1.6", native_library_groups=groups)


def test_every_compatible_group_contributes(
    selector: NativeLibrarySelector, tmp_path: Path, make_file: Callable[..., Path]
) -> None:
    root = tmp_path / "packages"
    a = make_file(root / "sqlite/2.1.6/runtimes/win-x64/native/e_sqlite3.dll")
    b = make_file(root / "sqlite/2.1.6/runtimes/win7-x64/native/e_sqlite3.dll")
    library = _library(
        AssetGroup("win-x64", ("runtimes/win-x64/native/e_sqlite3.dll",)),
        AssetGroup("win7-x64", ("runtimes/win7-x64/native/e_sqlite3.dll",)),
        AssetGroup("linux-x64", ("runtimes/linux-x64/native/libe_sqlite3.so",)),
        AssetGroup("win-x86", ("runtimes/win-x86/native/e_sqlite3.dll",)),
    )

    assert selector.select(library, [root]) == (a, b)


def test_no_compatible_group_is_empty(selector: NativeLibrarySelector) -> None:
    library = _library(AssetGroup("osx-x64", ("runtimes/osx-x64/native/libe_sqlite3.dylib",)))
    assert selector.select(library, []) == ()


def test_placeholders_are_skipped(selector: NativeLibrarySelector, tmp_path: Path) -> None:
    library = _library(AssetGroup("win-x64", ("runtimes/win-x64/native/_._",)))

    with patch("scriptdeps.runtime.native.resolve_asset_path") as resolve:
        assert selector.select(library, [tmp_path]) == ()
    resolve.assert_not_called()


def test_missing_native_asset_is_fatal(selector: NativeLibrarySelector, tmp_path: Path) -> None:
    library = _library(AssetGroup("win-x64", ("runtimes/win-x64/native/e_sqlite3.dll",)))

    result = selector.select(library, [tmp_path])

    assert isinstance(result, AssetNotFound)
    assert result.relative_path == "sqlite/2.1.6/runtimes/win-x64/native/e_sqlite3.dll"


def test_resolved_paths_are_logged(
    selector: NativeLibrarySelector,
    tmp_path: Path,
    make_file: Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    make_file(tmp_path / "sqlite/2.1.6/runtimes/win-x64/native/e_sqlite3.dll")
    library = _library(AssetGroup("win-x64", ("runtimes/win-x64/native/e_sqlite3.dll",)))

    with caplog.at_level("DEBUG", logger="scriptdeps.runtime.native"):
        selector.select(library, [tmp_path])

    assert "Loading native library from" in caplog.text
