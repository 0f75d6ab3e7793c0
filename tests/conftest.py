from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from scriptdeps.runtime.environment import ScriptEnvironment
from scriptdeps.runtime.models import AssemblyIdentity


def create_file(path: Path, content: str = "placeholder") -> Path:
    """Create a file (and any missing parent dirs), return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def stub_identity(path: Path) -> AssemblyIdentity:
    """Identity reader that derives the assembly name from the file name."""
    return AssemblyIdentity(name=path.stem, version="1.0.0.0")


@pytest.fixture()
def make_file() -> Callable[..., Path]:
    return create_file


@pytest.fixture()
def store_folder(tmp_path: Path) -> Path:
    store = tmp_path / "store"
    store.mkdir()
    return store


@pytest.fixture()
def win_x64_env(store_folder: Path) -> ScriptEnvironment:
    return ScriptEnvironment(
        platform_identifier="win",
        processor_architecture="x64",
        runtime_identifier="win-x64",
        target_framework="net8.0",
        nuget_store_folder=store_folder,
    )


@pytest.fixture()
def linux_x64_env(store_folder: Path) -> ScriptEnvironment:
    return ScriptEnvironment(
        platform_identifier="linux",
        processor_architecture="x64",
        runtime_identifier="linux-x64",
        target_framework="net8.0",
        nuget_store_folder=store_folder,
    )


@pytest.fixture()
def identity_reader() -> Callable[[Path], AssemblyIdentity]:
    return stub_identity
