"""Tests for dependency record defaults and JSON shape."""

from __future__ import annotations

from pathlib import Path

from scriptdeps.runtime.models import AssemblyIdentity, RuntimeAssembly, RuntimeDependency


def test_dependency_defaults_to_empty_tuples() -> None:
    dependency = RuntimeDependency(name="Helpers", version="1.0.0")

    assert dependency.assemblies == ()
    assert dependency.native_libraries == ()
    assert dependency.script_files == ()
    assert dependency.to_dict()["script_files"] == []


def test_to_dict_uses_full_assembly_name(tmp_path: Path) -> None:
    identity = AssemblyIdentity(name="Newtonsoft.Json", version="13.0.0.0", public_key_token="30ad4fe6b2a6aeed")
    dependency = RuntimeDependency(
        name="Newtonsoft.Json",
        version="13.0.1",
        assemblies=(RuntimeAssembly(identity, tmp_path / "Newtonsoft.Json.dll"),),
    )

    [assembly] = dependency.to_dict()["assemblies"]

    assert assembly["full_name"] == (
        "Newtonsoft.Json, Version=13.0.0.0, Culture=neutral, PublicKeyToken=30ad4fe6b2a6aeed"
    )
    assert assembly["path"] == str(tmp_path / "Newtonsoft.Json.dll")
