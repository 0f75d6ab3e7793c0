"""Tests for runtime environment detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptdeps.core.config import ScriptDepsConfig
from scriptdeps.runtime.environment import ScriptEnvironment, detect_architecture, detect_platform_identifier


@pytest.mark.parametrize(
    ("value", "expected"),
    [("win32", "win"), ("cygwin", "win"), ("darwin", "osx"), ("linux", "linux"), ("freebsd14", "freebsd")],
)
def test_platform_identifier(value: str, expected: str) -> None:
    assert detect_platform_identifier(value) == expected


@pytest.mark.parametrize(
    ("machine", "expected"),
    [("x86_64", "x64"), ("AMD64", "x64"), ("i686", "x86"), ("aarch64", "arm64"), ("armv7l", "arm"), ("s390x", "s390x")],
)
def test_architecture(machine: str, expected: str) -> None:
    assert detect_architecture(machine) == expected


class TestDetect:
    def test_defaults_from_machine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("scriptdeps.runtime.environment.sys.platform", "linux")
        monkeypatch.setattr("scriptdeps.runtime.environment.platform.machine", lambda: "x86_64")
        monkeypatch.setenv("DOTNET_ROOT", "/opt/dotnet")

        env = ScriptEnvironment.detect()

        assert env.platform_identifier == "linux"
        assert env.processor_architecture == "x64"
        assert env.runtime_identifier == "linux-x64"
        assert env.target_framework == "net8.0"
        assert env.nuget_store_folder == Path("/opt/dotnet/store/x64/net8.0")

    def test_config_overrides(self, tmp_path: Path) -> None:
        config = ScriptDepsConfig(
            target_framework="net6.0",
            runtime_identifier="win10-x64",
            platform="win",
            architecture="x64",
            store_folder=tmp_path,
        )

        env = ScriptEnvironment.detect(config)

        assert env == ScriptEnvironment("win", "x64", "win10-x64", "net6.0", tmp_path)

    def test_environment_is_immutable(self, win_x64_env: ScriptEnvironment) -> None:
        with pytest.raises(AttributeError):
            win_x64_env.runtime_identifier = "linux-x64"  # type: ignore[misc]
