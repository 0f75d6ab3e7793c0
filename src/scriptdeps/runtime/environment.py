"""Facts about the machine a script host runs on.

``ScriptEnvironment`` is an immutable value; build it once with
:meth:`ScriptEnvironment.detect` (or directly in tests) and pass it to
every component that needs it.
"""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from scriptdeps.core.config import ScriptDepsConfig

_ARCHITECTURES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv8l": "arm",
    "arm": "arm",
}

_DEFAULT_DOTNET_ROOTS: dict[str, Path] = {
    "win": Path("C:/Program Files/dotnet"),
    "osx": Path("/usr/local/share/dotnet"),
    "linux": Path("/usr/share/dotnet"),
}


def detect_platform_identifier(sys_platform: str | None = None) -> str:
    """Map ``sys.platform`` to the RID platform token (win, osx, linux, ...)."""
    value = sys_platform or sys.platform
    if value.startswith(("win32", "cygwin", "msys")):
        return "win"
    if value == "darwin":
        return "osx"
    if value.startswith("linux"):
        return "linux"
    if value.startswith("freebsd"):
        return "freebsd"
    return value


def detect_architecture(machine: str | None = None) -> str:
    """Map ``platform.machine()`` to the RID architecture token."""
    value = (machine if machine is not None else platform.machine()).lower()
    return _ARCHITECTURES.get(value, value)


def default_dotnet_root(platform_identifier: str) -> Path:
    if env_root := os.environ.get("DOTNET_ROOT"):
        return Path(env_root)
    return _DEFAULT_DOTNET_ROOTS.get(platform_identifier, Path("/usr/share/dotnet"))


@dataclass(frozen=True)
class ScriptEnvironment:
    platform_identifier: str
    processor_architecture: str
    runtime_identifier: str
    target_framework: str
    nuget_store_folder: Path

    @classmethod
    def detect(cls, config: ScriptDepsConfig | None = None) -> "ScriptEnvironment":
        """Describe the current machine, honouring config overrides."""
        config = config or ScriptDepsConfig()
        platform_identifier = config.platform or detect_platform_identifier()
        architecture = config.architecture or detect_architecture()
        runtime_identifier = config.runtime_identifier or f"{platform_identifier}-{architecture}"
        store_folder = config.store_folder or (
            default_dotnet_root(platform_identifier) / "store" / architecture / config.target_framework
        )
        return cls(
            platform_identifier=platform_identifier,
            processor_architecture=architecture,
            runtime_identifier=runtime_identifier,
            target_framework=config.target_framework,
            nuget_store_folder=store_folder,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "platform_identifier": self.platform_identifier,
            "processor_architecture": self.processor_architecture,
            "runtime_identifier": self.runtime_identifier,
            "target_framework": self.target_framework,
            "nuget_store_folder": str(self.nuget_store_folder),
        }
