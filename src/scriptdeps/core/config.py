"""scriptdeps configuration in .scriptdeps/config.yaml.

Lookup order (first existing file wins, no merging between files):
1. <project>/.scriptdeps/config.yaml
2. <user config dir>/scriptdeps/config.yaml (via platformdirs)

``SCRIPTDEPS_TFM``, ``SCRIPTDEPS_RID`` and ``SCRIPTDEPS_STORE`` override
whatever the file says.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir
from ruamel.yaml import YAML

from scriptdeps.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".scriptdeps"
CONFIG_FILENAME = "config.yaml"
DEFAULT_TARGET_FRAMEWORK = "net8.0"


@dataclass(slots=True)
class ScriptDepsConfig:
    """Settings that shape the detected environment and the resolver."""

    target_framework: str = DEFAULT_TARGET_FRAMEWORK
    runtime_identifier: str | None = None
    platform: str | None = None
    architecture: str | None = None
    store_folder: Path | None = None
    package_sources: list[str] = field(default_factory=list)
    max_workers: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "ScriptDepsConfig":
        if not isinstance(data, dict):
            return cls()

        sources = data.get("package_sources", [])
        if isinstance(sources, str):
            sources = [sources]
        if not isinstance(sources, list):
            raise ConfigError("Invalid package_sources in config.yaml: expected a list of URIs")

        workers = data.get("max_workers", 1)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError("Invalid max_workers in config.yaml: expected a positive integer")

        store = _optional_str(data.get("store_folder"))
        return cls(
            target_framework=_optional_str(data.get("target_framework")) or DEFAULT_TARGET_FRAMEWORK,
            runtime_identifier=_optional_str(data.get("runtime_identifier")),
            platform=_optional_str(data.get("platform")),
            architecture=_optional_str(data.get("architecture")),
            store_folder=Path(store).expanduser() if store else None,
            package_sources=[str(source) for source in sources],
            max_workers=workers,
        )

    def with_env_overrides(self) -> "ScriptDepsConfig":
        if tfm := os.environ.get("SCRIPTDEPS_TFM"):
            self.target_framework = tfm
        if rid := os.environ.get("SCRIPTDEPS_RID"):
            self.runtime_identifier = rid
        if store := os.environ.get("SCRIPTDEPS_STORE"):
            self.store_folder = Path(store).expanduser()
        return self


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def user_config_path() -> Path:
    return Path(user_config_dir("scriptdeps")) / CONFIG_FILENAME


def config_candidates(project_dir: Path | None) -> list[Path]:
    candidates: list[Path] = []
    if project_dir is not None:
        candidates.append(project_dir / CONFIG_DIRNAME / CONFIG_FILENAME)
    candidates.append(user_config_path())
    return candidates


def load_config(project_dir: Path | None = None) -> ScriptDepsConfig:
    """Load the first config file found, with environment overrides applied."""
    for config_path in config_candidates(project_dir):
        if not config_path.is_file():
            continue
        yaml = YAML(typ="safe")
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
        except Exception as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Invalid config in {config_path}: root must be a mapping")
        logger.debug("Loaded scriptdeps config from %s", config_path)
        return ScriptDepsConfig.from_dict(payload).with_env_overrides()

    return ScriptDepsConfig().with_env_overrides()
