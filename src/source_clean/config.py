# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Configuration loading for source-clean.

Search order:
1. Explicit path (--config)
2. $SOURCE_CLEAN_CONFIG
3. ./source-clean.yaml
4. ~/.source-clean/config.yaml

$SOURCE_CLEAN_MODE overrides the configured verbosity mode.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from source_clean.errors import InvalidModeError, SourceCleanError
from source_clean.modes import VerbosityMode


class ConfigError(SourceCleanError):
    """Raised when a configuration file cannot be used."""

    pass


@dataclass
class RunnerConfig:
    """Settings shared by every run in a session."""

    mode: VerbosityMode = VerbosityMode.MINIMAL
    notify_on_success: bool = False
    notify_on_error: bool = False
    scripts_dir: Optional[Path] = None
    scripts: List[str] = field(default_factory=list)
    events_log: Optional[Path] = None
    source: Optional[Path] = None  # file this config was read from

    def resolve(self, script: Union[str, Path]) -> Path:
        """Place a relative script reference under scripts_dir, if one is set."""
        path = Path(script).expanduser()
        if self.scripts_dir is not None and not path.is_absolute():
            return self.scripts_dir / path
        return path

    def script_paths(self) -> List[Path]:
        return [self.resolve(script) for script in self.scripts]


def _default_paths() -> List[Path]:
    paths = []
    env_path = os.environ.get("SOURCE_CLEAN_CONFIG")
    if env_path:
        paths.append(Path(env_path).expanduser())
    paths.append(Path("./source-clean.yaml"))
    paths.append(Path("~/.source-clean/config.yaml").expanduser())
    return paths


def _as_bool(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got: {value!r}")
    return value


def load_config(config_path: Optional[Union[str, Path]] = None) -> RunnerConfig:
    """Load runner configuration.

    Args:
        config_path: Explicit config file. Must exist if given.

    Returns:
        RunnerConfig; defaults when no config file is found.

    Raises:
        FileNotFoundError: If config_path is given and missing.
        ConfigError: If the file is not a valid configuration.
    """
    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = next((p for p in _default_paths() if p.exists()), None)

    data: Dict[str, Any] = {}
    if path is not None:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"config file {path} must contain a YAML mapping")

    mode_value = os.environ.get("SOURCE_CLEAN_MODE") or data.get("mode", "minimal")
    try:
        mode = VerbosityMode.parse(mode_value)
    except InvalidModeError as e:
        raise ConfigError(str(e))

    scripts = data.get("scripts") or []
    if not isinstance(scripts, list) or not all(isinstance(s, str) for s in scripts):
        raise ConfigError("scripts must be a list of paths")

    base = path.parent if path is not None else Path(".")
    scripts_dir = data.get("scripts_dir")
    events_log = data.get("events_log")

    return RunnerConfig(
        mode=mode,
        notify_on_success=_as_bool(data, "notify_on_success"),
        notify_on_error=_as_bool(data, "notify_on_error"),
        scripts_dir=(base / Path(scripts_dir).expanduser()) if scripts_dir else None,
        scripts=scripts,
        events_log=(base / Path(events_log).expanduser()) if events_log else None,
        source=path,
    )
