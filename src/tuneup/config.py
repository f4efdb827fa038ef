# Copyright (c) Syntropy Systems
"""Configuration management for tuneup."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml

from tuneup.artifacts import MAXFILES_PLIST_PATH, SYSCTL_PATH

CONFIG_ENV_VAR = "TUNEUP_CONFIG"


@dataclass
class TuneupConfig:
    """Configuration for tuneup."""

    # Where the boot-time kernel parameters are written
    sysctl_path: Path = field(default_factory=lambda: SYSCTL_PATH)

    # Where the file descriptor limit launch daemon is written
    maxfiles_plist_path: Path = field(default_factory=lambda: MAXFILES_PLIST_PATH)

    # Log how many tunables could not be applied at the end of a run
    report_soft_failures: bool = False


def get_global_config_dir() -> Path:
    """Get the global tuneup config directory (~/.tuneup)."""
    return Path.home() / ".tuneup"


def find_config_file(path: Path | None = None) -> Path | None:
    """Locate the config file to use, if any.

    Looks for config in:
    1. Provided path
    2. $TUNEUP_CONFIG
    3. ~/.tuneup/config.yaml
    """
    if path is not None:
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    global_config = get_global_config_dir() / "config.yaml"
    if global_config.exists():
        return global_config

    return None


def load_config(path: Path | None = None) -> TuneupConfig:
    """Load configuration from YAML or fall back to defaults."""
    config = TuneupConfig()

    config_path = find_config_file(path)
    if config_path is None or not config_path.exists():
        return config

    with config_path.open() as f:
        loaded = cast("object", yaml.safe_load(f))

    if not isinstance(loaded, dict):
        return config
    data = cast("dict[str, object]", loaded)

    sysctl_path = data.get("sysctl_path")
    if isinstance(sysctl_path, str) and sysctl_path:
        config.sysctl_path = Path(sysctl_path)
    maxfiles_plist_path = data.get("maxfiles_plist_path")
    if isinstance(maxfiles_plist_path, str) and maxfiles_plist_path:
        config.maxfiles_plist_path = Path(maxfiles_plist_path)
    report_soft_failures = data.get("report_soft_failures")
    if isinstance(report_soft_failures, bool):
        config.report_soft_failures = report_soft_failures

    return config
