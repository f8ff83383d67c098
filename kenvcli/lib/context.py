"""CLI runtime context and config directory resolution."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

log = logging.getLogger(__name__)

COMMON_ENV = "common"
DEFAULT_ENV = "default"
PROFILE_SUFFIX = ".yml"


class OutputFormat(str, Enum):
    """Rendering of list command results."""

    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


def resolve_kenv_home() -> Path:
    """KENV_HOME or ~/.kenv"""
    env_home = os.environ.get("KENV_HOME")
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".kenv"


def resolve_config_dir(override: str | Path | None = None) -> Path:
    """
    Resolve the config directory.

    Priority:
    1. Explicit override (--config-dir)
    2. KENV_CONFIG_DIR environment variable
    3. $KENV_HOME/config
    4. ~/.kenv/config (default)
    """
    if override:
        root = Path(override).expanduser()
        log.debug(f"Using config dir override: {root}")
        return root

    env_dir = os.environ.get("KENV_CONFIG_DIR")
    if env_dir:
        root = Path(env_dir).expanduser()
        log.debug(f"Using KENV_CONFIG_DIR from env: {root}")
        return root

    root = resolve_kenv_home() / "config"
    log.debug(f"Using default config dir: {root}")
    return root


def resolve_env_name(override: str | None = None) -> str:
    """Explicit name, then KENV_ENV, then 'default'."""
    return override or os.environ.get("KENV_ENV") or DEFAULT_ENV


@dataclass
class CLIContext:
    """Runtime context from CLI flags/environment."""

    config_dir: Path = field(default_factory=resolve_config_dir)
    env: str = field(default_factory=resolve_env_name)
    output: OutputFormat = OutputFormat.JSON
    verbose: bool = False
