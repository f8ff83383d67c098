"""Read-only views over the config directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .context import COMMON_ENV, PROFILE_SUFFIX
from .errors import EnvironmentNotFoundError
from .profile import EnvProfile, parse_profile, read_profile_data

log = logging.getLogger(__name__)


class TopicAlias(BaseModel):
    alias: str
    name: str


class ClusterSummary(BaseModel):
    """One row of `kenv config clusters list`."""

    cluster: str
    brokers: str | None = None
    registry: str | None = None
    topics: list[TopicAlias] = []
    groups: list[str] = []


def deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge `overrides` into a copy of `base`; nested mappings merge, the rest replaces."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_environment(config_dir: Path, env: str) -> EnvProfile:
    """Load `<env>.yml` layered over the optional `common.yml`."""
    env_file = config_dir / f"{env}{PROFILE_SUFFIX}"
    if not env_file.is_file():
        raise EnvironmentNotFoundError(env, config_dir)

    data: dict[str, Any] = {}
    common_file = config_dir / f"{COMMON_ENV}{PROFILE_SUFFIX}"
    if env != COMMON_ENV and common_file.is_file():
        log.debug(f"Loading common settings from {common_file}")
        data = read_profile_data(common_file)

    log.debug(f"Loading environment '{env}' from {env_file}")
    data = deep_merge(data, read_profile_data(env_file))
    return parse_profile(data, env_file)


def list_clusters(profile: EnvProfile) -> list[ClusterSummary]:
    """Summarize every cluster of a loaded environment."""
    return [
        ClusterSummary(
            cluster=name,
            brokers=cluster.props.get("bootstrap.servers"),
            registry=cluster.registry,
            topics=[
                TopicAlias(alias=alias, name=topic.name)
                for alias, topic in cluster.topics.items()
            ],
            groups=list(cluster.groups),
        )
        for name, cluster in profile.clusters.items()
    ]


def list_environments(config_dir: Path) -> list[str]:
    """Environment names found in `config_dir`, without the common one."""
    if not config_dir.is_dir():
        return []

    names = {
        entry.stem for entry in config_dir.iterdir() if not entry.name.startswith(".")
    }
    names.discard(COMMON_ENV)
    return sorted(names)
