"""Environment profile schema and YAML codec.

A profile file describes one named environment:
- clusters: dict of cluster definitions
  - props: client connection properties (bootstrap.servers, serializers...)
  - topics: alias -> topic definition
  - registry: optional schema registry url
  - groups: consumer group names
- runners: which runner executes client calls, plus per-runner settings
- storage / secrets: optional sections, absent unless configured
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ProfileFormatError


class RunnerName(str, Enum):
    """Runners a profile can select as default."""

    LOCAL = "local"
    LAMBDA = "lambda"
    KUBERNETES = "kubernetes"


class TopicConfig(BaseModel):
    """A topic known under an alias."""

    name: str = Field(description="Real topic name on the cluster")
    subject: str | None = Field(
        default=None, description="Schema registry subject for the topic"
    )
    partitions: int | None = Field(default=None, description="Partition count")


class ClusterConfig(BaseModel):
    """A cluster connection definition."""

    props: dict[str, str] = Field(
        default_factory=dict, description="Client connection properties"
    )
    topics: dict[str, TopicConfig] = Field(
        default_factory=dict, description="Topic aliases"
    )
    registry: str | None = Field(default=None, description="Schema registry url")
    groups: list[str] = Field(
        default_factory=list, description="Consumer group names"
    )


class RunnersSection(BaseModel):
    """Runner selection and per-runner settings."""

    default: RunnerName = RunnerName.LOCAL
    config: dict[str, dict[str, Any]] = Field(default_factory=dict)


class EnvProfile(BaseModel):
    """Full profile of one environment (`<env>.yml`)."""

    clusters: dict[str, ClusterConfig] = Field(default_factory=dict)
    runners: RunnersSection = Field(default_factory=RunnersSection)
    storage: dict[str, Any] | None = None
    secrets: dict[str, Any] | None = None


def _prune_empty(value: Any) -> Any:
    """Recursively drop empty dicts and lists from dumped data."""
    if isinstance(value, dict):
        pruned = {k: _prune_empty(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if v not in ({}, [])}
    if isinstance(value, list):
        return [_prune_empty(v) for v in value]
    return value


def profile_to_data(profile: EnvProfile) -> dict[str, Any]:
    """Plain data for a profile with None values and empty collections omitted."""
    data = profile.model_dump(mode="json", exclude_none=True)
    return _prune_empty(data)


def dump_profile(profile: EnvProfile) -> str:
    """Serialize a profile to pretty-printed YAML."""
    return yaml.safe_dump(
        profile_to_data(profile),
        sort_keys=False,
        default_flow_style=False,
        indent=2,
    )


def save_profile(profile: EnvProfile, path: Path) -> Path:
    """Write a profile to `path`, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_profile(profile), encoding="utf-8")
    return path


def read_profile_data(path: Path) -> dict[str, Any]:
    """Load raw mapping data from a profile file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProfileFormatError(path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileFormatError(path, "top-level value must be a mapping")
    return data


def parse_profile(data: dict[str, Any], path: Path) -> EnvProfile:
    """Validate raw data into an EnvProfile, naming `path` on failure."""
    try:
        return EnvProfile.model_validate(data)
    except ValidationError as e:
        raise ProfileFormatError(path, str(e)) from e


def load_profile(path: Path) -> EnvProfile:
    """Load a single profile file."""
    return parse_profile(read_profile_data(path), path)
