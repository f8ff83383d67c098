"""Default profile created by `kenv config init` when no source is given."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from .context import DEFAULT_ENV, PROFILE_SUFFIX
from .profile import (
    ClusterConfig,
    EnvProfile,
    RunnerName,
    RunnersSection,
    TopicConfig,
    save_profile,
)

log = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = f"{DEFAULT_ENV}{PROFILE_SUFFIX}"

STRING_DESERIALIZER = "org.apache.kafka.common.serialization.StringDeserializer"
STRING_SERIALIZER = "org.apache.kafka.common.serialization.StringSerializer"
BYTE_ARRAY_SERIALIZER = "org.apache.kafka.common.serialization.ByteArraySerializer"


class DefaultProfileResult(NamedTuple):
    """Outcome of writing the default profile."""

    path: Path
    created: bool


def synthesize_default_profile() -> EnvProfile:
    """Profile pointing at a broker on localhost with one aliased topic."""
    return EnvProfile(
        clusters={
            "local": ClusterConfig(
                props={
                    "bootstrap.servers": "localhost:29092",
                    "key.deserializer": STRING_DESERIALIZER,
                    "value.deserializer": STRING_DESERIALIZER,
                    "key.serializer": STRING_SERIALIZER,
                    "value.serializer": BYTE_ARRAY_SERIALIZER,
                },
                topics={"input": TopicConfig(name="input-topic")},
                registry=None,
            )
        },
        runners=RunnersSection(default=RunnerName.LOCAL),
        storage=None,
        secrets=None,
    )


def write_default_profile(config_dir: Path, overwrite: bool = False) -> DefaultProfileResult:
    """Write the default profile into `config_dir`.

    An existing file is left untouched unless `overwrite` is set.
    """
    target = config_dir / DEFAULT_PROFILE_NAME

    if target.exists() and not overwrite:
        log.info(f"Config file '{target.absolute()}' already exists (--overwrite to recreate)")
        return DefaultProfileResult(path=target, created=False)

    log.info(f"Creating a new config file: {target}")
    save_profile(synthesize_default_profile(), target)
    return DefaultProfileResult(path=target, created=True)
