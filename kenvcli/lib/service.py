"""Config service for kenvcli commands.

ConfigService owns the `config init` control flow and the list views:
1. recreate: wipe the config directory
2. make sure the config directory exists
3. with a source: resolve it and copy its profile files
   without a source: write the default profile
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .context import CLIContext
from .defaults import DefaultProfileResult, write_default_profile
from .materialize import materialize, prepare_config_dir
from .sources import GitSource, LocalSource, describe, resolve
from .views import ClusterSummary, list_clusters, list_environments, load_environment

log = logging.getLogger(__name__)


@dataclass
class InitResult:
    """What `config init` did to the config directory."""

    config_dir: Path
    copied: list[Path] = field(default_factory=list)
    default_profile: DefaultProfileResult | None = None


class ConfigService:
    """Service that orchestrates config directory operations for CLI commands."""

    def __init__(self, ctx: CLIContext) -> None:
        self.ctx = ctx

    def init(
        self,
        source: LocalSource | GitSource | None = None,
        recreate: bool = False,
        overwrite: bool = False,
    ) -> InitResult:
        """Initialize the config directory from `source` or with a default profile.

        Copies are not transactional: when a conflict aborts the copy, files
        copied before it stay in the config directory.
        """
        config_dir = prepare_config_dir(self.ctx.config_dir, recreate=recreate)
        result = InitResult(config_dir=config_dir)

        if source is None:
            result.default_profile = write_default_profile(config_dir, overwrite=overwrite)
            return result

        log.info(f"Importing config from {describe(source)}")
        with resolve(source) as resolved:
            result.copied = materialize(resolved.path, config_dir, overwrite=overwrite)
        return result

    def clusters(self) -> list[ClusterSummary]:
        """Clusters of the current environment."""
        profile = load_environment(self.ctx.config_dir, self.ctx.env)
        return list_clusters(profile)

    def environments(self) -> list[str]:
        """Environments available in the config directory."""
        return list_environments(self.ctx.config_dir)
