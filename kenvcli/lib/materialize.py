"""Copy profile files into the config directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .context import PROFILE_SUFFIX
from .errors import ConfigDirectoryError, DestinationExistsError, SourceNotListableError

log = logging.getLogger(__name__)


def prepare_config_dir(config_dir: Path, recreate: bool = False) -> Path:
    """Wipe `config_dir` when recreating, then make sure it exists."""
    try:
        if recreate and config_dir.exists():
            log.info(f"Deleting existing config directory: {config_dir.absolute()}")
            shutil.rmtree(config_dir)
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigDirectoryError(config_dir, e.strerror or str(e)) from e
    return config_dir


def list_profile_files(source_dir: Path) -> list[Path]:
    """Profile files directly under `source_dir`, sorted by name.

    Sub-directories are not traversed and other files are ignored.
    """
    try:
        entries = list(source_dir.iterdir())
    except OSError as e:
        raise SourceNotListableError(source_dir) from e

    return sorted(
        (p for p in entries if p.is_file() and p.name.endswith(PROFILE_SUFFIX)),
        key=lambda p: p.name,
    )


def _copy_exclusive(source: Path, target: Path) -> None:
    """Copy to a new file; a half-written target is removed on failure."""
    with open(source, "rb") as src:
        try:
            dst = open(target, "xb")
        except FileExistsError as e:
            raise DestinationExistsError(target) from e

        try:
            with dst:
                shutil.copyfileobj(src, dst)
        except OSError:
            target.unlink(missing_ok=True)
            raise


def materialize(source_dir: Path, dest_dir: Path, overwrite: bool = False) -> list[Path]:
    """Copy every profile file of `source_dir` into `dest_dir`.

    Without `overwrite` the first existing destination file aborts the whole
    operation with DestinationExistsError. Files copied before the conflict
    are left in place.

    Returns:
        Destination paths, in copy order
    """
    copied: list[Path] = []
    for source in list_profile_files(source_dir):
        target = dest_dir / source.name
        log.info(f"Copying '{source}' to '{target}'")

        if overwrite:
            shutil.copyfile(source, target)
        else:
            _copy_exclusive(source, target)

        copied.append(target)
    return copied
