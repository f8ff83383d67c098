"""Init command for kenvcli."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from kenvcli.lib.context import CLIContext
from kenvcli.lib.errors import handle_error
from kenvcli.lib.service import ConfigService
from kenvcli.lib.sources import GitSource, LocalSource


class SourceKind(str, Enum):
    LOCAL = "local"
    GIT = "git"


def build_source(
    kind: Optional[SourceKind],
    path: Optional[Path] = None,
    url: Optional[str] = None,
    subdirectory: str = ".",
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> LocalSource | GitSource | None:
    """Turn --from and its options into a config source."""
    if kind is None:
        return None
    if kind == SourceKind.LOCAL:
        if path is None:
            raise typer.BadParameter("--path is required with --from local")
        return LocalSource(path=path)
    if url is None:
        raise typer.BadParameter("--url is required with --from git")
    return GitSource(
        url=url, subdirectory=subdirectory, username=username, password=password
    )


def init_command(
    ctx: CLIContext,
    recreate: bool = False,
    overwrite: bool = False,
    kind: Optional[SourceKind] = None,
    path: Optional[Path] = None,
    url: Optional[str] = None,
    subdirectory: str = ".",
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> None:
    """Initialize the kenv config directory."""
    source = build_source(kind, path, url, subdirectory, username, password)

    try:
        result = ConfigService(ctx).init(
            source=source, recreate=recreate, overwrite=overwrite
        )
    except Exception as e:
        handle_error(e)

    for copied in result.copied:
        typer.echo(f"copied {copied}")

    default = result.default_profile
    if default is not None:
        if default.created:
            typer.echo(f"Created config file {default.path}")
        else:
            typer.echo(
                f"Config file {default.path} already exists (use --overwrite to recreate)"
            )
    elif not result.copied:
        typer.echo(f"No profile files found in source, {result.config_dir} left as is")
