"""Kenv CLI Main Entry Point

Kenv - Kafka environment profiles
Bootstraps and inspects the config directory holding one profile per
environment.

Usage:
    kenv config init                                  # write a default profile
    kenv config init --from local --path DIR          # copy profiles from DIR
    kenv config init --from git --url URL --dir DIR   # copy profiles from a repo
    kenv config clusters list                         # clusters of --env
    kenv config environments list                     # available environments
    kenv -v                                           # verbose logging
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import clusters_list_command, environments_list_command, init_command
from .commands.init import SourceKind
from .commands.utils import setup_logging
from .lib.context import CLIContext, OutputFormat, resolve_config_dir, resolve_env_name

INIT_EPILOG = """Examples:

\b
  Init config with a default configuration file:
  > kenv config init

\b
  Load config from a local directory:
  > kenv config init --from local --path /path/to/existing/config

\b
  Load config from a git repository:
  > kenv config init --from git --url 'https://github.com/example/config.git' --dir env/config

\b
  Load config from a git repository with authentication (a token can be the username):
  > kenv config init --from git --url 'https://git.example.com/team/config.git' -u user --password pass
"""

typer_app = typer.Typer(no_args_is_help=True)
config_app = typer.Typer(help="Initialize and inspect kenv config", no_args_is_help=True)
clusters_app = typer.Typer(help="Clusters of the current environment", no_args_is_help=True)
environments_app = typer.Typer(help="Environments of the config directory", no_args_is_help=True)

typer_app.add_typer(config_app, name="config")
config_app.add_typer(clusters_app, name="clusters")
config_app.add_typer(environments_app, name="environments")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"kenv {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Config directory (default: $KENV_CONFIG_DIR or ~/.kenv/config).",
    ),
    env: Optional[str] = typer.Option(
        None, "-e", "--env", help="Environment to use (default: $KENV_ENV or 'default')."
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.JSON, "-o", "--output", help="Output format of list commands."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Manage Kafka environment profiles."""
    setup_logging(verbose)
    ctx.obj = CLIContext(
        config_dir=resolve_config_dir(config_dir),
        env=resolve_env_name(env),
        output=output,
        verbose=verbose,
    )


@config_app.command("init", epilog=INIT_EPILOG)
def config_init(
    ctx: typer.Context,
    recreate: bool = typer.Option(
        False, "--recreate", help="Recreate the configuration folder from scratch."
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Overwrite existing configuration files."
    ),
    kind: Optional[SourceKind] = typer.Option(
        None, "--from", help="Import from an existing configuration folder."
    ),
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="[local] Directory holding the profiles.",
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="[git] Remote url of the repository."
    ),
    subdirectory: str = typer.Option(
        ".", "--dir", help="[git] Path to the config inside the repository."
    ),
    username: Optional[str] = typer.Option(None, "-u", "--username", help="[git] Username or token."),
    password: Optional[str] = typer.Option(None, "--password", help="[git] Password."),
) -> None:
    """Initialize kenv config."""
    init_command(
        ctx.obj,
        recreate=recreate,
        overwrite=overwrite,
        kind=kind,
        path=path,
        url=url,
        subdirectory=subdirectory,
        username=username,
        password=password,
    )


@clusters_app.command("list")
def clusters_list(ctx: typer.Context) -> None:
    """List configured clusters."""
    clusters_list_command(ctx.obj)


@environments_app.command("list")
def environments_list(ctx: typer.Context) -> None:
    """List available environments."""
    environments_list_command(ctx.obj)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()
