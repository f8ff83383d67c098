"""Shared error handling for kenvcli."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer

log = logging.getLogger(__name__)


class KenvError(Exception):
    """Base exception for kenv operations."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class SourceUnavailableError(KenvError):
    """Raised when a config source cannot be turned into a local directory."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"config source is unavailable : {source} ({reason})")


class SourceNotListableError(KenvError):
    """Raised when the resolved source directory cannot be listed."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"provided source is not listable : {path}")


class DestinationExistsError(KenvError):
    """Raised when a copy would replace an existing file without --overwrite."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"file already exists : {path} (use --overwrite)")


class ConfigDirectoryError(KenvError):
    """Raised when the config directory cannot be created or deleted."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"unable to prepare config directory {path}: {reason}")


class EnvironmentNotFoundError(KenvError):
    """Raised when no profile file exists for the requested environment."""

    def __init__(self, env: str, config_dir: Path) -> None:
        self.env = env
        self.config_dir = config_dir
        super().__init__(
            f"environment '{env}' not found in {config_dir} "
            "(run 'kenv config init' or pick another --env)"
        )


class ProfileFormatError(KenvError):
    """Raised when a profile file is not valid YAML or has an invalid shape."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"invalid profile file {path}: {reason}")


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Print `Error: <message>` on stderr and exit with `exit_code`."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def describe_error(error: Exception) -> tuple[str, int]:
    """User facing message and exit code for an error raised by a command."""
    if isinstance(error, KenvError):
        return error.message, error.exit_code
    if isinstance(error, OSError) and error.filename is not None:
        return f"{error.strerror or error}: {error.filename}", 1
    return f"unexpected error: {error}", 1


def handle_error(error: Exception) -> NoReturn:
    """Exit on any error raised by a command; tracebacks only at debug level."""
    if not isinstance(error, KenvError):
        log.debug("Command failed", exc_info=error)
    exit_with_error(*describe_error(error))
