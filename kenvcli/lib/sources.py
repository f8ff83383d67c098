"""Config sources: where `kenv config init` copies profiles from.

Two source types are supported:
- local: an existing directory, used in place
- git: a remote repository, cloned into a fresh temporary directory
"""

from __future__ import annotations

import atexit
import logging
import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal, Union
from urllib.parse import quote, urlsplit, urlunsplit

from pydantic import BaseModel, Field

from .errors import SourceUnavailableError

log = logging.getLogger(__name__)

CLONE_DIR_PREFIX = "tmp-kenv-config-init"


class LocalSource(BaseModel):
    """Profiles read from an existing local directory."""

    type: Literal["local"] = "local"
    path: Path


class GitSource(BaseModel):
    """Profiles read from a directory inside a git repository."""

    type: Literal["git"] = "git"
    url: str
    subdirectory: str = "."
    username: str | None = None
    password: str | None = None

    @property
    def has_credentials(self) -> bool:
        return self.username is not None or self.password is not None


ConfigSource = Annotated[Union[LocalSource, GitSource], Field(discriminator="type")]


@dataclass
class ResolvedDirectory:
    """A source turned into a readable directory.

    `owned_root` is set when the directory lives inside a temporary clone that
    this process created; local sources are never touched.
    """

    path: Path
    owned_root: Path | None = None

    @property
    def ephemeral(self) -> bool:
        return self.owned_root is not None

    def cleanup(self) -> None:
        """Remove the temporary clone, if any."""
        if self.owned_root is not None and self.owned_root.exists():
            log.debug(f"Removing temporary clone {self.owned_root}")
            shutil.rmtree(self.owned_root, ignore_errors=True)

    def __enter__(self) -> "ResolvedDirectory":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()


def resolve(source: LocalSource | GitSource) -> ResolvedDirectory:
    """Resolve a config source into a local directory."""
    if isinstance(source, LocalSource):
        return _resolve_local(source)
    if isinstance(source, GitSource):
        return _resolve_git(source)
    raise TypeError(f"Unknown config source: {source!r}")


def _resolve_local(source: LocalSource) -> ResolvedDirectory:
    path = source.path
    if not path.exists():
        raise SourceUnavailableError(str(path), "no such directory")
    if not path.is_dir():
        raise SourceUnavailableError(str(path), "not a directory")
    if not os.access(path, os.R_OK | os.X_OK):
        raise SourceUnavailableError(str(path), "directory is not readable")
    return ResolvedDirectory(path=path)


def _resolve_git(source: GitSource) -> ResolvedDirectory:
    clone_root = Path(tempfile.mkdtemp(prefix=CLONE_DIR_PREFIX))
    atexit.register(shutil.rmtree, clone_root, ignore_errors=True)

    try:
        git_clone(source, clone_root)
    except SourceUnavailableError:
        shutil.rmtree(clone_root, ignore_errors=True)
        raise

    path = clone_root / source.subdirectory
    # The subdirectory must stay inside the clone, symlinks included
    if not path.resolve().is_relative_to(clone_root.resolve()):
        shutil.rmtree(clone_root, ignore_errors=True)
        raise SourceUnavailableError(
            describe(source), "subdirectory must be a relative path inside the repository"
        )

    return ResolvedDirectory(path=path, owned_root=clone_root)


def git_clone(source: GitSource, target: Path) -> None:
    """Full clone of the remote default branch into `target`.

    Raises:
        SourceUnavailableError: If git is missing or the clone fails
    """
    clone_url = source.url
    if source.has_credentials:
        clone_url = with_credentials(source.url, source.username, source.password)

    display_url = mask_url(source.url)
    log.info(f"Cloning {display_url} into {target}")

    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
    try:
        result = subprocess.run(
            ["git", "clone", clone_url, str(target)],
            capture_output=True,
            text=True,
            env=env,
        )
    except FileNotFoundError as e:
        raise SourceUnavailableError(display_url, "git executable not found") from e

    if result.returncode != 0:
        stderr = result.stderr.strip().replace(clone_url, display_url)
        if source.password:
            stderr = stderr.replace(source.password, "***")
        reason = f"git clone failed: {stderr or f'exit code {result.returncode}'}"
        if not source.has_credentials:
            reason += " (for private repositories, use --username and --password)"
        raise SourceUnavailableError(display_url, reason)


def with_credentials(url: str, username: str | None, password: str | None) -> str:
    """Embed username/password as userinfo in an http(s) url.

    A missing half becomes the empty string, so a token can be passed as the
    username alone. Other transports are returned unchanged.
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        log.warning(
            f"Credentials are only used for http(s) urls, ignoring them for {mask_url(url)}"
        )
        return url

    host = parts.netloc.rsplit("@", 1)[-1]
    userinfo = f"{quote(username or '', safe='')}:{quote(password or '', safe='')}"
    return urlunsplit(parts._replace(netloc=f"{userinfo}@{host}"))


def mask_url(url: str) -> str:
    """Hide userinfo in a url (`https://***@host/repo.git`)."""
    parts = urlsplit(url)
    if "@" not in parts.netloc or not parts.scheme:
        return url
    host = parts.netloc.rsplit("@", 1)[-1]
    return urlunsplit(parts._replace(netloc=f"***@{host}"))


def describe(source: LocalSource | GitSource) -> str:
    """Human readable source description for messages."""
    if isinstance(source, LocalSource):
        return str(source.path)
    return f"{mask_url(source.url)} ({source.subdirectory})"
