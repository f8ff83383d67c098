import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the user's ~/.kenv."""
    monkeypatch.setenv("KENV_HOME", str(tmp_path / "kenv-home"))
    monkeypatch.delenv("KENV_CONFIG_DIR", raising=False)
    monkeypatch.delenv("KENV_ENV", raising=False)
    monkeypatch.delenv("KENV_DEBUG", raising=False)


@pytest.fixture
def source_dir(tmp_path) -> Path:
    """Source with two profiles, a non-profile file and a nested profile."""
    src = tmp_path / "source"
    src.mkdir()
    (src / "a.yml").write_text("clusters: {}\n")
    (src / "b.yml").write_text("runners:\n  default: local\n")
    (src / "notes.txt").write_text("not a profile\n")
    nested = src / "nested"
    nested.mkdir()
    (nested / "c.yml").write_text("clusters: {}\n")
    return src


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(
        ["git", "-c", "user.name=kenv", "-c", "user.email=kenv@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """Local git repository with profiles under config/."""
    repo = tmp_path / "repo"
    (repo / "config").mkdir(parents=True)
    (repo / "config" / "common.yml").write_text("runners:\n  default: local\n")
    (repo / "config" / "prod.yml").write_text(
        "clusters:\n  main:\n    props:\n      bootstrap.servers: prod:9092\n"
    )
    (repo / "README.md").write_text("profiles\n")
    _git("init", cwd=repo)
    _git("add", ".", cwd=repo)
    _git("commit", "-m", "profiles", cwd=repo)
    return repo
