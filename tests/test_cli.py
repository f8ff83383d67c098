"""End-to-end tests for the kenv CLI."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from kenvcli import __version__
from kenvcli.main import typer_app

runner = CliRunner()


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"


def kenv(config_dir, *args):
    return runner.invoke(typer_app, ["--config-dir", str(config_dir), *args])


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_default_profile(config_dir):
    result = kenv(config_dir, "config", "init")

    assert result.exit_code == 0, result.output
    assert "Created config file" in result.output
    data = yaml.safe_load((config_dir / "default.yml").read_text())
    assert data["runners"] == {"default": "local"}


def test_init_default_profile_twice(config_dir):
    kenv(config_dir, "config", "init")
    result = kenv(config_dir, "config", "init")

    assert result.exit_code == 0
    assert "already exists" in result.output


def test_init_from_local(config_dir, source_dir):
    result = kenv(config_dir, "config", "init", "--from", "local", "--path", str(source_dir))

    assert result.exit_code == 0, result.output
    assert str(config_dir / "a.yml") in result.output
    assert sorted(p.name for p in config_dir.iterdir()) == ["a.yml", "b.yml"]


def test_init_from_local_conflict_exits_non_zero(config_dir, source_dir):
    args = ["config", "init", "--from", "local", "--path", str(source_dir)]
    kenv(config_dir, *args)

    result = kenv(config_dir, *args)

    assert result.exit_code == 1
    assert "Error: file already exists" in result.output
    assert "--overwrite" in result.output

    result = kenv(config_dir, *args, "--overwrite")
    assert result.exit_code == 0, result.output


def test_init_recreate(config_dir, source_dir):
    config_dir.mkdir()
    (config_dir / "old.yml").write_text("clusters: {}\n")

    result = kenv(
        config_dir, "config", "init", "--recreate", "--from", "local", "--path", str(source_dir)
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in config_dir.iterdir()) == ["a.yml", "b.yml"]


def test_init_from_local_requires_path(config_dir):
    result = kenv(config_dir, "config", "init", "--from", "local")
    assert result.exit_code == 2


def test_init_from_git_requires_url(config_dir):
    result = kenv(config_dir, "config", "init", "--from", "git")
    assert result.exit_code == 2


def test_init_from_missing_local_path(config_dir, tmp_path):
    result = kenv(config_dir, "config", "init", "--from", "local", "--path", str(tmp_path / "nope"))
    assert result.exit_code != 0


def test_environments_list(config_dir):
    config_dir.mkdir()
    for name in ("common.yml", "prod.yml", "staging.yml"):
        (config_dir / name).write_text("clusters: {}\n")

    result = kenv(config_dir, "config", "environments", "list")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == ["prod", "staging"]


def test_environments_list_yaml(config_dir):
    config_dir.mkdir()
    (config_dir / "prod.yml").write_text("clusters: {}\n")

    result = kenv(config_dir, "-o", "yaml", "config", "environments", "list")

    assert yaml.safe_load(result.output) == ["prod"]


def test_clusters_list(config_dir):
    kenv(config_dir, "config", "init")

    result = kenv(config_dir, "config", "clusters", "list")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [
        {
            "cluster": "local",
            "brokers": "localhost:29092",
            "registry": None,
            "topics": [{"alias": "input", "name": "input-topic"}],
            "groups": [],
        }
    ]


def test_clusters_list_table(config_dir):
    kenv(config_dir, "config", "init")

    result = kenv(config_dir, "-o", "table", "config", "clusters", "list")

    assert result.exit_code == 0, result.output
    assert "local" in result.output
    assert "localhost:29092" in result.output


def test_clusters_list_unknown_env(config_dir):
    kenv(config_dir, "config", "init")

    result = kenv(config_dir, "--env", "prod", "config", "clusters", "list")

    assert result.exit_code == 1
    assert "Error: environment 'prod' not found" in result.output
