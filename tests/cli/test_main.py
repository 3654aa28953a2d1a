"""CLI command tests using Click CliRunner against a temporary database."""

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

import store.schema
from cli.main import cli
from store import skills as skill_store
from store.users import get_or_create_user


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    # The CLI repoints the default database; restore it after each test
    monkeypatch.setattr(store.schema, "_DEFAULT_DB_PATH", store.schema._DEFAULT_DB_PATH)
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "paths": {"db_path": str(tmp_path / "cli.db")},
                "llm": {"api_key": "sk-secret-value-123456"},
            }
        )
    )
    return path


@pytest.fixture
def ready_db(runner, config_file, tmp_path):
    result = runner.invoke(cli, ["--config", str(config_file), "init-db"])
    assert result.exit_code == 0, result.output
    return tmp_path / "cli.db"


class TestInitDb:
    def test_creates_and_seeds(self, runner, config_file, tmp_path):
        result = runner.invoke(cli, ["--config", str(config_file), "init-db"])
        assert result.exit_code == 0, result.output
        assert "Database ready" in result.output
        assert (tmp_path / "cli.db").exists()

    def test_bad_config_exits(self, runner, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("llm: {provider: claude}")
        result = runner.invoke(cli, ["--config", str(bad), "init-db"])
        assert result.exit_code == 1
        assert "Config error" in result.output


class TestRoles:
    def test_lists_filtered_roles(self, runner, config_file, ready_db):
        result = runner.invoke(cli, ["--config", str(config_file), "roles", "--industry", "finance"])
        assert result.exit_code == 0, result.output
        assert "Financial" in result.output
        assert "Scrum" not in result.output

    def test_empty_catalog(self, runner, config_file, ready_db):
        result = runner.invoke(cli, ["--config", str(config_file), "roles", "--industry", "space"])
        assert "No roles found" in result.output


class TestGaps:
    def test_explicit_role(self, runner, config_file, ready_db):
        get_or_create_user("u1", db_path=ready_db)
        skill_store.upsert_user_skill("u1", "Coaching", 80, 100, db_path=ready_db)
        result = runner.invoke(cli, ["--config", str(config_file), "gaps", "u1", "--role", "Scrum Master"])
        assert result.exit_code == 0, result.output
        assert "missing" in result.output
        assert "strong" in result.output
        assert "5 required skills" in result.output

    def test_unknown_role(self, runner, config_file, ready_db):
        result = runner.invoke(cli, ["--config", str(config_file), "gaps", "u1", "--role", "Astronaut"])
        assert result.exit_code == 1
        assert "Unknown role" in result.output

    def test_no_target_role(self, runner, config_file, ready_db):
        result = runner.invoke(cli, ["--config", str(config_file), "gaps", "u1"])
        assert result.exit_code == 0
        assert "No target role set" in result.output


class TestShowConfig:
    def test_masks_api_key(self, runner, config_file):
        result = runner.invoke(cli, ["--config", str(config_file), "config"])
        assert result.exit_code == 0, result.output
        assert "sk-secret-value-123456" not in result.output
        assert "***" in result.output


class TestServe:
    def test_runs_uvicorn_with_config_defaults(self, runner, config_file):
        with patch("uvicorn.run") as run:
            result = runner.invoke(cli, ["--config", str(config_file), "serve", "--port", "9001"])
        assert result.exit_code == 0, result.output
        args, kwargs = run.call_args
        assert args == ("web.app:app",)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9001
        assert kwargs["reload"] is False
