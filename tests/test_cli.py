"""Tests for the ts-preview developer CLI."""

import json
import logging

import pytest
from click.testing import CliRunner
from ts_preview.logging_setup import JsonlHandler
from ts_preview.main import cli
from ts_preview.settings import ENV_OVERRIDES


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "app"
    root.mkdir()
    (root / "index.ts").write_text("import { add } from './math';\nimport React from 'react';")
    (root / "math.ts").write_text("export const add = (a, b) => a + b;")
    (root / "package.json").write_text(json.dumps({"dependencies": {"react": "18.2.0"}}))
    return root


@pytest.fixture
def packages(tmp_path):
    root = tmp_path / "node_modules"
    (root / "react").mkdir(parents=True)
    (root / "react" / "package.json").write_text(json.dumps({"main": "index.js"}))
    (root / "react" / "index.js").write_text("module.exports = {};")
    return root


def _invoke(runner, tmp_path, *args):
    return runner.invoke(cli, ["--log-file", str(tmp_path / "cli.jsonl"), *args])


class TestResolveCommand:
    def test_relative(self, runner, tmp_path, project):
        result = _invoke(runner, tmp_path, "resolve", "./math", "--from", "/index.ts", "-p", str(project))

        assert result.exit_code == 0
        assert "project:/math.ts" in result.output

    def test_entry(self, runner, tmp_path, project):
        result = _invoke(runner, tmp_path, "resolve", "index.ts", "-p", str(project))

        assert result.exit_code == 0
        assert "project:/index.ts" in result.output

    def test_bare_external(self, runner, tmp_path, project):
        result = _invoke(runner, tmp_path, "resolve", "react", "-p", str(project))

        assert result.exit_code == 0
        assert "external" in result.output

    def test_bare_from_packages(self, runner, tmp_path, project, packages):
        result = _invoke(runner, tmp_path, "resolve", "react", "-p", str(project), "--packages", str(packages))

        assert result.exit_code == 0
        assert "node_modules/react/index.js" in result.output

    def test_unresolved(self, runner, tmp_path, project):
        result = _invoke(runner, tmp_path, "resolve", "./nope", "--from", "/index.ts", "-p", str(project))

        assert result.exit_code == 1
        assert "Could not resolve" in result.output


class TestGraphCommand:
    def test_graph(self, runner, tmp_path, project):
        result = _invoke(runner, tmp_path, "graph", "-p", str(project))

        assert result.exit_code == 0
        assert "/index.ts" in result.output
        assert "/math.ts" in result.output
        assert "https://esm.sh/react@18.2.0" in result.output
        assert "All imports resolved" in result.output

    def test_graph_with_errors(self, runner, tmp_path, project):
        (project / "math.ts").write_text("import './gone';")

        result = _invoke(runner, tmp_path, "graph", "-p", str(project))

        assert result.exit_code == 1
        assert "1 unresolved import" in result.output

    def test_graph_reads_project_settings(self, runner, tmp_path, project):
        """Settings come from the --project directory, not the working directory."""
        (project / ".ts-preview").mkdir()
        (project / ".ts-preview" / "settings.yaml").write_text("cdn_base: https://cdn.example\n")

        result = _invoke(runner, tmp_path, "graph", "-p", str(project))

        assert result.exit_code == 0
        assert "https://cdn.example/react@18.2.0" in result.output

    def test_graph_writes_log(self, runner, tmp_path, project):
        _invoke(runner, tmp_path, "graph", "-p", str(project))

        lines = (tmp_path / "cli.jsonl").read_text().splitlines()
        assert any("[build]" in json.loads(line)["message"] for line in lines)


class TestSettingsErrors:
    def test_bad_settings_exit_code(self, runner, tmp_path, project, monkeypatch):
        monkeypatch.setenv("TS_PREVIEW_MAX_WORKERS", "zero")

        result = _invoke(runner, tmp_path, "graph", "-p", str(project))

        assert result.exit_code == 2
