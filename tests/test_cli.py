from __future__ import annotations

import pytest
from click.testing import CliRunner

from belay.cli import cli
from belay.git_facts.git import NotAGitRepository
from belay.model import PushTrigger
from conftest import write_gitlab, write_workflow

PASSING = """
name: CI
on: [push]
jobs:
  build:
    steps:
      - uses: actions/checkout@v4
      - name: Say hello
        run: exit 0
"""

FAILING = """
name: CI
on: [push]
jobs:
  build:
    steps:
      - name: Say hello
        run: exit 0
      - name: tough test
        run: exit 1
      - name: after
        run: exit 0
"""


@pytest.fixture()
def in_repo(repo, monkeypatch, tmp_path_factory):
    config_path = tmp_path_factory.mktemp("cfg") / "config.yml"
    monkeypatch.setattr("belay.cli.repo_root", lambda: repo)
    monkeypatch.setattr("belay.cli.get_triggers", lambda cwd=None: [PushTrigger("main")])
    monkeypatch.setenv("BELAY_CONFIG", str(config_path))
    return repo


def test_not_a_git_repository(monkeypatch) -> None:
    def _no_repo():
        raise NotAGitRepository("/tmp")

    monkeypatch.setattr("belay.cli.repo_root", _no_repo)

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 1
    assert "Failed to find git root" in result.output


def test_no_ci_configuration(in_repo) -> None:
    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 1
    assert "Unable to find CI configuration" in result.output
    assert "Checking" not in result.output


def test_bare_invocation_runs_github_checks(in_repo) -> None:
    write_workflow(in_repo, "ci.yml", PASSING)

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0, result.output
    assert result.output == "Checking 'Say hello':\nSuccess!\n"


def test_run_gitlab_checks(in_repo) -> None:
    write_gitlab(in_repo, "test:\n  script:\n    - exit 0\n    - rustup component add clippy\n")

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 0, result.output
    assert result.output == "Checking 'exit 0':\nSuccess!\n"


def test_failing_task_stops_the_run(in_repo) -> None:
    write_workflow(in_repo, "ci.yml", FAILING)

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "Checking 'Say hello':\nSuccess!\nChecking 'tough test':\n" in result.output
    assert "Error: Failed" in result.output
    assert "Checking 'after'" not in result.output


def test_dry_run_prints_plan_and_runs_nothing(in_repo, monkeypatch) -> None:
    monkeypatch.setattr("belay.runner.subprocess.run", lambda *a, **kw: pytest.fail("nothing should run"))
    write_workflow(
        in_repo,
        "ci.yml",
        "name: CI\non: [push]\njobs:\n  b:\n    steps:\n      - run: make\n      - run: sudo apt install x\n",
    )

    result = CliRunner().invoke(cli, ["run", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "ci.yml" in result.output
    assert "✓ make (selected)" in result.output
    assert "⏭ sudo apt install x (blacklisted: 'apt install')" in result.output
    assert "1 task(s) would run" in result.output


def test_custom_config_blacklist(in_repo, tmp_path) -> None:
    config_path = tmp_path / "custom.yml"
    config_path.write_text("command_blacklist: ['exit 1']\n")
    write_workflow(in_repo, "ci.yml", FAILING)

    result = CliRunner().invoke(cli, ["--config", str(config_path), "run"])

    assert result.exit_code == 0, result.output
    assert "tough test" not in result.output


def test_invalid_config(in_repo, tmp_path) -> None:
    config_path = tmp_path / "custom.yml"
    config_path.write_text("command_blacklist: nope\n")
    write_workflow(in_repo, "ci.yml", PASSING)

    result = CliRunner().invoke(cli, ["--config", str(config_path)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


@pytest.mark.parametrize("hook_type, filename", [("push", "pre-push"), ("commit", "pre-commit")])
def test_hook_command(in_repo, hook_type, filename) -> None:
    result = CliRunner().invoke(cli, ["hook", hook_type])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == f"Created hook `.git/hooks/{filename}`"
    assert (in_repo / ".git" / "hooks" / filename).exists()


def test_hook_rejects_unknown_type(in_repo) -> None:
    result = CliRunner().invoke(cli, ["hook", "merge"])

    assert result.exit_code == 2


def test_config_command_shows_blacklist(in_repo, tmp_path) -> None:
    config_path = tmp_path / "shown.yml"

    result = CliRunner().invoke(cli, ["--config", str(config_path), "config"])

    assert result.exit_code == 0, result.output
    assert f"Config file: {config_path}" in result.output
    assert "  rustup component add" in result.output
    assert config_path.exists()


def test_run_hands_discovered_configs_to_run_checks(in_repo, monkeypatch) -> None:
    write_workflow(in_repo, "ci.yml", PASSING)
    calls = []

    def _run_checks(root, config, triggers, ci_configs=None):
        calls.append((root, [t.command for c in ci_configs for t in c.all_tasks()]))
        return 1

    monkeypatch.setattr("belay.cli.run_checks", _run_checks)

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 0
    assert calls == [(in_repo, ["exit 0"])]


def test_undecodable_workflow_runs_gitlab_instead(in_repo) -> None:
    write_workflow(in_repo, "ci.yml", "").write_bytes(b"name: CI\n\xff\xfe\n")
    write_gitlab(in_repo, "build:\n  script:\n    - exit 0\n")

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0
    assert "Checking 'exit 0':" in result.output
