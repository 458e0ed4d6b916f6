# runner.py
from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Set

from .ci import github, gitlab
from .ci.base import TaskList
from .ci.errors import ParseError, ScanError
from .config import Config
from .model import Task, Trigger
from .selector import runnable_tasks
from .ui.console import get_console

# local dev ---> belay (pre-commit / pre-push) ---> push ---> CI

GITHUB_WORKFLOWS_DIR = Path(".github") / "workflows"
GITHUB_WORKFLOW_SUFFIXES = (".yml", ".yaml")
GITLAB_CI_FILES = (".gitlab-ci.yml", ".gitlab-ci.yaml")


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class NoCiConfigurationFound(Exception):
    """Neither a usable GitHub workflow nor a usable GitLab file exists."""
    reasons: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return "Unable to find CI configuration"


@dataclass
class TaskFailed(Exception):
    name: str
    command: str
    exit_code: int

    def __str__(self) -> str:
        return f"'{self.name}' failed (exit={self.exit_code}): {self.command}"


@dataclass
class ShellSpawnError(Exception):
    """The shell itself could not be started (not the command failing)."""
    command: str
    reason: str

    def __str__(self) -> str:
        return f"could not start a shell for {self.command!r}: {self.reason}"


# ----------------------------------------------------------------------
# CI config discovery
# ----------------------------------------------------------------------

def find_github_workflows(root: str | Path) -> List[Path]:
    """Workflow files under .github/workflows, sorted by filename."""
    workflows_dir = Path(root) / GITHUB_WORKFLOWS_DIR
    if not workflows_dir.is_dir():
        return []
    return sorted(
        (p for p in workflows_dir.iterdir() if p.is_file() and p.suffix in GITHUB_WORKFLOW_SUFFIXES),
        key=lambda p: p.name,
    )


def find_gitlab_ci(root: str | Path) -> Path | None:
    for name in GITLAB_CI_FILES:
        path = Path(root) / name
        if path.is_file():
            return path
    return None


def _read_ci_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScanError(message=f"not valid UTF-8: {e}", source=str(path)) from e


def load_github_configs(paths: Sequence[Path]) -> List[github.GitHubCiConfig]:
    """Parse every workflow; any failure fails the whole GitHub side."""
    return [github.parse(_read_ci_file(p), source=str(p)) for p in paths]


def load_gitlab_config(path: Path) -> gitlab.GitLabCiConfig:
    return gitlab.parse(_read_ci_file(path), source=str(path))


def discover_ci_configs(root: str | Path) -> List[TaskList]:
    """
    Find and parse the repository's CI configuration.

    GitHub workflows win when present and parseable; otherwise the GitLab
    file is used.

    Raises:
        NoCiConfigurationFound: both providers failed (reasons attached)
    """
    console = get_console()
    reasons: List[str] = []

    workflows = find_github_workflows(root)
    if workflows:
        try:
            configs = load_github_configs(workflows)
            console.print_debug(f"Using GitHub workflows: {', '.join(p.name for p in workflows)}")
            return list(configs)
        except (ParseError, OSError) as e:
            reasons.append(f"GitHub: {e}")
    else:
        reasons.append(f"GitHub: no workflow files in {GITHUB_WORKFLOWS_DIR.as_posix()}")

    gitlab_path = find_gitlab_ci(root)
    if gitlab_path is not None:
        try:
            config = load_gitlab_config(gitlab_path)
            console.print_debug(f"Using GitLab CI file: {gitlab_path.name}")
            return [config]
        except (ParseError, OSError) as e:
            reasons.append(f"GitLab: {e}")
    else:
        reasons.append(f"GitLab: no {GITLAB_CI_FILES[0]} file")

    raise NoCiConfigurationFound(reasons=reasons)


# ----------------------------------------------------------------------
# Planning
# ----------------------------------------------------------------------

def plan_tasks(
    ci_configs: Iterable[TaskList],
    config: Config,
    triggers: Sequence[Trigger],
) -> List[Task]:
    """
    Runnable tasks of every config, in config order.

    A command that already appeared (in any config) is not repeated; the
    task name plays no part in this.
    """
    seen: Set[str] = set()
    plan: List[Task] = []
    for ci_config in ci_configs:
        for task in runnable_tasks(ci_config, config, triggers):
            if task.command in seen:
                continue
            seen.add(task.command)
            plan.append(task)
    return plan


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------

def _run_task(task: Task, cwd: Path) -> None:
    # output goes straight to the terminal
    try:
        proc = subprocess.run(task.command, shell=True, cwd=str(cwd))
    except OSError as e:
        raise ShellSpawnError(command=task.command, reason=str(e)) from e

    if proc.returncode != 0:
        raise TaskFailed(name=task.display_name, command=task.command, exit_code=proc.returncode)


def run_tasks(tasks: Iterable[Task], cwd: str | Path = ".") -> int:
    """
    Run tasks one after another, stopping at the first failure.

    Returns:
        number of tasks run
    Raises:
        TaskFailed, ShellSpawnError
    """
    console = get_console()
    cwd_p = Path(cwd).resolve()

    count = 0
    for task in tasks:
        console.print_checking(task.display_name)
        _run_task(task, cwd_p)
        console.print_success()
        count += 1
    return count


def run_checks(
    root: str | Path,
    config: Config,
    triggers: Sequence[Trigger],
    ci_configs: Sequence[TaskList] | None = None,
) -> int:
    """
    Discover (unless `ci_configs` is given), plan and run.

    Returns number of tasks run.
    """
    if ci_configs is None:
        ci_configs = discover_ci_configs(root)
    return run_tasks(plan_tasks(ci_configs, config, triggers), cwd=root)
