# git.py
# Small, focused wrapper around the Git CLI.
# The rest of the codebase never calls subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..model import PullRequestTrigger, PushTrigger, Trigger

# Branch used when HEAD does not resolve yet (fresh repo, no commits).
FALLBACK_BRANCH = "master"

# Remote whose presence suggests this push will become a pull request.
UPSTREAM_REMOTE = "upstream"


@dataclass
class NotAGitRepository(Exception):
    path: str

    def __str__(self) -> str:
        return "Failed to find git root"


def _git(args: list[str], cwd: Optional[str | Path] = None) -> str:
    """
    Execute a git command and return its stdout, stripped.

    Raises CalledProcessError on a non-zero exit and FileNotFoundError when
    git is not installed.
    """
    out = subprocess.check_output(
        ["git", *args],
        cwd=cwd,
        text=True,
        stderr=subprocess.DEVNULL,
    )
    return out.strip()


def repo_root(cwd: Optional[str | Path] = None) -> Path:
    """
    Absolute path of the repository containing `cwd`.

    Raises:
        NotAGitRepository: not inside a work tree (or no git binary)
    """
    try:
        return Path(_git(["rev-parse", "--show-toplevel"], cwd=cwd))
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        raise NotAGitRepository(str(cwd or Path.cwd())) from e


def current_branch(cwd: Optional[str | Path] = None) -> str:
    """
    Name of the checked out branch.

    `git rev-parse --abbrev-ref HEAD` fails in a repository with no commits;
    use FALLBACK_BRANCH then.
    """
    try:
        return _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd)
    except subprocess.CalledProcessError:
        return FALLBACK_BRANCH


def remotes(cwd: Optional[str | Path] = None) -> List[str]:
    out = _git(["remote"], cwd=cwd)
    return out.splitlines() if out else []


def has_upstream(cwd: Optional[str | Path] = None) -> bool:
    """
    Guess whether this push will become a pull request.

    Only works when the upstream repository's remote is named 'upstream'.
    """
    return UPSTREAM_REMOTE in remotes(cwd=cwd)


def get_triggers(cwd: Optional[str | Path] = None) -> List[Trigger]:
    """Best estimate of the CI triggers a push from here would cause."""
    triggers: List[Trigger] = [PushTrigger(branch=current_branch(cwd=cwd))]
    if has_upstream(cwd=cwd):
        triggers.append(PullRequestTrigger())
    return triggers
