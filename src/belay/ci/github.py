# ci/github.py
# GitHub Actions workflow files (.github/workflows/*.yml)
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..model import Applicability, OnPullRequest, OnPush, Task
from .document import load_document, optional_str, require
from .errors import invalid_field


@dataclass(frozen=True)
class GitHubStep:
    run: str
    name: str | None = None


@dataclass(frozen=True)
class GitHubJob:
    steps: List[GitHubStep]


@dataclass(frozen=True)
class GitHubCiConfig:
    name: str
    jobs: Dict[str, GitHubJob]
    on: Tuple[Applicability, ...] = field(default=())
    source: str | None = None

    def all_tasks(self) -> List[Task]:
        # `on` is workflow-wide: every task shares it
        return [
            Task(command=step.run, name=step.name, applicability=self.on)
            for job in self.jobs.values()
            for step in job.steps
        ]


# ---------------------------------------------------------------------
# `on:` decoding
# ---------------------------------------------------------------------
# `on` comes in two shapes:
#   on: [push, pull_request]
#   on:
#     push:
#       branches: [main]
#     pull_request:
# Each shape has its own decoder returning None when the value is not that
# shape. Anything else (e.g. `on: push`) decodes to no applicability.

def _applicability_for(trigger_name: str, branches: Optional[List[str]] = None) -> Optional[Applicability]:
    if trigger_name == "push":
        return OnPush(branches=frozenset(branches) if branches is not None else None)
    if trigger_name == "pull_request":
        return OnPullRequest()
    # schedule, workflow_dispatch, ... have no local equivalent
    return None


def parse_on_sequence(value: Any) -> Optional[Tuple[Applicability, ...]]:
    """Decode the `on: [push, pull_request]` form."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    found = (_applicability_for(name) for name in value)
    return tuple(a for a in found if a is not None)


def parse_on_mapping(value: Any) -> Optional[Tuple[Applicability, ...]]:
    """Decode the `on: {push: {branches: [...]}, pull_request: ...}` form."""
    if not isinstance(value, dict):
        return None

    result: List[Applicability] = []
    for name, config in value.items():
        if not isinstance(name, str):
            return None
        if config is None:
            config = {}
        if not isinstance(config, dict):
            return None

        branches = config.get("branches")
        if branches is not None and (
            not isinstance(branches, list) or not all(isinstance(b, str) for b in branches)
        ):
            return None

        applicability = _applicability_for(name, branches)
        if applicability is not None:
            result.append(applicability)
    return tuple(result)


def parse_on(value: Any) -> Tuple[Applicability, ...]:
    for decode in (parse_on_sequence, parse_on_mapping):
        decoded = decode(value)
        if decoded is not None:
            return decoded
    return ()


# ---------------------------------------------------------------------
# Workflow parsing
# ---------------------------------------------------------------------

def _parse_step(raw: Any, path: str, source: str | None) -> Optional[GitHubStep]:
    if not isinstance(raw, dict):
        raise invalid_field(path, "a mapping", raw, source=source)

    run = optional_str(raw.get("run"), f"{path}.run", source)
    if run is None:
        # `uses:` steps (marketplace actions) have nothing to run locally
        return None
    name = optional_str(raw.get("name"), f"{path}.name", source)
    return GitHubStep(run=run, name=name)


def _parse_job(job_name: str, raw: Any, source: str | None) -> GitHubJob:
    path = f"jobs.{job_name}"
    if not isinstance(raw, dict):
        raise invalid_field(path, "a mapping", raw, source=source)

    raw_steps = require(raw, "steps", f"{path}.steps", source)
    if not isinstance(raw_steps, list):
        raise invalid_field(f"{path}.steps", "a list", raw_steps, source=source)

    steps = []
    for i, raw_step in enumerate(raw_steps):
        step = _parse_step(raw_step, f"{path}.steps[{i}]", source)
        if step is not None:
            steps.append(step)
    return GitHubJob(steps=steps)


def parse(text: str, source: str | None = None) -> GitHubCiConfig:
    """
    Parse a GitHub workflow file.

    Args:
        text: raw YAML
        source: where the text came from (only used in error messages)

    Raises:
        ParseError subclasses (ScanError, MissingDocument, MissingField, InvalidField)
    """
    data = load_document(text, source=source)

    name = require(data, "name", "name", source)
    if not isinstance(name, str):
        raise invalid_field("name", "a string", name, source=source)

    raw_jobs = require(data, "jobs", "jobs", source)
    if not isinstance(raw_jobs, dict):
        raise invalid_field("jobs", "a mapping", raw_jobs, source=source)

    jobs = {str(job_name): _parse_job(str(job_name), raw, source) for job_name, raw in raw_jobs.items()}

    # YAML 1.1 reads a bare `on` key as the boolean True
    raw_on = data["on"] if "on" in data else data.get(True)

    return GitHubCiConfig(name=name, jobs=jobs, on=parse_on(raw_on), source=source)
