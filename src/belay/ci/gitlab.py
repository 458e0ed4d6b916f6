# ci/gitlab.py
# GitLab CI files (.gitlab-ci.yml)
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..model import OnAny, Task
from .document import load_document, optional_str, str_list

# Top-level keys that configure the pipeline rather than define a job.
RESERVED_KEYS = frozenset({
    "image",
    "services",
    "stages",
    "variables",
    "cache",
    "before_script",
    "after_script",
    "default",
    "include",
    "workflow",
})


@dataclass(frozen=True)
class GitLabJob:
    """
    A GitLab job.

    `script` is optional so that root keys which are not jobs (e.g. a
    `cache:` block) still parse; they just contribute no tasks.
    """
    script: Optional[List[str]] = None


@dataclass(frozen=True)
class GitLabCiConfig:
    jobs: Dict[str, GitLabJob]
    image: str | None = None
    stages: Optional[List[str]] = None
    source: str | None = None

    def all_tasks(self) -> List[Task]:
        # no trigger concept here: every script line runs on any trigger
        return [
            Task(command=command, applicability=(OnAny(),))
            for job in self.jobs.values()
            for command in (job.script or [])
        ]


def _parse_script(value: Any, path: str, source: str | None) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        # `- *setup` anchors splice in a whole list of commands
        flat: List[Any] = []
        for item in value:
            flat.extend(item if isinstance(item, list) else [item])
        value = flat
    return str_list(value, path, source)


def _parse_job(job_name: str, raw: Any, source: str | None) -> GitLabJob:
    if not isinstance(raw, dict):
        return GitLabJob()
    return GitLabJob(script=_parse_script(raw.get("script"), f"{job_name}.script", source))


def parse(text: str, source: str | None = None) -> GitLabCiConfig:
    """
    Parse a .gitlab-ci.yml file.

    Every top-level key that is not reserved and not hidden (`.template`)
    is a job.

    Raises:
        ParseError subclasses (ScanError, MissingDocument, InvalidField)
    """
    data = load_document(text, source=source)

    jobs: Dict[str, GitLabJob] = {}
    for key, raw in data.items():
        key = str(key)
        if key in RESERVED_KEYS or key.startswith("."):
            continue
        jobs[key] = _parse_job(key, raw, source)

    image = data.get("image")
    if isinstance(image, dict):
        # image: {name: ..., entrypoint: [...]}
        image = image.get("name")
    stages = data.get("stages")

    return GitLabCiConfig(
        jobs=jobs,
        image=optional_str(image, "image", source),
        stages=str_list(stages, "stages", source) if stages is not None else None,
        source=source,
    )
