# selector.py
# Which extracted tasks actually get run locally.
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .ci.base import TaskList
from .config import Config
from .model import Task, Trigger


def blacklisted_by(command: str, blacklist: Sequence[str]) -> Optional[str]:
    """Return the first blacklist entry contained in `command`, if any."""
    for entry in blacklist:
        if entry in command:
            return entry
    return None


def filter_blacklisted(tasks: Iterable[Task], blacklist: Sequence[str]) -> List[Task]:
    return [t for t in tasks if blacklisted_by(t.command, blacklist) is None]


def filter_triggered(tasks: Iterable[Task], triggers: Sequence[Trigger]) -> List[Task]:
    return [t for t in tasks if t.is_triggered(triggers)]


def select_tasks(
    tasks: Iterable[Task],
    blacklist: Sequence[str],
    triggers: Sequence[Trigger],
) -> List[Task]:
    """Blacklist first, then applicability. Order is preserved."""
    return filter_triggered(filter_blacklisted(tasks, blacklist), triggers)


def runnable_tasks(ci_config: TaskList, config: Config, triggers: Sequence[Trigger]) -> List[Task]:
    return select_tasks(ci_config.all_tasks(), config.command_blacklist, triggers)


# ---------------------------------------------------------------------
# Plan explanation (--print-plan)
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Selection:
    task: Task
    selected: bool
    reason: str


def explain_selection(
    tasks: Iterable[Task],
    blacklist: Sequence[str],
    triggers: Sequence[Trigger],
) -> List[Selection]:
    """Same decision as select_tasks, with a reason for every task."""
    out: List[Selection] = []
    for task in tasks:
        entry = blacklisted_by(task.command, blacklist)
        if entry is not None:
            out.append(Selection(task, False, f"blacklisted: {entry!r}"))
        elif not task.is_triggered(triggers):
            out.append(Selection(task, False, "not triggered"))
        else:
            out.append(Selection(task, True, "selected"))
    return out
