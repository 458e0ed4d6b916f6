# ci/base.py
from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..model import Task


@runtime_checkable
class TaskList(Protocol):
    """Anything that can hand out the tasks described by a CI config."""

    def all_tasks(self) -> List[Task]:
        """
        Every shell task in the config, including ones belay will later
        refuse to run (blacklisted / not triggered).
        """
        ...
