# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple, Union


# ---------------------------------------------------------------------
# Triggers: what is actually happening locally
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class PushTrigger:
    """A push of `branch` is about to happen."""
    branch: str


@dataclass(frozen=True)
class PullRequestTrigger:
    """The push will probably turn into a pull request."""


Trigger = Union[PushTrigger, PullRequestTrigger]


# ---------------------------------------------------------------------
# Applicability: when the CI provider intends a task to run
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class OnPush:
    """
    Run on push.

    branches=None means every branch.
    """
    branches: Optional[FrozenSet[str]] = None

    def triggered_by(self, trigger: Trigger) -> bool:
        if not isinstance(trigger, PushTrigger):
            return False
        if self.branches is None:
            return True
        return trigger.branch in self.branches


@dataclass(frozen=True)
class OnPullRequest:
    """Run on pull request."""

    def triggered_by(self, trigger: Trigger) -> bool:
        return isinstance(trigger, PullRequestTrigger)


@dataclass(frozen=True)
class OnAny:
    """Run for every trigger."""

    def triggered_by(self, trigger: Trigger) -> bool:
        return True


Applicability = Union[OnPush, OnPullRequest, OnAny]


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Task:
    """A single shell command extracted from a CI config."""
    command: str
    name: str | None = None
    applicability: Tuple[Applicability, ...] = field(default=(OnAny(),))

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else self.command

    def is_triggered(self, triggers: Iterable[Trigger]) -> bool:
        """True if any applicability entry matches any trigger."""
        triggers = list(triggers)
        return any(
            applicability.triggered_by(trigger)
            for applicability in self.applicability
            for trigger in triggers
        )
