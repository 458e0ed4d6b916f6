from .config import Config, load_config
from .model import OnAny, OnPullRequest, OnPush, PullRequestTrigger, PushTrigger, Task
from .runner import discover_ci_configs, plan_tasks, run_checks, run_tasks
from .selector import runnable_tasks, select_tasks

__all__ = [
    "Config",
    "load_config",
    "OnAny",
    "OnPullRequest",
    "OnPush",
    "PullRequestTrigger",
    "PushTrigger",
    "Task",
    "discover_ci_configs",
    "plan_tasks",
    "run_checks",
    "run_tasks",
    "runnable_tasks",
    "select_tasks",
]
