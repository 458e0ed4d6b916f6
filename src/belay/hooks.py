# hooks.py
from __future__ import annotations

import os
from pathlib import Path

HOOK_FILENAMES = {
    "commit": "pre-commit",
    "push": "pre-push",
}

HOOK_SCRIPT = "#!/bin/sh\nbelay"


def hook_filename(hook_type: str) -> str:
    try:
        return HOOK_FILENAMES[hook_type]
    except KeyError:
        raise ValueError(
            f"Unknown hook type {hook_type!r}; expected one of {sorted(HOOK_FILENAMES)}"
        ) from None


def install_hook(repo_root: str | Path, hook_type: str) -> Path:
    """
    Write a git hook that runs belay.

    An existing hook of the same name is overwritten.

    Returns:
        Path of the hook file
    """
    hook_path = Path(repo_root) / ".git" / "hooks" / hook_filename(hook_type)
    hook_path.parent.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(HOOK_SCRIPT)

    if os.name != "nt":
        hook_path.chmod(0o755)

    return hook_path
