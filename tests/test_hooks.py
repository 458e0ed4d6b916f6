from __future__ import annotations

import os
import stat

import pytest

from belay.hooks import HOOK_SCRIPT, hook_filename, install_hook


@pytest.mark.parametrize("hook_type, filename", [("commit", "pre-commit"), ("push", "pre-push")])
def test_install_hook(repo, hook_type, filename) -> None:
    path = install_hook(repo, hook_type)

    assert path == repo / ".git" / "hooks" / filename
    assert path.read_text() == "#!/bin/sh\nbelay"
    if os.name != "nt":
        assert path.stat().st_mode & stat.S_IXUSR


def test_install_hook_overwrites(repo) -> None:
    path = repo / ".git" / "hooks" / "pre-push"
    path.write_text("old")

    install_hook(repo, "push")

    assert path.read_text() == HOOK_SCRIPT


def test_install_hook_creates_hooks_dir(tmp_path) -> None:
    (tmp_path / ".git").mkdir()

    assert install_hook(tmp_path, "commit").exists()


def test_unknown_hook_type() -> None:
    with pytest.raises(ValueError, match="Unknown hook type"):
        hook_filename("merge")
