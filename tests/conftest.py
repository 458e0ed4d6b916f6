"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from belay.ui.console import Console, set_console

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def quiet_console():
    """Fresh non-debug console for every test."""
    set_console(Console(debug=False))
    yield
    set_console(Console(debug=False))


@pytest.fixture()
def fixture_text():
    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture()
def repo(tmp_path: Path):
    """An empty directory standing in for a repository root."""
    (tmp_path / ".git" / "hooks").mkdir(parents=True)
    return tmp_path


def write_workflow(root: Path, filename: str, text: str) -> Path:
    path = root / ".github" / "workflows" / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_gitlab(root: Path, text: str, filename: str = ".gitlab-ci.yml") -> Path:
    path = root / filename
    path.write_text(text, encoding="utf-8")
    return path
