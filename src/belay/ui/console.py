"""Console output formatting utilities for belay."""

from __future__ import annotations

import sys
from typing import Optional, Sequence


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_checking(self, name: str) -> None:
        """Print the line announcing a task."""
        print(f"Checking '{name}':", flush=True)

    def print_success(self) -> None:
        print("Success!", flush=True)

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_plan_task(self, name: str, reason: str) -> None:
        print(f"  ✓ {name} ({reason})")

    def print_plan_task_skipped(self, name: str, reason: str) -> None:
        print(f"  ⏭ {name} ({reason})")

    def print_config(self, path: str, blacklist: Sequence[str]) -> None:
        print(f"Config file: {path}")
        print("Command blacklist:")
        for entry in blacklist:
            print(f"  {entry}")

    def print_error(
        self,
        title: str,
        message: str | None = None,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"Error: {title}", file=sys.stderr)
        if message:
            print(message, file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (initialized by the CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
