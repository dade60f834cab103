"""Console output for packsync runs.

Inside a GitHub Actions job warnings, errors and groups are written as
workflow commands so they show up as annotations and collapsible log
sections. Elsewhere the same calls produce plain styled console output.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from rich.console import Console

from .config import in_actions


def _escape_data(message: str) -> str:
    """Escape a message for use in a workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class OutputFormatter:
    """Writes progress and problems for the pipeline log."""

    def __init__(
        self,
        quiet: bool = False,
        annotations: Optional[bool] = None,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        """Initialize the formatter.

        Args:
            quiet: Suppress info and success messages
            annotations: Emit workflow commands (auto-detected if ``None``)
            console: Console for regular output
            error_console: Console for errors
        """
        self.quiet = quiet
        self.annotations = in_actions() if annotations is None else annotations
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)

    def _emit(self, console: Console, text: str, style: Optional[str] = None) -> None:
        console.print(
            text, style=style, markup=False, emoji=False, highlight=False, soft_wrap=True
        )

    def info(self, message: str) -> None:
        if not self.quiet:
            self._emit(self.console, message)

    def success(self, message: str) -> None:
        if not self.quiet:
            self._emit(self.console, message, style="green")

    def warning(self, message: str) -> None:
        if self.annotations:
            self._emit(self.console, f"::warning::{_escape_data(message)}")
        else:
            self._emit(self.console, f"Warning: {message}", style="yellow")

    def error(self, message: str) -> None:
        if self.annotations:
            self._emit(self.error_console, f"::error::{_escape_data(message)}")
        else:
            self._emit(self.error_console, f"Error: {message}", style="bold red")

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Wrap the enclosed output in a collapsible log group."""
        if self.annotations:
            self._emit(self.console, f"::group::{title}")
        elif not self.quiet:
            self._emit(self.console, title, style="bold")
        try:
            yield
        finally:
            if self.annotations:
                self._emit(self.console, "::endgroup::")
