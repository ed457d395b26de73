# src/storefront/core/logging.py
"""
Console logging for the storefront API.

All modules share the single `log` instance defined here, which renders
through a rich Console and forwards to the standard `logging` tree so that
uvicorn and pytest capture the same records.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# --- Global Console ---
console = Console()


def _markup(style: str) -> Callable[[Any], str]:
    return lambda value: f"[{style}]{escape(str(value))}[/{style}]"


# Rich-markup formatters used to highlight names inside log messages.
color_palette: Dict[str, Callable[[Any], str]] = {
    "route": _markup("cyan"),
    "method": _markup("bold magenta"),
    "table": _markup("blue"),
    "value": _markup("yellow"),
    "user": _markup("bold cyan"),
}


class Logger:
    """Thin wrapper over `logging.Logger` with section and timing helpers."""

    def __init__(self, name: str = "storefront", level: int = logging.INFO):
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = RichHandler(
                console=console,
                markup=True,
                show_path=False,
                rich_tracebacks=True,
            )
            self._logger.addHandler(handler)
        self._logger.setLevel(level)

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def success(self, message: str) -> None:
        self._logger.info(f"[green]✓[/green] {message}")

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def section(self, title: str) -> None:
        """Log a visual separator with a title."""
        self._logger.info(f"[bold blue]── {title} ──[/bold blue]")

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log how long the wrapped block took."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self.info(f"{label} [dim]({elapsed:.1f} ms)[/dim]")


log = Logger()
