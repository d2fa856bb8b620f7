"""Logging setup for the TUI and headless runs."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from textual.logging import TextualHandler


def configure_logging(level: str = "WARNING", *, tui: bool = False) -> None:
    # Textual owns the terminal in the editor; route records to its devtools log.
    handler: logging.Handler = TextualHandler() if tui else RichHandler(show_path=False)
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
