"""
Logging setup.

Diagnostics go through the standard logging module and are rendered by rich,
the same console library used for the CLI tables.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


_HANDLER: RichHandler | None = None


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """
    Configure the "coursecatalog" logger with a RichHandler.

    Safe to call multiple times: the handler is installed once,
    later calls only change the level.
    """
    global _HANDLER

    # getLevelName maps unknown names to "Level x" strings
    lvl = logging.getLevelName(str(level).upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    root = logging.getLogger("coursecatalog")
    root.setLevel(lvl)

    if _HANDLER is None:
        _HANDLER = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        _HANDLER.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(_HANDLER)
        root.propagate = False
