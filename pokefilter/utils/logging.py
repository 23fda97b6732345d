"""Logging setup for pokefilter."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from pokefilter.utils.config import config


def setup_logging(level: str | int | None = None) -> None:
    """Route the package loggers through a rich handler on stderr."""
    level = level or config.log_level
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger("pokefilter")
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
