from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVEL_ENV = "TAGVEC_LOG_LEVEL"
LOGGER_NAME = "tagvec"
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def resolve_level(level: str | None = None) -> str:
    """Pick the log level: argument, then env var `TAGVEC_LOG_LEVEL`, then "INFO".

    Unknown names fall back to "INFO".
    """

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    level = str(level).upper().strip()
    return level if level in _LEVELS else "INFO"


def setup_logging(level: str | None = None, *, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler (stderr by default) to the `tagvec` logger.

    Only the package logger is touched, so embedding applications keep their
    own root configuration. Safe to call multiple times.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, RichHandler):
            logger.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        show_path=False,
        show_time=True,
        omit_repeated_times=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%H:%M:%S]"))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    return logger
