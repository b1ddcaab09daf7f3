"""Diagnostic logging for statwatch.

Everything logs under the ``statwatch`` logger; components take a child
logger (``statwatch.watching``, ``statwatch.terminal``...) and the component
name is shown in each line:

    12:04:51 debug [watching]: src/main.c changed: ['size']

Change reports are not log records; they go to stdout through the reporter.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statwatch.config.schema import LoggingConfig

TRACE = 5
VERBOSE = 15

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("statwatch")

_initialized = False

# Values accepted for ``logging.level`` in config files
LEVEL_NAMES = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "verbose": VERBOSE,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

# Indexed by verbosity; -v on the command line starts at 2
_VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, VERBOSE, TRACE)


class _ComponentFormatter(logging.Formatter):
    """Lowercase level name plus the child logger name as a component tag."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)s%(component)s: %(message)s", datefmt="%H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        _, dot, component = record.name.partition(".")
        record.component = f" [{component}]" if dot else ""
        return super().format(record)


def resolve_level(config: LoggingConfig | None) -> int:
    """Pick the effective log level: verbose (int) wins over level (str)."""
    if config is None:
        return logging.WARNING
    if config.verbose is not None:
        index = min(max(config.verbose, 0), len(_VERBOSITY_LEVELS) - 1)
        return _VERBOSITY_LEVELS[index]
    if config.level:
        return LEVEL_NAMES.get(config.level.lower(), logging.WARNING)
    return logging.WARNING


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Install the handler for the run; later calls are no-ops.

    Records go to ``config.file`` when set. Otherwise they go to stderr, but
    only when stderr is a terminal.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = resolve_level(config)
    logger.setLevel(level)

    log_path = config.file if config else None
    handler: logging.Handler | None = None
    failure: OSError | None = None
    if log_path:
        try:
            handler = logging.FileHandler(os.path.expanduser(log_path), encoding="utf-8")
        except OSError as e:
            failure = e
    if handler is None and (failure is not None or sys.stderr.isatty()):
        handler = logging.StreamHandler(sys.stderr)
    if handler is None:
        return

    handler.setFormatter(_ComponentFormatter())
    logger.addHandler(handler)
    if failure is not None:
        logger.warning("Cannot open log file %s: %s; logging to stderr", log_path, failure)


def reset_logging() -> None:
    """Drop installed handlers so setup_logging() can run again (tests)."""
    global _initialized
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    _initialized = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the statwatch logger, or its child ``name``."""
    if name:
        return logger.getChild(name)
    return logger
