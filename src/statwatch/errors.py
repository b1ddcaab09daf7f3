"""Exception types raised by statwatch."""

from __future__ import annotations


class StatwatchError(Exception):
    """Base class for statwatch errors."""


class ConfigurationError(StatwatchError):
    """Invalid options detected before the watcher starts."""


class IOFailure(StatwatchError):
    """A stat or read failed for a reason other than the path not existing.

    Fatal: the CLI stops monitoring rather than skipping the target.
    """

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error.strerror or error}")
