"""Configuration schema dataclasses for statwatch.

Each file layer may set any subset of fields; the loader merges the layers
and fills the rest from these defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WatchConfig:
    """What to compare and what to do on change.

    Example config.yaml:
        watch:
          command: make
          interval: 2
          md5: true
          beep: true
    """

    command: str = ""  # Shell command run after each changed path
    interval: int = 1  # Seconds between polling cycles
    atime: bool = False  # Compare access times (ignored when md5 is on)
    md5: bool = False  # Compare content digests
    rsrc: bool = False  # Track the resource fork (macOS)
    beep: bool = False  # Ring the bell at the end of a cycle with changes
    detailed: bool = False  # Timestamps and long listings in reports


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # error, warning, info, verbose, debug, trace
    verbose: int | None = None  # 0..4, overrides level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    paths: list[str] = field(default_factory=list)
