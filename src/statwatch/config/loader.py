"""Configuration file loading, layering, and validation.

Handles:
- YAML file parsing
- Environment variable overrides
- Command-line overrides (highest priority)
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from statwatch.config.merge import merge_configs
from statwatch.config.paths import get_config_paths
from statwatch.config.schema import Config, LoggingConfig, WatchConfig
from statwatch.errors import ConfigurationError
from statwatch.logging import LEVEL_NAMES

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("statwatch.config")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML as dict, or empty dict on error.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables.

    STATWATCH_LOG sets the log file, STATWATCH_INTERVAL the polling interval.
    """
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("STATWATCH_LOG")
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    interval = os.environ.get("STATWATCH_INTERVAL")
    if interval:
        try:
            overrides.setdefault("watch", {})["interval"] = int(interval)
        except ValueError as e:
            raise ConfigurationError(
                f"STATWATCH_INTERVAL must be an integer, got {interval!r}"
            ) from e

    return overrides


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass.

    Args:
        data: Merged configuration dictionary.

    Returns:
        Typed Config object.
    """
    watch_data = data.get("watch") or {}
    watch = WatchConfig(
        command=watch_data.get("command") or "",
        interval=watch_data.get("interval", 1),
        atime=bool(watch_data.get("atime", False)),
        md5=bool(watch_data.get("md5", False)),
        rsrc=bool(watch_data.get("rsrc", False)),
        beep=bool(watch_data.get("beep", False)),
        detailed=bool(watch_data.get("detailed", False)),
    )

    log_data = data.get("logging") or {}
    level = log_data.get("level")
    logging_config = LoggingConfig(
        level=str(level) if level is not None else None,
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    paths = [str(p) for p in data.get("paths") or []]

    return Config(watch=watch, logging=logging_config, paths=paths)


def validate_config(config: Config) -> Config:
    """Reject configurations the watcher cannot run with.

    Raises:
        ConfigurationError: On a non-positive interval, no paths, or an
            unknown log level name.
    """
    interval = config.watch.interval
    if isinstance(interval, bool) or not isinstance(interval, int):
        raise ConfigurationError(f"interval must be a positive integer, got {interval!r}")
    if interval <= 0:
        raise ConfigurationError(f"interval must be a positive integer, got {interval}")
    if not config.paths:
        raise ConfigurationError("no paths to watch")
    level = config.logging.level
    if level and level.lower() not in LEVEL_NAMES:
        raise ConfigurationError(
            f"unknown log level {level!r}, expected one of {', '.join(LEVEL_NAMES)}"
        )
    return config


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
    cwd: str | Path | None = None,
) -> Config:
    """Load, merge, and validate config from all sources.

    Priority order (highest to lowest):
    1. Command-line options
    2. Environment variables
    3. Project config (./.statwatch.yaml) or ``config_file``
    4. User config (~/.config/statwatch/config.yaml or %APPDATA%)

    Args:
        cli_overrides: Nested dict of options given on the command line.
        config_file: Explicit config file; must exist.
        cwd: Directory searched for the project config.

    Returns:
        Validated Config object.

    Raises:
        ConfigurationError: If the result cannot be used.
    """
    if config_file is not None and not Path(config_file).is_file():
        raise ConfigurationError(f"config file not found: {config_file}")

    configs: list[dict[str, Any]] = []

    for path in get_config_paths(config_file=config_file, cwd=cwd):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    env_config = env_overrides()
    if env_config:
        configs.append(env_config)

    if cli_overrides:
        configs.append(cli_overrides)

    merged = merge_configs(*configs)
    return validate_config(dict_to_config(merged))
