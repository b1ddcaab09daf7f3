"""Configuration management for statwatch.

Provides layered YAML-based configuration with:
- User-level config (~/.config/statwatch/ or %APPDATA%)
- Project-level config (./.statwatch.yaml, or --config)
- Environment variable overrides
- Command-line options (highest priority)

Example usage:
    from statwatch.config import load_config

    config = load_config({"watch": {"md5": True}, "paths": ["main.c"]})
    print(config.watch.interval)
"""

from statwatch.config.loader import (
    dict_to_config,
    env_overrides,
    load_config,
    load_yaml_file,
    validate_config,
)
from statwatch.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_user_config_path,
)
from statwatch.config.schema import (
    Config,
    LoggingConfig,
    WatchConfig,
)

__all__ = [
    # Main API
    "Config",
    "load_config",
    "validate_config",
    "dict_to_config",
    "env_overrides",
    "load_yaml_file",
    # Schema types
    "LoggingConfig",
    "WatchConfig",
    # Path utilities
    "get_config_paths",
    "get_project_config_path",
    "get_user_config_path",
]
