"""Platform-aware configuration path resolution.

Handles config file locations for:
- Windows: %APPDATA%\\statwatch\\config.yaml (user)
- Unix: $XDG_CONFIG_HOME or ~/.config/statwatch/config.yaml (user)
- Project: ./.statwatch.yaml in the working directory
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "config.yaml"
APP_NAME = "statwatch"
PROJECT_FILENAME = ".statwatch.yaml"


def get_user_config_path() -> Path | None:
    """Get user-level config path.

    Returns:
        Path to user config file, or None if not determinable.
        The file may not exist.
    """
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME / CONFIG_FILENAME
        return None

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME / CONFIG_FILENAME
    return Path.home() / ".config" / APP_NAME / CONFIG_FILENAME


def get_project_config_path(cwd: str | Path | None = None) -> Path:
    """Get project-level config path (may not exist)."""
    return Path(cwd or ".") / PROJECT_FILENAME


def get_config_paths(
    config_file: str | Path | None = None, cwd: str | Path | None = None
) -> list[Path]:
    """Get config paths in priority order (lowest to highest).

    Args:
        config_file: Explicit config file; replaces the project config.
        cwd: Directory searched for the project config.

    Returns:
        List of config paths: user, then project (or ``config_file``).
    """
    paths: list[Path] = []

    user_path = get_user_config_path()
    if user_path:
        paths.append(user_path)

    if config_file:
        paths.append(Path(config_file))
    else:
        paths.append(get_project_config_path(cwd))

    return paths
