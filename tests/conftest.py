"""Root pytest configuration for all tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from statwatch.logging import reset_logging


@pytest.fixture(autouse=True)
def clean_logging() -> Iterator[None]:
    """Let each test install its own logging setup."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point user and project config lookups at an empty directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.delenv("STATWATCH_LOG", raising=False)
    monkeypatch.delenv("STATWATCH_INTERVAL", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
