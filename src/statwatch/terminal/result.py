"""Command execution result dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Result of running the triggered command.

    Attributes:
        command: The command line that was run.
        exit_code: Process exit code (0 = success), or None if it never started.
        status: "ok" or "error".
        duration_ms: Wall time in milliseconds.
    """

    command: str
    exit_code: int | None
    status: str  # "ok", "error"
    duration_ms: float

    @property
    def success(self) -> bool:
        """True if command completed with exit code 0."""
        return self.exit_code == 0

    def __repr__(self) -> str:
        if self.success:
            return f"<CommandResult ok, {self.duration_ms:.0f}ms>"
        return f"<CommandResult {self.status}, exit={self.exit_code}>"
