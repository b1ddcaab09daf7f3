"""Command runner protocol for triggered shell commands."""

from __future__ import annotations

from typing import Protocol

from statwatch.terminal.result import CommandResult


class CommandRunner(Protocol):
    """Protocol for running the configured command.

    Implementations:
    - ShellCommandRunner: local shell via asyncio subprocess
    """

    async def run(self, command: str) -> CommandResult:
        """Run ``command`` to completion.

        Args:
            command: Literal command line, passed to the shell unchanged.

        Returns:
            CommandResult describing how the process ended. Callers are free
            to ignore it.
        """
        ...
