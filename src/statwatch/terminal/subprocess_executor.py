"""Shell-based command runner."""

from __future__ import annotations

import asyncio
import time

from statwatch.logging import get_logger
from statwatch.terminal.result import CommandResult

log = get_logger("terminal")


class ShellCommandRunner:
    """Run commands through the system shell using asyncio subprocess.

    Output is not captured: the command writes straight to the terminal,
    so build output shows up next to the change reports. There is no
    timeout; the watcher waits as long as the command runs.
    """

    def __init__(self, cwd: str = ".") -> None:
        """Initialize the runner.

        Args:
            cwd: Working directory for commands, resolved at each run.
        """
        self._cwd = cwd

    async def run(self, command: str) -> CommandResult:
        """Run ``command`` via the shell and wait for it to exit."""
        start_time = time.perf_counter()
        log.debug("Running command: %s", command)

        try:
            process = await asyncio.create_subprocess_shell(command, cwd=self._cwd)
            exit_code = await process.wait()
        except OSError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log.warning("Could not run %r: %s", command, e)
            return CommandResult(
                command=command,
                exit_code=None,
                status="error",
                duration_ms=duration_ms,
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.debug("Command exited with %d after %.0fms", exit_code, duration_ms)
        return CommandResult(
            command=command,
            exit_code=exit_code,
            status="ok" if exit_code == 0 else "error",
            duration_ms=duration_ms,
        )
