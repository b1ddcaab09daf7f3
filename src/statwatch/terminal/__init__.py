"""Running the user's command after a change is detected.

The watcher depends only on the CommandRunner protocol, so tests can pass a
recorder instead of spawning processes.
"""

from statwatch.terminal.protocol import CommandRunner
from statwatch.terminal.result import CommandResult
from statwatch.terminal.subprocess_executor import ShellCommandRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "ShellCommandRunner",
]
