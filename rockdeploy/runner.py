"""Blocking shell command execution.

Commands inherit the console streams so build output is shown live.
The exit status comes back as a CommandResult; nothing here exits the
process.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one shell command."""

    command: str
    cwd: Path | None
    returncode: int | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(command: str, cwd: Path | None = None) -> CommandResult:
    """Run a shell command and wait for it to finish.

    Args:
        command: Shell command line
        cwd: Working directory (defaults to the current one)

    Returns:
        CommandResult with the exit code, or with returncode None and an
        error message if the command could not be started.
    """
    logger.info(f"Executing: {command}" + (f" (in {cwd})" if cwd else ""))
    try:
        result = subprocess.run(command, shell=True, cwd=cwd, check=False)
    except OSError as exc:
        logger.debug(f"Could not start {command!r}: {exc}")
        return CommandResult(command=command, cwd=cwd, returncode=None, error=str(exc))

    return CommandResult(command=command, cwd=cwd, returncode=result.returncode)
