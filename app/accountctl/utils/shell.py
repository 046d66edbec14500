"""Subprocess helpers for the account and ACL tools.

Commands run with the C locale so that their diagnostics read the same
on every system. Failures of any kind, including a missing executable or
a timeout, come back as a failed CommandResult; nothing here raises.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass

# Exit codes used by coreutils timeout(1) and by shells for a missing command
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0

    @property
    def error_message(self) -> str:
        """First non-empty diagnostic, or the exit status."""
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.returncode}"


def _command_env() -> dict[str, str]:
    env = dict(os.environ)
    env["LC_ALL"] = "C"
    return env


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command to completion and capture its output.

    Args:
        args: Command and arguments; never passed through a shell.
        timeout: Seconds before the command is killed. None waits forever.

    Returns:
        CommandResult. A missing executable yields exit code 127 and a
        timeout yields 124.
    """
    try:
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=_command_env(),
        )
    except FileNotFoundError:
        return CommandResult("", f"{args[0]}: command not found", EXIT_NOT_FOUND)
    except subprocess.TimeoutExpired:
        return CommandResult("", f"{args[0]}: timed out after {timeout}s", EXIT_TIMEOUT)

    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None
