"""Abstract base class for system operators.

This module defines the Operator interface shared by every component that
mutates the account database or the filesystem, plus the ownership
primitive they use.
"""

import grp
import logging
import os
import pwd
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from accountctl.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

# Timeout for account and ACL commands on a single path.
COMMAND_TIMEOUT: float = 600.0


def change_owner(path: Path, owner: str) -> None:
    """Set owner and group of a path to ``owner:owner`` without following symlinks.

    Every account has a private group of the same name.

    Args:
        path: Path to change. Symlinks themselves are changed, not their targets.
        owner: User and group name.

    Raises:
        LookupError: If the user or group does not exist.
        OSError: If the ownership cannot be changed.
    """
    try:
        uid = pwd.getpwnam(owner).pw_uid
        gid = grp.getgrnam(owner).gr_gid
    except KeyError as e:
        raise LookupError(f"no such user or group: {owner}") from e
    os.chown(path, uid, gid, follow_symlinks=False)


class Operator(ABC):
    """Abstract base class for all system operators.

    Attributes:
        dry_run: If True, only log commands without executing them.
        required_tools: Executables the operator runs.

    Example:
        >>> operator = AclManager(dry_run=True)
        >>> operator.grant(Path("/home/authors/alice/public"), "g:g_mod:rwx")
    """

    required_tools: ClassVar[tuple[str, ...]] = ()

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate actions without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tools this operator needs are available.

        Returns:
            True if the operator can be used, False otherwise.
        """

    def _execute(
        self, args: list[str], timeout: float | None = COMMAND_TIMEOUT
    ) -> CommandResult:
        """Run a mutating command, or only log it in dry-run mode.

        Args:
            args: Command and arguments.
            timeout: Seconds before the command is killed. None waits forever.

        Returns:
            CommandResult of the command; a synthetic success in dry-run mode.
        """
        if self._dry_run:
            logger.info("Dry-run: would execute %s", " ".join(args))
            return CommandResult(stdout="", stderr="", returncode=0)

        logger.debug("Executing %s", " ".join(args))
        return run_command(args, timeout=timeout)
