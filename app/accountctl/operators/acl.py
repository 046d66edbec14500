"""Access-control-list operator.

Thin wrapper around setfacl. Entries are only ever added; nothing here
removes a grant.
"""

import logging
from pathlib import Path

from accountctl.core.errors import ACLGrantError
from accountctl.operators.base import COMMAND_TIMEOUT, Operator
from accountctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


def user_entry(username: str, perms: str) -> str:
    """Build a named-user ACL entry, e.g. ``u:carol:r-x``."""
    return f"u:{username}:{perms}"


def group_entry(group: str, perms: str) -> str:
    """Build a named-group ACL entry, e.g. ``g:g_mod:rwx``."""
    return f"g:{group}:{perms}"


class AclManager(Operator):
    """Operator applying POSIX ACL entries with setfacl."""

    required_tools = ("setfacl",)

    def is_available(self) -> bool:
        """Check if setfacl is available."""
        return command_exists("setfacl")

    def grant(
        self,
        path: Path,
        entry: str,
        *,
        default: bool = False,
        recursive: bool = False,
    ) -> None:
        """Add or modify one ACL entry.

        Args:
            path: File or directory to modify.
            entry: ACL entry such as ``u:carol:r-x``.
            default: If True, modify the default ACL inherited by new files.
            recursive: If True, apply to the whole tree under path.

        Raises:
            ACLGrantError: If setfacl fails.
        """
        args = ["setfacl"]
        if recursive:
            args.append("-R")
        if default:
            args.append("-d")
        args.extend(["-m", entry, str(path)])

        # Recursive grants walk whole home trees and are never cut short
        result = self._execute(args, timeout=None if recursive else COMMAND_TIMEOUT)
        if not result.success:
            kind = "default ACL" if default else "ACL"
            raise ACLGrantError(f"Failed to set {kind} {entry} on {path}: {result.error_message}")
        logger.debug("Granted %s on %s (default=%s, recursive=%s)", entry, path, default, recursive)

    def grant_inherited(self, path: Path, entry: str) -> None:
        """Grant an entry explicitly and as a default for new files.

        Raises:
            ACLGrantError: If either setfacl call fails.
        """
        self.grant(path, entry)
        self.grant(path, entry, default=True)
