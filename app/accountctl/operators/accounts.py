"""Account provisioning operator.

Creates category groups, creates or unlocks declared accounts and locks
accounts that were removed from the desired state. Locking is expressed
through the account expiry date:

- locked: expiry date in the past (``usermod -e 1``, i.e. 1970-01-02)
- unlocked: no expiry date (``usermod -e ""``)
"""

import grp
import logging
import pwd
from collections.abc import Iterable

from accountctl.core.errors import (
    AccountCreationError,
    AccountLockError,
    AccountUnlockError,
    GroupCreationError,
    GroupMembershipError,
)
from accountctl.core.registry import CategoryRegistry
from accountctl.models.account import DesiredUser
from accountctl.operators.base import Operator
from accountctl.utils.shell import command_exists

logger = logging.getLogger(__name__)

# Expiry value guaranteed to be in the past (days since the epoch).
LOCKED_EXPIRY = "1"
# Empty expiry removes the expiration date.
UNLOCKED_EXPIRY = ""


class AccountProvisioner(Operator):
    """Operator for the OS account database.

    Uses groupadd, useradd and usermod. Requires root privileges for
    actual execution.

    Args:
        registry: Category registry giving groups and home locations.
        protected_identities: Usernames that are never locked.
        dry_run: If True, only log the commands.
    """

    required_tools = ("groupadd", "useradd", "usermod")

    def __init__(
        self,
        registry: CategoryRegistry,
        protected_identities: Iterable[str] = (),
        dry_run: bool = False,
    ) -> None:
        super().__init__(dry_run)
        self._registry = registry
        self._protected = frozenset(protected_identities)

    def is_available(self) -> bool:
        """Check if groupadd, useradd and usermod are available."""
        return all(command_exists(cmd) for cmd in self.required_tools)

    @property
    def protected_identities(self) -> frozenset[str]:
        """Usernames exempt from locking."""
        return self._protected

    def is_protected(self, username: str) -> bool:
        """Check if a username is exempt from locking."""
        return username in self._protected

    def account_exists(self, username: str) -> bool:
        """Check if an account exists in the account database."""
        try:
            pwd.getpwnam(username)
        except KeyError:
            return False
        return True

    def group_exists(self, group: str) -> bool:
        """Check if a group exists in the group database."""
        try:
            grp.getgrnam(group)
        except KeyError:
            return False
        return True

    def ensure_groups(self) -> list[str]:
        """Create every category group that does not exist yet.

        Existing groups are left alone. A failing group does not stop the
        remaining ones from being created.

        Returns:
            Names of the groups that were created.

        Raises:
            GroupCreationError: If one or more groups could not be created.
        """
        created: list[str] = []
        failed: list[str] = []

        for group in self._registry.groups:
            if self.group_exists(group):
                continue
            result = self._execute(["groupadd", group])
            if result.success:
                logger.info("Created group %s", group)
                created.append(group)
            else:
                logger.warning("Failed to create group %s: %s", group, result.error_message)
                failed.append(f"{group} ({result.error_message})")

        if failed:
            raise GroupCreationError(f"Failed to create group(s): {', '.join(failed)}")
        return created

    def create_or_unlock(self, user: DesiredUser) -> str:
        """Create a declared account, or unlock it if it already exists.

        Unlocking happens regardless of the category the existing account
        was created under.

        Args:
            user: Declared account.

        Returns:
            "created" or "unlocked".

        Raises:
            AccountCreationError: If a missing account cannot be created.
            AccountUnlockError: If an existing account cannot be unlocked.
        """
        if self.account_exists(user.username):
            result = self._execute(["usermod", "-e", UNLOCKED_EXPIRY, user.username])
            if not result.success:
                raise AccountUnlockError(
                    f"Failed to unlock {user.username} ({user.category.value}): "
                    f"{result.error_message}"
                )
            logger.info("Unlocked account %s", user.username)
            return "unlocked"

        home = self._registry.home_for(user.category, user.username)
        group = self._registry.group_for(user.category)
        result = self._execute(
            ["useradd", "-m", "-d", str(home), "-c", user.name, "-G", group, user.username]
        )
        if not result.success:
            raise AccountCreationError(
                f"Failed to create {user.username} ({user.category.value}): {result.error_message}"
            )
        logger.info("Created account %s in %s with home %s", user.username, group, home)
        return "created"

    def lock(self, username: str) -> bool:
        """Lock an account by moving its expiry date into the past.

        Args:
            username: Account to lock.

        Returns:
            True if the account was locked, False if it is protected and was skipped.

        Raises:
            AccountLockError: If usermod fails.
        """
        if self.is_protected(username):
            logger.info("Skipping lock for protected identity %s", username)
            return False

        result = self._execute(["usermod", "-e", LOCKED_EXPIRY, username])
        if not result.success:
            raise AccountLockError(f"Failed to lock {username}: {result.error_message}")
        logger.info("Locked account %s", username)
        return True

    def add_to_group(self, username: str, group: str) -> None:
        """Add an account to a supplementary group, keeping existing memberships.

        Raises:
            GroupMembershipError: If usermod fails.
        """
        result = self._execute(["usermod", "-aG", group, username])
        if not result.success:
            raise GroupMembershipError(
                f"Failed to add {username} to {group}: {result.error_message}"
            )
        logger.debug("Added %s to group %s", username, group)
