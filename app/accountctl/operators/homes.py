"""Home directory operator.

Creates home directories, applies the ownership and mode policy of each
category and builds the author blogs/public sub-tree.
"""

import logging
from pathlib import Path
from typing import assert_never

from accountctl.core.errors import HomeDirectoryError
from accountctl.core.registry import BLOGS_DIR_NAME, PUBLIC_DIR_NAME, CategoryRegistry
from accountctl.models.account import DesiredUser
from accountctl.models.category import Category
from accountctl.operators.base import Operator, change_owner

logger = logging.getLogger(__name__)

BLOGS_MODE = 0o700
PUBLIC_MODE = 0o755


def home_mode(category: Category) -> int:
    """Get the permission bits of a home directory for a category."""
    match category:
        case Category.USERS | Category.AUTHORS | Category.ADMINS:
            return 0o700
        case Category.MODS:
            return 0o750
        case _:
            assert_never(category)


class HomeDirectoryManager(Operator):
    """Creates and normalizes home directories.

    All operations are idempotent: re-applying them to a correct tree
    changes nothing.

    Args:
        registry: Category registry giving home locations.
        dry_run: If True, only log what would be done.
    """

    def __init__(self, registry: CategoryRegistry, dry_run: bool = False) -> None:
        super().__init__(dry_run)
        self._registry = registry

    def is_available(self) -> bool:
        """The filesystem is always available."""
        return True

    def provision_home(self, user: DesiredUser) -> Path:
        """Ensure the home directory (and author sub-tree) of an account.

        Args:
            user: Declared account.

        Returns:
            The home directory path.

        Raises:
            HomeDirectoryError: If a directory cannot be created or normalized.
        """
        home = self._registry.home_for(user.category, user.username)
        mode = home_mode(user.category)

        if self._dry_run:
            logger.info("Dry-run: would provision %s (mode %o)", home, mode)
            return home

        try:
            self._ensure_dir(home, user.username, mode)
            if user.category == Category.AUTHORS:
                self._ensure_author_tree(home, user.username)
        except (OSError, LookupError) as e:
            raise HomeDirectoryError(
                f"Failed to provision home of {user.username} ({user.category.value}): {e}"
            ) from e

        return home

    def _ensure_author_tree(self, home: Path, owner: str) -> None:
        """Create the private blogs and public directories of an author.

        Ownership is applied to the whole sub-tree so that content placed by
        root is handed back to the author.
        """
        for name, mode in ((BLOGS_DIR_NAME, BLOGS_MODE), (PUBLIC_DIR_NAME, PUBLIC_MODE)):
            path = home / name
            path.mkdir(parents=True, exist_ok=True)
            self._chown_tree(path, owner)
            path.chmod(mode)

    def _ensure_dir(self, path: Path, owner: str, mode: int) -> None:
        if not path.is_dir():
            logger.info("Creating directory %s", path)
        path.mkdir(parents=True, exist_ok=True)
        change_owner(path, owner)
        path.chmod(mode)

    def _chown_tree(self, root: Path, owner: str) -> None:
        change_owner(root, owner)
        for path in root.rglob("*"):
            change_owner(path, owner)
