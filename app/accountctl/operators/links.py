"""Symlink graph operator.

Rebuilds the link directories that expose author public directories:

- moderators: ``<mods>/<moderator>/<author> -> <authors>/<author>/public``
  for every assigned author, with rwx for the moderator group;
- users: ``<users>/<user>/all_blogs/<author> -> <authors>/<author>/public``
  for every author on disk, with r-x for the user.

Each rebuild clears the existing symlinks of the link directory first, so
the link set always matches the current assignments.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from accountctl.core.errors import ACLGrantError, HomeDirectoryError
from accountctl.core.registry import ALL_BLOGS_DIR_NAME, PUBLIC_DIR_NAME, CategoryRegistry
from accountctl.models.account import ModeratorAssignment
from accountctl.models.category import Category
from accountctl.operators.acl import AclManager, group_entry, user_entry
from accountctl.operators.base import Operator, change_owner
from accountctl.scanners.homes import HomeDirectoryScanner

logger = logging.getLogger(__name__)

MODERATOR_PERMS = "rwx"
READER_PERMS = "r-x"


@dataclass(slots=True)
class LinkReport:
    """Outcome of rebuilding one link directory.

    Attributes:
        directory: The link directory.
        removed: Number of stale symlinks removed.
        linked: Authors linked, in creation order.
        errors: Per-author failures (link creation or ACL grant).
    """

    directory: Path
    removed: int = 0
    linked: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every link and grant was applied."""
        return not self.errors

    def summary(self) -> str:
        """One-line description of the rebuild."""
        authors = ", ".join(self.linked) if self.linked else "none"
        return f"{len(self.linked)} link(s) in {self.directory} [{authors}]"


def clear_symlinks(directory: Path) -> int:
    """Remove every symlink directly inside a directory.

    Regular files and directories are left untouched.

    Args:
        directory: Directory to clear.

    Returns:
        Number of symlinks removed.
    """
    removed = 0
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink():
            entry.unlink()
            removed += 1
    return removed


class SymlinkGraphBuilder(Operator):
    """Rebuilds moderator and all_blogs link directories.

    Args:
        registry: Category registry giving base directories and groups.
        scanner: Scanner listing the authors present on disk.
        acl: ACL operator used to grant access on linked public directories.
        dry_run: If True, only log what would be done.
    """

    required_tools = AclManager.required_tools

    def __init__(
        self,
        registry: CategoryRegistry,
        scanner: HomeDirectoryScanner,
        acl: AclManager,
        dry_run: bool = False,
    ) -> None:
        super().__init__(dry_run)
        self._registry = registry
        self._scanner = scanner
        self._acl = acl

    def is_available(self) -> bool:
        """Check if the ACL tooling needed for grants is available."""
        return self._acl.is_available()

    def public_dir(self, author: str) -> Path:
        """Get the public directory of an author."""
        return self._registry.home_for(Category.AUTHORS, author) / PUBLIC_DIR_NAME

    def rebuild_moderator_links(self, assignment: ModeratorAssignment) -> LinkReport:
        """Rebuild the link directory of a moderator.

        Authors whose public directory does not exist are skipped silently.

        Args:
            assignment: The moderator and its assigned authors.

        Returns:
            LinkReport of the rebuild.

        Raises:
            HomeDirectoryError: If the link directory cannot be prepared.
        """
        moderator = assignment.moderator
        link_dir = self._registry.home_for(Category.MODS, moderator)
        mod_group = self._registry.group_for(Category.MODS)

        targets: list[tuple[str, Path]] = []
        for author in assignment.authors:
            public = self.public_dir(author)
            if public.is_dir():
                targets.append((author, public))
            else:
                logger.debug("Skipping %s for %s: %s does not exist", author, moderator, public)

        return self._rebuild(link_dir, moderator, targets, group_entry(mod_group, MODERATOR_PERMS))

    def rebuild_all_blogs(self, username: str) -> LinkReport:
        """Rebuild the all_blogs directory of a user.

        Every author directory on disk with a public directory is linked,
        whether or not the author is still declared.

        Args:
            username: Plain user owning the all_blogs directory.

        Returns:
            LinkReport of the rebuild.

        Raises:
            HomeDirectoryError: If the all_blogs directory cannot be prepared.
        """
        link_dir = self._registry.home_for(Category.USERS, username) / ALL_BLOGS_DIR_NAME
        targets = self._scanner.author_publics()
        return self._rebuild(link_dir, username, targets, user_entry(username, READER_PERMS))

    def _rebuild(
        self,
        link_dir: Path,
        owner: str,
        targets: list[tuple[str, Path]],
        acl_entry: str,
    ) -> LinkReport:
        report = LinkReport(directory=link_dir)

        if self._dry_run:
            for name, target in targets:
                logger.info("Dry-run: would link %s -> %s", link_dir / name, target)
                report.linked.append(name)
            return report

        try:
            link_dir.mkdir(parents=True, exist_ok=True)
            change_owner(link_dir, owner)
            report.removed = clear_symlinks(link_dir)
        except (OSError, LookupError) as e:
            raise HomeDirectoryError(f"Failed to prepare link directory {link_dir}: {e}") from e

        for name, target in targets:
            link = link_dir / name
            try:
                link.symlink_to(target)
                change_owner(link, owner)
            except (OSError, LookupError) as e:
                logger.warning("Failed to link %s -> %s: %s", link, target, e)
                report.errors.append(f"{name}: {e}")
                continue
            report.linked.append(name)

            try:
                self._acl.grant_inherited(target, acl_entry)
            except ACLGrantError as e:
                logger.warning("Link %s created but grant failed: %s", link, e)
                report.errors.append(f"{name}: {e}")

        logger.info(
            "Rebuilt %s: removed %d, linked %d", link_dir, report.removed, len(report.linked)
        )
        return report
