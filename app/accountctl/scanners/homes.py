"""Home directory scanner.

Infers previously provisioned accounts from the directories present
directly under each category base directory. The account database is not
consulted: a directory is the proxy for "was provisioned before".
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from accountctl.core.registry import PUBLIC_DIR_NAME, CategoryRegistry
from accountctl.models.account import ObservedAccount
from accountctl.models.category import Category
from accountctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


class HomeDirectoryScanner(Scanner):
    """Lists account directories under category base directories.

    Args:
        registry: Category registry giving the base directory of each category.
    """

    def __init__(self, registry: CategoryRegistry) -> None:
        self._registry = registry

    def scan(self, category: Category) -> Iterator[ObservedAccount]:
        """Yield one ObservedAccount per subdirectory of the category base directory.

        A missing base directory yields nothing (first run on a fresh system).
        Only real directories count; files and symlinks are ignored.

        Args:
            category: Category to scan.

        Yields:
            ObservedAccount instances sorted by username.
        """
        for entry in self._subdirectories(self._registry.base_dir_for(category)):
            yield ObservedAccount(username=entry.name, category=category)

    def author_publics(self) -> list[tuple[str, Path]]:
        """List authors on disk that have a public directory.

        Driven by directories present under the authors base directory, not
        by the desired state, so locked authors stay listed. Unlike account
        scanning, a symlinked author directory counts.

        Returns:
            Sorted (author, public directory) pairs.
        """
        publics: list[tuple[str, Path]] = []
        for author_dir in self._subdirectories(
            self._registry.base_dir_for(Category.AUTHORS), follow_symlinks=True
        ):
            public_dir = author_dir / PUBLIC_DIR_NAME
            if public_dir.is_dir():
                publics.append((author_dir.name, public_dir))
        return publics

    def _subdirectories(self, base: Path, follow_symlinks: bool = False) -> list[Path]:
        if not base.is_dir():
            logger.debug("Base directory %s does not exist", base)
            return []

        try:
            entries = sorted(base.iterdir())
        except PermissionError:
            logger.warning("Permission denied scanning directory: %s", base)
            return []

        return [
            entry
            for entry in entries
            if entry.is_dir() and (follow_symlinks or not entry.is_symlink())
        ]
