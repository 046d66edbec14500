"""Abstract base class for observed-state scanners.

This module defines the Scanner interface used to infer which accounts
were previously provisioned.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from accountctl.models.account import ObservedAccount
from accountctl.models.category import Category


class Scanner(ABC):
    """Abstract base class for observed-state scanners.

    Scanners are read-only: they never modify the system.

    Example:
        >>> scanner = HomeDirectoryScanner(registry)
        >>> for account in scanner.scan(Category.AUTHORS):
        ...     print(account.username)
    """

    @abstractmethod
    def scan(self, category: Category) -> Iterator[ObservedAccount]:
        """Yield the observed accounts of a category.

        Args:
            category: Category to scan.

        Yields:
            ObservedAccount for each account found.
        """

    def scan_usernames(self, category: Category) -> set[str]:
        """Collect the observed usernames of a category."""
        return {account.username for account in self.scan(category)}

    def scan_many(self, categories: Iterable[Category]) -> dict[Category, list[ObservedAccount]]:
        """Scan several categories.

        Args:
            categories: Categories to scan.

        Returns:
            Observed accounts keyed by category.
        """
        return {category: list(self.scan(category)) for category in categories}
