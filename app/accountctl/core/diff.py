"""Diff engine for comparing desired state with observed state.

This module provides the DiffEngine class that compares the accounts
declared in the desired-state document with the accounts inferred from
home directories on disk.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from accountctl.models.category import CATEGORY_ORDER, LOCKABLE_CATEGORIES

if TYPE_CHECKING:
    from accountctl.models.account import DesiredState
    from accountctl.models.category import Category
    from accountctl.scanners.base import Scanner


class DiffType(Enum):
    """Type of difference between desired and observed state.

    Attributes:
        REMOVED: Account has a home directory but is no longer declared.
             Action: Lock (USERS and AUTHORS only).
        NEW: Account is declared but has no home directory yet.
             Action: Create and provision.
    """

    REMOVED = "removed"
    NEW = "new"


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """Represents a single difference between desired and observed state.

    Attributes:
        username: Account name.
        category: Category the difference was found in.
        diff_type: Type of difference.
        protected: True if the account is exempt from locking.
    """

    username: str
    category: Category
    diff_type: DiffType
    protected: bool = False


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Result of comparing desired state with observed state.

    Attributes:
        removed: Observed USERS/AUTHORS accounts no longer declared.
        new: Declared accounts without a home directory.
    """

    removed: tuple[DiffEntry, ...]
    new: tuple[DiffEntry, ...]

    @property
    def is_in_sync(self) -> bool:
        """Check if no account needs to be created or locked."""
        return not (self.removed or self.new)

    @property
    def to_lock(self) -> tuple[DiffEntry, ...]:
        """Removed accounts that will actually be locked."""
        return tuple(e for e in self.removed if not e.protected)

    @property
    def total_changes(self) -> int:
        """Total number of differences found."""
        return len(self.removed) + len(self.new)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "in_sync": self.is_in_sync,
            "summary": {
                "removed": len(self.removed),
                "new": len(self.new),
                "total": self.total_changes,
            },
            "removed": [_entry_to_dict(e) for e in self.removed],
            "new": [_entry_to_dict(e) for e in self.new],
        }


def _entry_to_dict(entry: DiffEntry) -> dict[str, object]:
    result: dict[str, object] = {
        "username": entry.username,
        "category": entry.category.value,
    }
    if entry.protected:
        result["protected"] = True
    return result


class DiffEngine:
    """Engine for computing differences between desired and observed state.

    Only USERS and AUTHORS are checked for removed accounts. Accounts of
    MODS and ADMINS are never reported as removed.

    Example:
        >>> engine = DiffEngine(desired, protected_identities={"root"})
        >>> result = engine.compute_diff(HomeDirectoryScanner(registry))
        >>> for entry in result.to_lock:
        ...     print(entry.username)
    """

    def __init__(
        self,
        desired: DesiredState,
        protected_identities: Iterable[str] = (),
    ) -> None:
        """Initialize the DiffEngine.

        Args:
            desired: The desired state of this run.
            protected_identities: Usernames exempt from locking.
        """
        self.desired = desired
        self._protected = frozenset(protected_identities)

    def compute_diff(self, scanner: Scanner) -> DiffResult:
        """Compare the desired state against the directories on disk.

        Args:
            scanner: Scanner giving the observed accounts.

        Returns:
            DiffResult with entries sorted by category order and username.
        """
        removed: list[DiffEntry] = []
        new: list[DiffEntry] = []

        for category in CATEGORY_ORDER:
            observed = scanner.scan_usernames(category)
            declared = self.desired.usernames_in(category)

            if category in LOCKABLE_CATEGORIES:
                for username in sorted(observed - declared):
                    removed.append(
                        DiffEntry(
                            username=username,
                            category=category,
                            diff_type=DiffType.REMOVED,
                            protected=username in self._protected,
                        )
                    )

            for user in self.desired.users_in(category):
                if user.username not in observed:
                    new.append(
                        DiffEntry(username=user.username, category=category, diff_type=DiffType.NEW)
                    )

        return DiffResult(removed=tuple(removed), new=tuple(new))
