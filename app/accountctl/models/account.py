"""Account domain models.

Desired accounts come from the configuration document; observed accounts
are inferred from directories present under each category base directory.
Both are recomputed on every run.
"""

from dataclasses import dataclass, field

from accountctl.models.category import Category


@dataclass(frozen=True, slots=True)
class DesiredUser:
    """An account declared in the desired-state document.

    Attributes:
        username: Login name of the account.
        name: Display name stored in the account comment field.
        category: Category the account is declared under.
    """

    username: str
    name: str
    category: Category

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.username:
            msg = "Username cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ModeratorAssignment:
    """Authors whose public content a moderator may manage.

    Attributes:
        moderator: Moderator username.
        authors: Assigned author usernames, in document order without duplicates.
    """

    moderator: str
    authors: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ObservedAccount:
    """An account inferred from a directory under a category base directory.

    Attributes:
        username: Directory name, taken as the username.
        category: Category whose base directory contains the entry.
    """

    username: str
    category: Category


@dataclass(frozen=True, slots=True)
class DesiredState:
    """Complete desired state for one reconciliation pass.

    Attributes:
        users: Declared accounts per category. Every category has an entry.
        assignments: Moderator author assignments keyed by moderator username.
    """

    users: dict[Category, tuple[DesiredUser, ...]]
    assignments: dict[str, ModeratorAssignment] = field(default_factory=dict)

    def users_in(self, category: Category) -> tuple[DesiredUser, ...]:
        """Get declared accounts of a category.

        Args:
            category: Category to look up.

        Returns:
            Declared accounts, empty if the category has none.
        """
        return self.users.get(category, ())

    def usernames_in(self, category: Category) -> set[str]:
        """Get the set of declared usernames of a category."""
        return {user.username for user in self.users_in(category)}

    def assignment_for(self, moderator: str) -> ModeratorAssignment:
        """Get the assignment of a moderator.

        A moderator with no assignment entry gets an empty author set so
        that its link directory is emptied rather than left stale.

        Args:
            moderator: Moderator username.

        Returns:
            The moderator's assignment, possibly empty.
        """
        return self.assignments.get(moderator, ModeratorAssignment(moderator=moderator))

    @property
    def user_count(self) -> int:
        """Total number of declared accounts across all categories."""
        return sum(len(users) for users in self.users.values())
