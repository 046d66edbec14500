"""Account category model.

This module defines the closed set of user categories. Each category is
bound to exactly one OS group and one base directory by the
CategoryRegistry.
"""

from enum import Enum


class Category(str, Enum):
    """User category declared in the desired-state document.

    The value is the name of the document section listing the accounts
    of this category.

    Attributes:
        USERS: Plain users who read every author's public content.
        AUTHORS: Authors owning a private blogs and a public directory.
        MODS: Moderators with write access to assigned authors.
        ADMINS: Administrators with full access to every home tree.
    """

    USERS = "users"
    AUTHORS = "authors"
    MODS = "mods"
    ADMINS = "admins"


# Processing order for provisioning (also the document section order).
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.USERS,
    Category.AUTHORS,
    Category.MODS,
    Category.ADMINS,
)

# Categories whose observed accounts are locked when dropped from the document.
LOCKABLE_CATEGORIES: tuple[Category, ...] = (Category.USERS, Category.AUTHORS)
