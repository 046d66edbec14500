"""Category registry.

Maps each category to its OS group and base directory. The mapping is
total over the Category enumeration; asking for a category that is not
registered is a programming error.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from accountctl.models.category import CATEGORY_ORDER, Category

# Fixed names inside home directories
BLOGS_DIR_NAME = "blogs"
PUBLIC_DIR_NAME = "public"
ALL_BLOGS_DIR_NAME = "all_blogs"

if TYPE_CHECKING:
    from accountctl.core.settings import Settings


@dataclass(frozen=True, slots=True)
class CategoryBinding:
    """Group and base directory bound to one category."""

    group: str
    base_dir: Path


class CategoryRegistry:
    """Static mapping from category to group name and base directory.

    Example:
        >>> registry = CategoryRegistry.default()
        >>> registry.group_for(Category.MODS)
        'g_mod'
        >>> registry.home_for(Category.AUTHORS, "alice")
        PosixPath('/home/authors/alice')
    """

    def __init__(self, bindings: dict[Category, CategoryBinding]) -> None:
        """Initialize the registry.

        Args:
            bindings: Binding for every category.

        Raises:
            ValueError: If any category has no binding.
        """
        missing = [c.value for c in CATEGORY_ORDER if c not in bindings]
        if missing:
            msg = f"Categories without group/directory binding: {', '.join(missing)}"
            raise ValueError(msg)
        self._bindings = dict(bindings)

    @classmethod
    def from_settings(cls, settings: Settings) -> CategoryRegistry:
        """Build a registry from settings."""
        return cls(
            {
                category: CategoryBinding(group=binding.group, base_dir=binding.base_dir)
                for category, binding in settings.categories.items()
            }
        )

    @classmethod
    def default(cls) -> CategoryRegistry:
        """Build a registry with the built-in groups and directories."""
        from accountctl.core.settings import Settings

        return cls.from_settings(Settings())

    def group_for(self, category: Category) -> str:
        """Get the OS group bound to a category."""
        return self._bindings[category].group

    def base_dir_for(self, category: Category) -> Path:
        """Get the base directory bound to a category."""
        return self._bindings[category].base_dir

    def home_for(self, category: Category, username: str) -> Path:
        """Get the home directory of an account of a category."""
        return self.base_dir_for(category) / username

    @property
    def groups(self) -> list[str]:
        """All category groups, in category order."""
        return [self.group_for(c) for c in CATEGORY_ORDER]

    @property
    def base_dirs(self) -> list[Path]:
        """All base directories, in category order."""
        return [self.base_dir_for(c) for c in CATEGORY_ORDER]
