"""Unit tests for the category registry."""

from pathlib import Path

import pytest

from accountctl.core.registry import CategoryBinding, CategoryRegistry
from accountctl.core.settings import CategorySettings, Settings
from accountctl.models.category import Category


class TestCategoryRegistry:
    """Tests for CategoryRegistry."""

    def test_default_bindings(self) -> None:
        """The default registry uses the built-in groups and directories."""
        registry = CategoryRegistry.default()

        assert registry.groups == ["g_user", "g_author", "g_mod", "g_admin"]
        assert registry.base_dirs == [
            Path("/home/users"),
            Path("/home/authors"),
            Path("/home/mods"),
            Path("/home/admin"),
        ]

    def test_home_for(self, registry: CategoryRegistry, tmp_path: Path) -> None:
        """Homes live directly under the category base directory."""
        assert registry.home_for(Category.AUTHORS, "alice") == tmp_path / "authors" / "alice"

    def test_missing_binding(self, tmp_path: Path) -> None:
        """Every category must be bound."""
        with pytest.raises(ValueError, match="mods"):
            CategoryRegistry(
                {
                    Category.USERS: CategoryBinding("g_user", tmp_path / "u"),
                    Category.AUTHORS: CategoryBinding("g_author", tmp_path / "a"),
                    Category.ADMINS: CategoryBinding("g_admin", tmp_path / "ad"),
                }
            )

    def test_from_settings(self) -> None:
        """Overrides from settings reach the registry."""
        settings = Settings(
            categories={
                Category.USERS: CategorySettings(group="readers", base_dir=Path("/srv/readers"))
            }
        )

        registry = CategoryRegistry.from_settings(settings)

        assert registry.group_for(Category.USERS) == "readers"
        assert registry.group_for(Category.AUTHORS) == "g_author"
