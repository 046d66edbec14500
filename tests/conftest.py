"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from accountctl.core.desired import parse_desired_state
from accountctl.core.registry import CategoryBinding, CategoryRegistry
from accountctl.models.account import DesiredState
from accountctl.models.category import Category


@pytest.fixture
def registry(tmp_path: Path) -> CategoryRegistry:
    """Category registry with base directories under tmp_path."""
    return CategoryRegistry(
        {
            Category.USERS: CategoryBinding(group="g_user", base_dir=tmp_path / "users"),
            Category.AUTHORS: CategoryBinding(group="g_author", base_dir=tmp_path / "authors"),
            Category.MODS: CategoryBinding(group="g_mod", base_dir=tmp_path / "mods"),
            Category.ADMINS: CategoryBinding(group="g_admin", base_dir=tmp_path / "admin"),
        }
    )


@pytest.fixture
def sample_yaml() -> str:
    """Desired-state document with one account per category."""
    return """\
users:
  - username: carol
    name: Carol C
authors:
  - username: alice
    name: Alice A
mods:
  - username: bob
    name: Bob B
admins:
  - username: dave
    name: Dave D
moderators:
  - username: bob
    authors: [alice]
"""


@pytest.fixture
def sample_state() -> DesiredState:
    """Parsed form of the sample document."""
    return parse_desired_state(
        {
            "users": [{"username": "carol", "name": "Carol C"}],
            "authors": [{"username": "alice", "name": "Alice A"}],
            "mods": [{"username": "bob", "name": "Bob B"}],
            "admins": [{"username": "dave", "name": "Dave D"}],
            "moderators": [{"username": "bob", "authors": ["alice"]}],
        }
    )


@pytest.fixture
def make_author(registry: CategoryRegistry) -> Callable[..., Path]:
    """Factory creating an author home (and public directory) on disk."""

    def _make(author: str, public: bool = True) -> Path:
        home = registry.home_for(Category.AUTHORS, author)
        home.mkdir(parents=True, exist_ok=True)
        if public:
            (home / "public").mkdir(exist_ok=True)
        return home

    return _make


@pytest.fixture
def settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Settings file pointing every category below tmp_path.

    ACCOUNTCTL_SETTINGS is set so the CLI picks it up.
    """
    path = tmp_path / "settings.toml"
    lines = [
        f'desired_state_path = "{tmp_path / "users.yaml"}"',
        'protected_identities = ["root"]',
    ]
    for category, group, dirname in (
        ("users", "g_user", "users"),
        ("authors", "g_author", "authors"),
        ("mods", "g_mod", "mods"),
        ("admins", "g_admin", "admin"),
    ):
        lines += ["", f"[categories.{category}]", f'group = "{group}"']
        lines.append(f'base_dir = "{tmp_path / dirname}"')
    path.write_text("\n".join(lines) + "\n")
    monkeypatch.setenv("ACCOUNTCTL_SETTINGS", str(path))
    return path
