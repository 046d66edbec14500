"""Unit tests for account and action models."""

import pytest

from accountctl.models.account import DesiredState, DesiredUser, ModeratorAssignment
from accountctl.models.action import Action, ActionResult, ActionType
from accountctl.models.category import CATEGORY_ORDER, LOCKABLE_CATEGORIES, Category


class TestCategory:
    """Tests for Category enum."""

    def test_values_match_document_sections(self) -> None:
        """Category values are the document section names."""
        assert [c.value for c in CATEGORY_ORDER] == ["users", "authors", "mods", "admins"]

    def test_only_users_and_authors_are_lockable(self) -> None:
        """Mods and admins are never auto-locked."""
        assert set(LOCKABLE_CATEGORIES) == {Category.USERS, Category.AUTHORS}


class TestDesiredUser:
    """Tests for DesiredUser dataclass."""

    def test_empty_username_rejected(self) -> None:
        """DesiredUser requires a username."""
        with pytest.raises(ValueError, match="Username cannot be empty"):
            DesiredUser(username="", name="Nobody", category=Category.USERS)

    def test_is_frozen(self) -> None:
        """DesiredUser is immutable."""
        user = DesiredUser(username="carol", name="Carol", category=Category.USERS)
        with pytest.raises(AttributeError):
            user.username = "other"  # type: ignore[misc]


class TestDesiredState:
    """Tests for DesiredState lookups."""

    def test_missing_assignment_is_empty(self) -> None:
        """A moderator without an assignment gets an empty author set."""
        state = DesiredState(users={c: () for c in CATEGORY_ORDER})

        assignment = state.assignment_for("bob")

        assert assignment == ModeratorAssignment(moderator="bob", authors=())

    def test_usernames_in(self, sample_state: DesiredState) -> None:
        """usernames_in returns the declared names of a category."""
        assert sample_state.usernames_in(Category.AUTHORS) == {"alice"}
        assert sample_state.user_count == 4


class TestAction:
    """Tests for Action dataclass."""

    def test_username_required(self) -> None:
        """Actions other than ENSURE_GROUPS need a username."""
        with pytest.raises(ValueError, match="Username cannot be empty"):
            Action(action_type=ActionType.LOCK)

    def test_ensure_groups_without_username(self) -> None:
        """ENSURE_GROUPS applies to no single account."""
        action = Action(action_type=ActionType.ENSURE_GROUPS)
        assert action.username == ""

    def test_properties(self) -> None:
        """is_lock and is_link reflect the action type."""
        lock = Action(action_type=ActionType.LOCK, username="eve")
        link = Action(action_type=ActionType.LINK_ALL_BLOGS, username="carol")

        assert lock.is_lock and not lock.is_link
        assert link.is_link and not link.is_lock

    def test_result_failed(self) -> None:
        """ActionResult.failed is the negation of success."""
        action = Action(action_type=ActionType.LOCK, username="eve")
        assert ActionResult(action=action, success=False, error="boom").failed
        assert not ActionResult(action=action, success=True).failed
