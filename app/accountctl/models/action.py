"""Action models for reconciliation steps.

This module defines data structures for representing the corrective
actions of a reconciliation pass and their execution results.
"""

from dataclasses import dataclass
from enum import Enum

from accountctl.models.category import Category


class ActionType(Enum):
    """Type of reconciliation action.

    Attributes:
        LOCK: Expire an account that was removed from the document.
        SKIP_LOCK: Lock requested for a protected identity; reported, not executed.
        ENSURE_GROUPS: Create missing category groups.
        ENSURE_ACCOUNT: Create an account, or unlock it if it already exists.
        PROVISION_HOME: Create and normalize a home directory and its sub-tree.
        LINK_MODERATOR: Rebuild a moderator's author link directory.
        LINK_ALL_BLOGS: Rebuild a user's all_blogs link directory.
        GRANT_ADMIN: Grant an admin group membership and ACLs everywhere.
    """

    LOCK = "lock"
    SKIP_LOCK = "skip-lock"
    ENSURE_GROUPS = "groups"
    ENSURE_ACCOUNT = "account"
    PROVISION_HOME = "home"
    LINK_MODERATOR = "link-mod"
    LINK_ALL_BLOGS = "link-blogs"
    GRANT_ADMIN = "grant"


@dataclass(frozen=True, slots=True)
class Action:
    """Represents a single reconciliation step to be executed.

    Attributes:
        action_type: The kind of step.
        username: Account the step applies to (empty for ENSURE_GROUPS).
        category: Category of the account, if any.
        reason: Optional explanation for why this step is taken.
    """

    action_type: ActionType
    username: str = ""
    category: Category | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.username and self.action_type != ActionType.ENSURE_GROUPS:
            msg = f"Username cannot be empty for {self.action_type.value} action"
            raise ValueError(msg)

    @property
    def is_lock(self) -> bool:
        """Check if this action locks an account."""
        return self.action_type == ActionType.LOCK

    @property
    def is_link(self) -> bool:
        """Check if this action rebuilds a link directory."""
        return self.action_type in (ActionType.LINK_MODERATOR, ActionType.LINK_ALL_BLOGS)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing a reconciliation action.

    Attributes:
        action: The action that was executed.
        success: Whether the action completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the action failed.
    """

    action: Action
    success: bool
    message: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
