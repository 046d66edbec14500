"""Action planning from desired state and diff results.

Pure business logic converting a desired state and its diff against the
observed state into the ordered list of reconciliation actions:

1. lock removed USERS/AUTHORS (protected identities become skips)
2. ensure category groups
3. per category in order: create-or-unlock, then provision home
4. rebuild moderator link directories
5. rebuild user all_blogs directories
6. grant admin access

This order guarantees author public directories exist before any link
or ACL step reads them.
"""

from accountctl.core.diff import DiffResult
from accountctl.models.account import DesiredState
from accountctl.models.action import Action, ActionType
from accountctl.models.category import CATEGORY_ORDER, Category


def build_plan(desired: DesiredState, diff_result: DiffResult) -> list[Action]:
    """Convert a desired state and diff result into ordered actions.

    Args:
        desired: The desired state of this run.
        diff_result: Result from DiffEngine.compute_diff().

    Returns:
        List of Action objects to execute, in execution order.
    """
    actions: list[Action] = []

    for entry in diff_result.removed:
        if entry.protected:
            actions.append(
                Action(
                    action_type=ActionType.SKIP_LOCK,
                    username=entry.username,
                    category=entry.category,
                    reason="Protected identity is never locked",
                )
            )
        else:
            actions.append(
                Action(
                    action_type=ActionType.LOCK,
                    username=entry.username,
                    category=entry.category,
                    reason="No longer declared",
                )
            )

    actions.append(Action(action_type=ActionType.ENSURE_GROUPS, reason="Category groups"))

    new_accounts = {(e.category, e.username) for e in diff_result.new}
    for category in CATEGORY_ORDER:
        for user in desired.users_in(category):
            is_new = (category, user.username) in new_accounts
            actions.append(
                Action(
                    action_type=ActionType.ENSURE_ACCOUNT,
                    username=user.username,
                    category=category,
                    reason="Create account" if is_new else "Create or unlock account",
                )
            )
            actions.append(
                Action(
                    action_type=ActionType.PROVISION_HOME,
                    username=user.username,
                    category=category,
                    reason="Home directory and permissions",
                )
            )

    for user in desired.users_in(Category.MODS):
        authors = desired.assignment_for(user.username).authors
        actions.append(
            Action(
                action_type=ActionType.LINK_MODERATOR,
                username=user.username,
                category=Category.MODS,
                reason=f"Authors: {', '.join(authors)}" if authors else "No assigned authors",
            )
        )

    for user in desired.users_in(Category.USERS):
        actions.append(
            Action(
                action_type=ActionType.LINK_ALL_BLOGS,
                username=user.username,
                category=Category.USERS,
                reason="Every author on disk",
            )
        )

    for user in desired.users_in(Category.ADMINS):
        actions.append(
            Action(
                action_type=ActionType.GRANT_ADMIN,
                username=user.username,
                category=Category.ADMINS,
                reason="All groups and base directories",
            )
        )

    return actions
