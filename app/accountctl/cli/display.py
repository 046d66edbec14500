"""Plan and result rendering shared by the CLI commands."""

from rich.markup import escape
from rich.table import Table

from accountctl.core.reconcile import summarize
from accountctl.models.action import Action, ActionResult, ActionType
from accountctl.utils.formatting import console, print_success

# Style names are defined by accountctl.core.theme
_STEP_STYLE: dict[ActionType, str] = {
    ActionType.LOCK: "lock",
    ActionType.SKIP_LOCK: "muted",
    ActionType.ENSURE_GROUPS: "provision",
    ActionType.ENSURE_ACCOUNT: "create",
    ActionType.PROVISION_HOME: "provision",
    ActionType.LINK_MODERATOR: "link",
    ActionType.LINK_ALL_BLOGS: "link",
    ActionType.GRANT_ADMIN: "grant",
}


def _styled(action_type: ActionType) -> str:
    style = _STEP_STYLE[action_type]
    return f"[{style}]{action_type.value}[/{style}]"


def _table(title: str, *columns: str) -> Table:
    table = Table(title=title, header_style="bold_header", border_style="border")
    for column in columns:
        table.add_column(column, no_wrap=column == "Account")
    return table


def create_actions_table(actions: list[Action], dry_run: bool = False) -> Table:
    """Build the table of planned steps.

    Args:
        actions: Planned actions in execution order.
        dry_run: Whether the steps will only be simulated.

    Returns:
        Rich Table with one row per action.
    """
    table = _table(
        "Planned Actions (Dry Run)" if dry_run else "Planned Actions",
        "Step",
        "Category",
        "Account",
        "Reason",
    )
    for action in actions:
        table.add_row(
            _styled(action.action_type),
            action.category.value if action.category else "",
            action.username or "[muted]*[/muted]",
            f"[muted]{action.reason or ''}[/muted]",
        )
    return table


def create_results_table(results: list[ActionResult]) -> Table:
    """Build the table of executed steps, failures highlighted."""
    table = _table("Results", "", "Step", "Account", "Outcome")
    for result in results:
        if result.success:
            mark = "[success]OK[/success]"
            outcome = f"[muted]{escape(result.message or '')}[/muted]"
        else:
            mark = "[error]FAIL[/error]"
            outcome = f"[error]{escape(result.error or 'unknown error')}[/error]"
        table.add_row(mark, _styled(result.action.action_type), result.action.username, outcome)
    return table


def print_actions_summary(actions: list[Action]) -> None:
    """Print how many locks, accounts and link rebuilds are planned."""
    accounts = sum(1 for action in actions if action.action_type == ActionType.ENSURE_ACCOUNT)
    locks = sum(1 for action in actions if action.is_lock)
    links = sum(1 for action in actions if action.is_link)

    parts = [
        f"[{style}]{count} {label}[/{style}]"
        for style, count, label in (
            ("lock", locks, "to lock"),
            ("create", accounts, "account(s)"),
            ("link", links, "link director(ies)"),
        )
        if count
    ]
    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")


def print_results_summary(results: list[ActionResult]) -> None:
    """Print the succeeded/failed counts of a pass."""
    succeeded, failed = summarize(results)
    if not failed:
        print_success(f"All {succeeded} action(s) completed successfully.")
        return
    console.print(f"\n[success]{succeeded} succeeded[/success], [error]{failed} failed[/error]")
