"""Reconciliation driver.

Loads the desired state, scans the observed state, plans the corrective
actions and applies them in a fixed order. Fatal errors (unparseable
document, account creation failure) abort the pass; every other failure
is logged and recorded as a failed ActionResult, and the pass goes on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import assert_never

from accountctl.core.actions import build_plan
from accountctl.core.desired import load_desired_state
from accountctl.core.diff import DiffEngine, DiffResult
from accountctl.core.errors import RecoverableError
from accountctl.core.registry import CategoryRegistry
from accountctl.core.settings import Settings
from accountctl.models.account import DesiredState, DesiredUser
from accountctl.models.action import Action, ActionResult, ActionType
from accountctl.models.category import Category
from accountctl.operators.accounts import AccountProvisioner
from accountctl.operators.acl import AclManager
from accountctl.operators.admin import AdminAccessGrantor
from accountctl.operators.homes import HomeDirectoryManager
from accountctl.operators.links import SymlinkGraphBuilder
from accountctl.scanners.homes import HomeDirectoryScanner

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationPlan:
    """Desired state, diff and ordered actions of one pass."""

    desired: DesiredState
    diff: DiffResult
    actions: list[Action] = field(default_factory=list)


class Reconciler:
    """Orchestrates one reconciliation pass.

    Example:
        >>> reconciler = Reconciler.from_settings(load_settings())
        >>> plan = reconciler.plan(Path("../users.yaml"))
        >>> results = reconciler.execute(plan)
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        accounts: AccountProvisioner,
        homes: HomeDirectoryManager,
        links: SymlinkGraphBuilder,
        admin: AdminAccessGrantor,
        scanner: HomeDirectoryScanner,
    ) -> None:
        self.registry = registry
        self.accounts = accounts
        self.homes = homes
        self.links = links
        self.admin = admin
        self.scanner = scanner

    @classmethod
    def from_settings(cls, settings: Settings, dry_run: bool = False) -> Reconciler:
        """Wire up all components from settings.

        Args:
            settings: Effective settings.
            dry_run: If True, no component mutates the system.

        Returns:
            A ready-to-use Reconciler.
        """
        registry = CategoryRegistry.from_settings(settings)
        scanner = HomeDirectoryScanner(registry)
        acl = AclManager(dry_run=dry_run)
        accounts = AccountProvisioner(registry, settings.protected_identities, dry_run=dry_run)
        return cls(
            registry=registry,
            accounts=accounts,
            homes=HomeDirectoryManager(registry, dry_run=dry_run),
            links=SymlinkGraphBuilder(registry, scanner, acl, dry_run=dry_run),
            admin=AdminAccessGrantor(registry, accounts, acl),
            scanner=scanner,
        )

    def plan(self, source: Path) -> ReconciliationPlan:
        """Load the desired state and compute the actions of this pass.

        Nothing is mutated.

        Args:
            source: Desired-state document.

        Returns:
            ReconciliationPlan with the ordered actions.

        Raises:
            ConfigParseError: If the document cannot be loaded.
        """
        desired = load_desired_state(source)
        return self.plan_for(desired)

    def plan_for(self, desired: DesiredState) -> ReconciliationPlan:
        """Compute the actions for an already loaded desired state."""
        engine = DiffEngine(desired, self.accounts.protected_identities)
        diff_result = engine.compute_diff(self.scanner)
        actions = build_plan(desired, diff_result)
        logger.info(
            "Planned %d action(s) for %d declared account(s): %d to lock, %d new",
            len(actions),
            desired.user_count,
            len(diff_result.to_lock),
            len(diff_result.new),
        )
        return ReconciliationPlan(desired=desired, diff=diff_result, actions=actions)

    def execute(self, plan: ReconciliationPlan) -> list[ActionResult]:
        """Apply every action of a plan in order.

        Args:
            plan: Plan from :meth:`plan`.

        Returns:
            One ActionResult per action.

        Raises:
            AccountCreationError: If a declared account cannot be created.
                Remaining actions are not executed.
        """
        results: list[ActionResult] = []
        users = {
            (u.category, u.username): u
            for category_users in plan.desired.users.values()
            for u in category_users
        }

        for action in plan.actions:
            try:
                result = self._apply(action, plan.desired, users)
            except RecoverableError as e:
                logger.warning(
                    "%s failed for %s (%s): %s",
                    action.action_type.value,
                    action.username or "-",
                    action.category.value if action.category else "-",
                    e,
                )
                result = ActionResult(action=action, success=False, error=str(e))
            results.append(result)

        return results

    def missing_tools(self) -> list[str]:
        """List the tools of every operator that cannot be used.

        Returns:
            Tool names in operator order, empty if every operator is
            available.
        """
        missing: list[str] = []
        for operator in (self.accounts, self.homes, self.links):
            if operator.is_available():
                continue
            missing.extend(t for t in operator.required_tools if t not in missing)
        return missing

    def _apply(
        self,
        action: Action,
        desired: DesiredState,
        users: dict[tuple[Category, str], DesiredUser],
    ) -> ActionResult:
        match action.action_type:
            case ActionType.LOCK:
                self.accounts.lock(action.username)
                return ActionResult(action=action, success=True, message="Account expired")
            case ActionType.SKIP_LOCK:
                logger.info("Skipping lock for %s", action.username)
                return ActionResult(action=action, success=True, message="Protected, skipped")
            case ActionType.ENSURE_GROUPS:
                created = self.accounts.ensure_groups()
                message = f"Created {', '.join(created)}" if created else "All groups present"
                return ActionResult(action=action, success=True, message=message)
            case ActionType.ENSURE_ACCOUNT:
                outcome = self.accounts.create_or_unlock(users[(action.category, action.username)])
                return ActionResult(action=action, success=True, message=f"Account {outcome}")
            case ActionType.PROVISION_HOME:
                home = self.homes.provision_home(users[(action.category, action.username)])
                return ActionResult(action=action, success=True, message=str(home))
            case ActionType.LINK_MODERATOR:
                report = self.links.rebuild_moderator_links(
                    desired.assignment_for(action.username)
                )
                return _report_result(action, report.success, report.summary(), report.errors)
            case ActionType.LINK_ALL_BLOGS:
                report = self.links.rebuild_all_blogs(action.username)
                return _report_result(action, report.success, report.summary(), report.errors)
            case ActionType.GRANT_ADMIN:
                grant = self.admin.grant(action.username)
                message = f"{len(grant.groups)} group(s), {len(grant.paths)} tree(s)"
                return _report_result(action, grant.success, message, grant.errors)
            case _:
                assert_never(action.action_type)


def _report_result(
    action: Action, success: bool, message: str, errors: list[str]
) -> ActionResult:
    if success:
        return ActionResult(action=action, success=True, message=message)
    return ActionResult(action=action, success=False, message=message, error="; ".join(errors))


def summarize(results: list[ActionResult]) -> tuple[int, int]:
    """Count succeeded and failed results."""
    failed = sum(1 for r in results if r.failed)
    return len(results) - failed, failed
