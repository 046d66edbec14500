"""Administrator access operator.

Admins are added to every category group and get a recursive rwx ACL on
every base directory. Grants are additive; nothing is ever revoked.
"""

import logging
from dataclasses import dataclass, field

from accountctl.core.errors import ACLGrantError, GroupMembershipError
from accountctl.core.registry import CategoryRegistry
from accountctl.operators.accounts import AccountProvisioner
from accountctl.operators.acl import AclManager, user_entry

logger = logging.getLogger(__name__)

ADMIN_PERMS = "rwx"


@dataclass(slots=True)
class GrantReport:
    """Outcome of granting access to one admin.

    Attributes:
        username: Admin account.
        groups: Groups the admin was added to.
        paths: Base directories the ACL was applied to.
        errors: Failures, one per group or directory.
    """

    username: str
    groups: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every grant was applied."""
        return not self.errors


class AdminAccessGrantor:
    """Grants admins membership and ACLs across all category trees.

    Each step is best effort: a failure is logged and recorded, and the
    next group or directory is still processed.

    Args:
        registry: Category registry giving groups and base directories.
        accounts: Account operator used for group membership.
        acl: ACL operator used for recursive grants.
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        accounts: AccountProvisioner,
        acl: AclManager,
    ) -> None:
        self._registry = registry
        self._accounts = accounts
        self._acl = acl

    def grant(self, username: str) -> GrantReport:
        """Grant full access to an admin account."""
        report = GrantReport(username=username)

        for group in self._registry.groups:
            try:
                self._accounts.add_to_group(username, group)
            except GroupMembershipError as e:
                logger.warning("Admin %s: %s", username, e)
                report.errors.append(str(e))
            else:
                report.groups.append(group)

        entry = user_entry(username, ADMIN_PERMS)
        for base_dir in self._registry.base_dirs:
            try:
                self._acl.grant(base_dir, entry, recursive=True)
            except ACLGrantError as e:
                logger.warning("Admin %s: %s", username, e)
                report.errors.append(str(e))
            else:
                report.paths.append(str(base_dir))

        return report
