"""System operators for executing reconciliation actions.

This module provides the components that mutate the account database and
the filesystem.
"""

from accountctl.operators.accounts import AccountProvisioner
from accountctl.operators.acl import AclManager
from accountctl.operators.admin import AdminAccessGrantor
from accountctl.operators.base import Operator
from accountctl.operators.homes import HomeDirectoryManager
from accountctl.operators.links import SymlinkGraphBuilder

__all__ = [
    "AccountProvisioner",
    "AclManager",
    "AdminAccessGrantor",
    "HomeDirectoryManager",
    "Operator",
    "SymlinkGraphBuilder",
]
