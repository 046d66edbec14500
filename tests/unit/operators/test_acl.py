"""Unit tests for AclManager."""

from pathlib import Path
from unittest.mock import patch

import pytest

from accountctl.core.errors import ACLGrantError
from accountctl.operators.acl import AclManager, group_entry, user_entry
from accountctl.operators.base import COMMAND_TIMEOUT
from accountctl.utils.shell import CommandResult

OK = CommandResult(stdout="", stderr="", returncode=0)


def test_entries() -> None:
    """Entry helpers build setfacl syntax."""
    assert user_entry("carol", "r-x") == "u:carol:r-x"
    assert group_entry("g_mod", "rwx") == "g:g_mod:rwx"


class TestAclManager:
    """Tests for AclManager class."""

    def test_grant(self) -> None:
        """grant() runs setfacl -m."""
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            AclManager().grant(Path("/srv/x"), "u:carol:r-x")

        assert mock_run.call_args[0][0] == ["setfacl", "-m", "u:carol:r-x", "/srv/x"]

    def test_grant_recursive_default(self) -> None:
        """Flags for recursive and default grants come before -m."""
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            AclManager().grant(Path("/srv/x"), "u:dave:rwx", default=True, recursive=True)

        assert mock_run.call_args[0][0] == ["setfacl", "-R", "-d", "-m", "u:dave:rwx", "/srv/x"]

    def test_recursive_grant_has_no_timeout(self) -> None:
        """Recursive grants wait for setfacl; single-path grants are bounded."""
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            acl = AclManager()
            acl.grant(Path("/home/users"), "u:dave:rwx", recursive=True)
            acl.grant(Path("/srv/x"), "u:carol:r-x")

        assert mock_run.call_args_list[0].kwargs["timeout"] is None
        assert mock_run.call_args_list[1].kwargs["timeout"] == COMMAND_TIMEOUT

    def test_grant_inherited(self) -> None:
        """grant_inherited() applies the explicit then the default entry."""
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            AclManager().grant_inherited(Path("/srv/x"), "g:g_mod:rwx")

        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["setfacl", "-m", "g:g_mod:rwx", "/srv/x"],
            ["setfacl", "-d", "-m", "g:g_mod:rwx", "/srv/x"],
        ]

    def test_grant_failure(self) -> None:
        """A setfacl failure raises ACLGrantError."""
        failed = CommandResult(stdout="", stderr="Operation not supported", returncode=1)
        with (
            patch("accountctl.operators.base.run_command", return_value=failed),
            pytest.raises(ACLGrantError, match="Operation not supported"),
        ):
            AclManager().grant(Path("/srv/x"), "u:carol:r-x")

    def test_dry_run(self) -> None:
        """Dry-run grants execute nothing."""
        with patch("accountctl.operators.base.run_command") as mock_run:
            AclManager(dry_run=True).grant_inherited(Path("/srv/x"), "u:carol:r-x")

        mock_run.assert_not_called()
