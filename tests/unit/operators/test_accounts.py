"""Unit tests for AccountProvisioner.

Command execution and the account/group databases are mocked.
"""

from unittest.mock import patch

import pytest

from accountctl.core.errors import (
    AccountCreationError,
    AccountLockError,
    AccountUnlockError,
    GroupCreationError,
    GroupMembershipError,
)
from accountctl.core.registry import CategoryRegistry
from accountctl.models.account import DesiredUser
from accountctl.models.category import Category
from accountctl.operators.accounts import AccountProvisioner
from accountctl.utils.shell import CommandResult

OK = CommandResult(stdout="", stderr="", returncode=0)
FAIL = CommandResult(stdout="", stderr="usermod: user busy", returncode=8)


class TestAccountProvisioner:
    """Tests for AccountProvisioner class."""

    @pytest.fixture
    def provisioner(self, registry: CategoryRegistry) -> AccountProvisioner:
        """Create AccountProvisioner protecting root."""
        return AccountProvisioner(registry, protected_identities=["root"])

    def test_is_available(self, provisioner: AccountProvisioner) -> None:
        """is_available requires groupadd, useradd and usermod."""
        with patch("accountctl.operators.accounts.command_exists", return_value=True):
            assert provisioner.is_available() is True
        with patch("accountctl.operators.accounts.command_exists", return_value=False):
            assert provisioner.is_available() is False

    def test_account_exists(self, provisioner: AccountProvisioner) -> None:
        """account_exists reflects the password database."""
        with patch("accountctl.operators.accounts.pwd.getpwnam", side_effect=KeyError("x")):
            assert provisioner.account_exists("ghost") is False
        with patch("accountctl.operators.accounts.pwd.getpwnam"):
            assert provisioner.account_exists("alice") is True


class TestLock:
    """Tests for AccountProvisioner.lock()."""

    def test_lock_sets_past_expiry(self, registry: CategoryRegistry) -> None:
        """lock() runs usermod -e 1."""
        provisioner = AccountProvisioner(registry)
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            assert provisioner.lock("eve") is True

        assert mock_run.call_args[0][0] == ["usermod", "-e", "1", "eve"]

    def test_protected_identity_never_locked(self, registry: CategoryRegistry) -> None:
        """Protected identities are skipped without running anything."""
        provisioner = AccountProvisioner(registry, protected_identities=["root"])
        with patch("accountctl.operators.base.run_command") as mock_run:
            assert provisioner.lock("root") is False

        mock_run.assert_not_called()

    def test_lock_failure(self, registry: CategoryRegistry) -> None:
        """A usermod failure raises AccountLockError."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.base.run_command", return_value=FAIL),
            pytest.raises(AccountLockError, match="user busy"),
        ):
            provisioner.lock("eve")

    def test_dry_run_does_not_execute(self, registry: CategoryRegistry) -> None:
        """Dry-run mode only logs the command."""
        provisioner = AccountProvisioner(registry, dry_run=True)
        with patch("accountctl.operators.base.run_command") as mock_run:
            assert provisioner.lock("eve") is True

        mock_run.assert_not_called()


class TestCreateOrUnlock:
    """Tests for AccountProvisioner.create_or_unlock()."""

    @pytest.fixture
    def author(self) -> DesiredUser:
        """Declared author account."""
        return DesiredUser(username="alice", name="Alice A", category=Category.AUTHORS)

    def test_creates_missing_account(
        self, registry: CategoryRegistry, author: DesiredUser
    ) -> None:
        """A missing account is created with home, comment and category group."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.accounts.pwd.getpwnam", side_effect=KeyError("alice")),
            patch("accountctl.operators.base.run_command", return_value=OK) as mock_run,
        ):
            assert provisioner.create_or_unlock(author) == "created"

        assert mock_run.call_args[0][0] == [
            "useradd",
            "-m",
            "-d",
            str(registry.home_for(Category.AUTHORS, "alice")),
            "-c",
            "Alice A",
            "-G",
            "g_author",
            "alice",
        ]

    def test_unlocks_existing_account(
        self, registry: CategoryRegistry, author: DesiredUser
    ) -> None:
        """An existing account has its expiry date cleared."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.accounts.pwd.getpwnam"),
            patch("accountctl.operators.base.run_command", return_value=OK) as mock_run,
        ):
            assert provisioner.create_or_unlock(author) == "unlocked"

        assert mock_run.call_args[0][0] == ["usermod", "-e", "", "alice"]

    def test_creation_failure_is_fatal(
        self, registry: CategoryRegistry, author: DesiredUser
    ) -> None:
        """A useradd failure raises AccountCreationError."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.accounts.pwd.getpwnam", side_effect=KeyError("alice")),
            patch("accountctl.operators.base.run_command", return_value=FAIL),
            pytest.raises(AccountCreationError, match="alice"),
        ):
            provisioner.create_or_unlock(author)

    def test_unlock_failure(self, registry: CategoryRegistry, author: DesiredUser) -> None:
        """A usermod failure on an existing account raises AccountUnlockError."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.accounts.pwd.getpwnam"),
            patch("accountctl.operators.base.run_command", return_value=FAIL),
            pytest.raises(AccountUnlockError),
        ):
            provisioner.create_or_unlock(author)


class TestGroups:
    """Tests for group creation and membership."""

    def test_ensure_groups_creates_only_missing(self, registry: CategoryRegistry) -> None:
        """Existing groups are left alone."""
        provisioner = AccountProvisioner(registry)

        def getgrnam(name: str) -> object:
            if name in ("g_user", "g_admin"):
                return object()
            raise KeyError(name)

        with (
            patch("accountctl.operators.accounts.grp.getgrnam", side_effect=getgrnam),
            patch("accountctl.operators.base.run_command", return_value=OK) as mock_run,
        ):
            created = provisioner.ensure_groups()

        assert created == ["g_author", "g_mod"]
        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["groupadd", "g_author"],
            ["groupadd", "g_mod"],
        ]

    def test_ensure_groups_tries_all_before_failing(self, registry: CategoryRegistry) -> None:
        """A failing group does not stop the others."""
        provisioner = AccountProvisioner(registry)
        results = [OK, FAIL, OK, OK]

        with (
            patch("accountctl.operators.accounts.grp.getgrnam", side_effect=KeyError("g")),
            patch("accountctl.operators.base.run_command", side_effect=results) as mock_run,
            pytest.raises(GroupCreationError, match="g_author"),
        ):
            provisioner.ensure_groups()

        assert mock_run.call_count == 4

    def test_add_to_group(self, registry: CategoryRegistry) -> None:
        """add_to_group appends a supplementary group."""
        provisioner = AccountProvisioner(registry)
        with patch("accountctl.operators.base.run_command", return_value=OK) as mock_run:
            provisioner.add_to_group("dave", "g_mod")

        assert mock_run.call_args[0][0] == ["usermod", "-aG", "g_mod", "dave"]

    def test_add_to_group_failure(self, registry: CategoryRegistry) -> None:
        """A usermod failure raises GroupMembershipError."""
        provisioner = AccountProvisioner(registry)
        with (
            patch("accountctl.operators.base.run_command", return_value=FAIL),
            pytest.raises(GroupMembershipError),
        ):
            provisioner.add_to_group("dave", "g_mod")
