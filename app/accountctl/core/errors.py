"""Exception hierarchy for accountctl.

Fatal errors abort the whole reconciliation pass. Recoverable errors are
caught at the individual action, logged, and the pass continues.
"""


class AccountctlError(Exception):
    """Base exception for accountctl errors."""


class FatalError(AccountctlError):
    """Base for errors that abort the reconciliation pass."""


class RecoverableError(AccountctlError):
    """Base for per-item errors that are logged and skipped."""


class ConfigParseError(FatalError):
    """Raised when the desired-state document cannot be parsed or validated."""


class ConfigNotFoundError(ConfigParseError):
    """Raised when the desired-state document does not exist."""


class SettingsError(FatalError):
    """Raised when the settings file is invalid."""


class AccountCreationError(FatalError):
    """Raised when a required account cannot be created."""


class AccountUnlockError(RecoverableError):
    """Raised when an existing account cannot be unlocked."""


class AccountLockError(RecoverableError):
    """Raised when a removed account cannot be locked."""


class GroupCreationError(RecoverableError):
    """Raised when a category group cannot be created."""


class GroupMembershipError(RecoverableError):
    """Raised when an account cannot be added to a group."""


class ACLGrantError(RecoverableError):
    """Raised when an ACL entry cannot be applied."""


class HomeDirectoryError(RecoverableError):
    """Raised when a home directory or link directory cannot be prepared."""
