"""Tool settings.

Settings control where the desired-state document is read from, which
identities are never locked, and the group and base directory bound to
each category. They are stored as TOML and validated with Pydantic.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from accountctl.core.errors import SettingsError
from accountctl.core.paths import DEFAULT_DESIRED_STATE_PATH, get_settings_path
from accountctl.models.category import Category

logger = logging.getLogger(__name__)

# Superuser plus the hard-coded operator account.
DEFAULT_PROTECTED_IDENTITIES: tuple[str, ...] = ("root", "harishannavisamy")


class CategorySettings(BaseModel):
    """Group and base directory bound to a category."""

    model_config = ConfigDict(extra="forbid")

    group: Annotated[str, Field(min_length=1, description="OS group name")]
    base_dir: Annotated[Path, Field(description="Directory holding the category's homes")]


def _default_categories() -> dict[Category, CategorySettings]:
    return {
        Category.USERS: CategorySettings(group="g_user", base_dir=Path("/home/users")),
        Category.AUTHORS: CategorySettings(group="g_author", base_dir=Path("/home/authors")),
        Category.MODS: CategorySettings(group="g_mod", base_dir=Path("/home/mods")),
        Category.ADMINS: CategorySettings(group="g_admin", base_dir=Path("/home/admin")),
    }


class Settings(BaseModel):
    """Effective accountctl settings.

    Attributes:
        desired_state_path: Location of the desired-state YAML document.
        protected_identities: Usernames exempt from the lock action.
        categories: Group and base directory per category. Categories not
            listed in a settings file keep their defaults.
    """

    model_config = ConfigDict(extra="forbid")

    desired_state_path: Annotated[
        Path, Field(description="Desired-state document path")
    ] = DEFAULT_DESIRED_STATE_PATH
    protected_identities: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_PROTECTED_IDENTITIES),
            description="Usernames that are never locked",
        ),
    ]
    categories: Annotated[
        dict[Category, CategorySettings],
        Field(default_factory=_default_categories, description="Per-category bindings"),
    ]

    def model_post_init(self, __context: Any) -> None:
        """Fill in categories missing from a partial override."""
        defaults = _default_categories()
        for category, binding in defaults.items():
            self.categories.setdefault(category, binding)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file, falling back to defaults.

    Args:
        path: Settings file path. If None, uses the default location.

    Returns:
        Validated Settings. Defaults if the file does not exist.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to write.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings_to_dict(settings), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert settings to a dictionary suitable for TOML serialization.

    Args:
        settings: Settings to convert.

    Returns:
        Dictionary with plain string values.
    """
    return {
        "desired_state_path": str(settings.desired_state_path),
        "protected_identities": list(settings.protected_identities),
        "categories": {
            category.value: {"group": binding.group, "base_dir": str(binding.base_dir)}
            for category, binding in settings.categories.items()
        },
    }
