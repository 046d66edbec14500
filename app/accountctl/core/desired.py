"""Desired-state document loading.

This module reads the users.yaml document and turns it into a
DesiredState: the declared accounts per category and the moderator
author assignments.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from accountctl.core.errors import ConfigNotFoundError, ConfigParseError
from accountctl.models.account import DesiredState, DesiredUser, ModeratorAssignment
from accountctl.models.category import CATEGORY_ORDER, Category
from accountctl.models.document import ModeratorEntry, UserEntry

logger = logging.getLogger(__name__)

MODERATORS_SECTION = "moderators"


def is_plain_name(name: str) -> bool:
    """Check if a name is usable as a single path component."""
    return bool(name) and "/" not in name and name not in (".", "..")


def load_desired_state(path: Path) -> DesiredState:
    """Load and validate the desired-state document.

    Args:
        path: Path to the YAML document.

    Returns:
        DesiredState with every category present.

    Raises:
        ConfigNotFoundError: If the document does not exist.
        ConfigParseError: If the YAML is invalid or an account section is malformed.
    """
    if not path.exists():
        raise ConfigNotFoundError(f"Desired-state document not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read {path}: {e}") from e

    return parse_desired_state(data)


def parse_desired_state(data: Any) -> DesiredState:
    """Build a DesiredState from an already-decoded document.

    Args:
        data: Decoded document. None (an empty file) is an empty state.

    Returns:
        DesiredState with every category present.

    Raises:
        ConfigParseError: If the document or an account section is malformed.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Document root must be a mapping, got {type(data).__name__}"
        )

    users = {category: _parse_users(data, category) for category in CATEGORY_ORDER}
    assignments = _parse_assignments(data.get(MODERATORS_SECTION))

    known_mods = {u.username for u in users[Category.MODS]}
    for moderator in assignments:
        if moderator not in known_mods:
            logger.info("Assignment for '%s' ignored: not listed under mods", moderator)

    return DesiredState(users=users, assignments=assignments)


def _section(data: dict[str, Any], key: str) -> list[Any]:
    """Return a document section as a list.

    A missing or null section is an empty list; anything other than a
    list is a parse error.
    """
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigParseError(f"Section '{key}' must be a list, got {type(raw).__name__}")
    return raw


def _parse_users(data: dict[str, Any], category: Category) -> tuple[DesiredUser, ...]:
    users: list[DesiredUser] = []
    seen: set[str] = set()

    for idx, raw in enumerate(_section(data, category.value)):
        try:
            entry = UserEntry.model_validate(raw)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid entry {category.value}[{idx}]: {e}") from e

        if entry.username in seen:
            raise ConfigParseError(
                f"Duplicate username '{entry.username}' in section '{category.value}'"
            )
        seen.add(entry.username)
        users.append(DesiredUser(username=entry.username, name=entry.name, category=category))

    return tuple(users)


def _parse_assignments(raw: Any) -> dict[str, ModeratorAssignment]:
    """Parse moderator assignments leniently.

    A malformed entry is skipped with a warning; a moderator whose
    assignment is unusable ends up with an empty author set.
    """
    if raw is None:
        return {}
    if not isinstance(raw, list):
        logger.warning("Section '%s' is not a list; no assignments loaded", MODERATORS_SECTION)
        return {}

    assignments: dict[str, ModeratorAssignment] = {}
    for idx, item in enumerate(raw):
        try:
            entry = ModeratorEntry.model_validate(item)
        except ValidationError as e:
            username = item.get("username") if isinstance(item, dict) else None
            logger.warning("Malformed %s[%d]: %s", MODERATORS_SECTION, idx, e)
            if isinstance(username, str) and username:
                assignments[username] = ModeratorAssignment(moderator=username)
            continue

        previous = assignments.get(entry.username)
        authors = list(previous.authors) if previous else []
        for author in entry.authors:
            if not is_plain_name(author):
                logger.warning(
                    "Author '%s' of moderator '%s' ignored: not a plain name",
                    author,
                    entry.username,
                )
                continue
            if author not in authors:
                authors.append(author)
        assignments[entry.username] = ModeratorAssignment(
            moderator=entry.username,
            authors=tuple(authors),
        )

    return assignments
