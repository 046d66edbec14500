"""Desired-state document models.

This module defines the Pydantic models representing the users.yaml
structure. Account sections are validated strictly; moderator entries are
validated one at a time by the loader so a bad entry only empties that
moderator's assignment.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_to_str(v: object) -> object:
    # YAML reads names such as 2024 as numbers
    if isinstance(v, int | float) and not isinstance(v, bool):
        return str(v)
    return v


class UserEntry(BaseModel):
    """A single account entry of a category section.

    Attributes:
        username: Login name.
        name: Display name; defaults to empty.
    """

    model_config = ConfigDict(extra="ignore")

    username: Annotated[str, Field(min_length=1, description="Login name")]
    name: Annotated[str, Field(description="Display name")] = ""

    @field_validator("username", "name", mode="before")
    @classmethod
    def coerce_scalar(cls, v: object) -> object:
        """Accept YAML scalars such as numbers as strings."""
        return _scalar_to_str(v)

    @field_validator("name", mode="before")
    @classmethod
    def none_is_blank(cls, v: object) -> object:
        """``name:`` with no value is an empty display name."""
        return "" if v is None else v


class ModeratorEntry(BaseModel):
    """Assignment of authors to a moderator.

    Attributes:
        username: Moderator username, matched against the mods section.
        authors: Author usernames the moderator may manage.
    """

    model_config = ConfigDict(extra="ignore")

    username: Annotated[str, Field(min_length=1, description="Moderator username")]
    authors: Annotated[
        list[str],
        Field(default_factory=list, description="Assigned author usernames"),
    ]

    @field_validator("username", mode="before")
    @classmethod
    def coerce_scalar(cls, v: object) -> object:
        """Accept a numeric moderator name as a string."""
        return _scalar_to_str(v)

    @field_validator("authors", mode="before")
    @classmethod
    def coerce_authors(cls, v: object) -> object:
        """Treat a null author list as empty and numeric authors as strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [_scalar_to_str(author) for author in v]
        return v
