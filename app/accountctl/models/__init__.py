"""Data models for accountctl.

This module exports the core data structures used throughout the application.
"""

from accountctl.models.account import (
    DesiredState,
    DesiredUser,
    ModeratorAssignment,
    ObservedAccount,
)
from accountctl.models.action import Action, ActionResult, ActionType
from accountctl.models.category import CATEGORY_ORDER, LOCKABLE_CATEGORIES, Category
from accountctl.models.document import ModeratorEntry, UserEntry

__all__ = [
    "CATEGORY_ORDER",
    "LOCKABLE_CATEGORIES",
    "Action",
    "ActionResult",
    "ActionType",
    "Category",
    "DesiredState",
    "DesiredUser",
    "ModeratorAssignment",
    "ModeratorEntry",
    "ObservedAccount",
    "UserEntry",
]
