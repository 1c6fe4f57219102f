"""Application-wide constants for the Traveller Campaign Manager.

This module defines the fixed numbers of the Traveller ruleset and the
textual formats shared with the persistence and API layers.
"""

from __future__ import annotations

# =============================================================================
# Characteristics
# =============================================================================

CHARACTERISTIC_MIN = 1
"""Lowest legal value for a characteristic at creation."""

CHARACTERISTIC_MAX = 15
"""Highest legal value for a characteristic at creation."""

CHARACTERISTIC_FIELDS = (
    "strength",
    "dexterity",
    "endurance",
    "intelligence",
    "education",
    "social_standing",
)
"""Canonical characteristic order (also the UPP digit order)."""

# Inclusive upper bound of each band and the DM it yields. Values above the
# last bound yield MAX_CHARACTERISTIC_DM.
CHARACTERISTIC_DM_BANDS = (
    (0, -3),
    (2, -2),
    (5, -1),
    (8, 0),
    (11, 1),
    (14, 2),
)

MAX_CHARACTERISTIC_DM = 3

# =============================================================================
# Dice & Task Resolution
# =============================================================================

TASK_CHECK_DICE = "2d6"
"""Every task check is a 2d6 roll."""

DEFAULT_TASK_DIFFICULTY = 8
"""Average difficulty: the default task check target."""

BASE_MODIFIER_NAME = "base"
SKILL_MODIFIER_NAME = "skill"
CHARACTERISTIC_MODIFIER_NAME = "characteristic"

# =============================================================================
# Universal World Profile
# =============================================================================

EHEX_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
"""Digit alphabet for UWP and UPP values (0-35)."""

MAX_PROFILE_VALUE = len(EHEX_DIGITS) - 1


# =============================================================================
# Campaigns
# =============================================================================

ROLE_LEVELS = {
    "GAMEMASTER": 3,
    "PLAYER": 2,
    "OBSERVER": 1,
}
"""Campaign role hierarchy (strict total order)."""

DEFAULT_MAX_PLAYERS = 6

CAMPAIGN_LIMITS = {
    "FREE": 2,
    "STANDARD": 10,
    "PREMIUM": 50,
}
"""Campaigns a gamemaster may run per subscription tier."""


__all__ = [
    # Characteristics
    "CHARACTERISTIC_MIN",
    "CHARACTERISTIC_MAX",
    "CHARACTERISTIC_FIELDS",
    "CHARACTERISTIC_DM_BANDS",
    "MAX_CHARACTERISTIC_DM",
    # Dice
    "TASK_CHECK_DICE",
    "DEFAULT_TASK_DIFFICULTY",
    "BASE_MODIFIER_NAME",
    "SKILL_MODIFIER_NAME",
    "CHARACTERISTIC_MODIFIER_NAME",
    # UWP
    "EHEX_DIGITS",
    "MAX_PROFILE_VALUE",
    # Campaigns
    "ROLE_LEVELS",
    "DEFAULT_MAX_PLAYERS",
    "CAMPAIGN_LIMITS",
]
