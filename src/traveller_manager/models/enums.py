"""Enumeration types for the Traveller Campaign Manager.

This module defines the enumerations shared by the rules engine, the
persistence layer, and the access service: characteristics, starport
classes, trade codes, campaign roles, task difficulties, and the
machine-readable decision codes returned to API callers.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from traveller_manager.core.constants import ROLE_LEVELS


class Characteristic(StrEnum):
    """The six Traveller characteristics, in UPP order."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    ENDURANCE = "endurance"
    INTELLIGENCE = "intelligence"
    EDUCATION = "education"
    SOCIAL_STANDING = "social_standing"

    @property
    def full_name(self) -> str:
        """Get the display name (e.g. 'Social Standing')."""
        return self.value.replace("_", " ").title()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g. 'SOC')."""
        return _CHARACTERISTIC_ABBREVIATIONS[self]


_CHARACTERISTIC_ABBREVIATIONS = {
    Characteristic.STRENGTH: "STR",
    Characteristic.DEXTERITY: "DEX",
    Characteristic.ENDURANCE: "END",
    Characteristic.INTELLIGENCE: "INT",
    Characteristic.EDUCATION: "EDU",
    Characteristic.SOCIAL_STANDING: "SOC",
}


class Starport(StrEnum):
    """Starport quality classes, from excellent (A) to none (X)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    X = "X"


class TradeCode(StrEnum):
    """Trade classification codes derived from a world's UWP."""

    AGRICULTURAL = "Ag"
    ASTEROID = "As"
    BARREN = "Ba"
    DESERT = "De"
    FLUID_OCEANS = "Fl"
    GARDEN = "Ga"
    HIGH_POPULATION = "Hi"
    HIGH_TECH = "Ht"
    ICE_CAPPED = "Ic"
    INDUSTRIAL = "In"
    LOW_POPULATION = "Lo"
    LOW_TECH = "Lt"
    NON_AGRICULTURAL = "Na"
    NON_INDUSTRIAL = "Ni"
    POOR = "Po"
    RICH = "Ri"
    VACUUM = "Va"
    WATER_WORLD = "Wa"

    @property
    def description(self) -> str:
        """Get the human-readable classification name."""
        return self.name.replace("_", " ").title().replace("Non ", "Non-")


class CampaignRole(StrEnum):
    """Roles a user can hold inside a campaign.

    Roles form a strict total order: GAMEMASTER > PLAYER > OBSERVER.
    """

    GAMEMASTER = "GAMEMASTER"
    PLAYER = "PLAYER"
    OBSERVER = "OBSERVER"

    @property
    def level(self) -> int:
        """Position in the role hierarchy (higher is more privileged)."""
        return ROLE_LEVELS[self.value]


class SubscriptionTier(StrEnum):
    """Account subscription tiers."""

    FREE = "FREE"
    STANDARD = "STANDARD"
    PREMIUM = "PREMIUM"


class TaskDifficulty(IntEnum):
    """Standard task check target numbers."""

    SIMPLE = 2
    EASY = 4
    ROUTINE = 6
    AVERAGE = 8
    DIFFICULT = 10
    VERY_DIFFICULT = 12
    FORMIDABLE = 14


class DecisionCode(StrEnum):
    """Machine-readable failure codes carried by a Decision."""

    # Permission evaluator
    NOT_CAMPAIGN_MEMBER = "NOT_CAMPAIGN_MEMBER"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    CHARACTER_NOT_FOUND = "CHARACTER_NOT_FOUND"
    PERMISSION_ERROR = "PERMISSION_ERROR"

    # Request validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CHARACTERISTICS = "INVALID_CHARACTERISTICS"
    INVALID_DICE_NOTATION = "INVALID_DICE_NOTATION"
    INVALID_UWP = "INVALID_UWP"
    UWP_MISMATCH = "UWP_MISMATCH"
    INVALID_HEX = "INVALID_HEX"

    # Record lookups
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    GAMEMASTER_NOT_FOUND = "GAMEMASTER_NOT_FOUND"
    ROLLER_NOT_FOUND = "ROLLER_NOT_FOUND"
    CAMPAIGN_NOT_FOUND = "CAMPAIGN_NOT_FOUND"

    # Business rules
    CHARACTER_NAME_EXISTS = "CHARACTER_NAME_EXISTS"
    ALREADY_MEMBER = "ALREADY_MEMBER"
    CAMPAIGN_FULL = "CAMPAIGN_FULL"
    CAMPAIGN_LIMIT_REACHED = "CAMPAIGN_LIMIT_REACHED"
    HEX_OCCUPIED = "HEX_OCCUPIED"


__all__ = [
    "Characteristic",
    "Starport",
    "TradeCode",
    "CampaignRole",
    "SubscriptionTier",
    "TaskDifficulty",
    "DecisionCode",
]
