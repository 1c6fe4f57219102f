"""Pydantic V2 schemas for the Traveller Campaign Manager.

Submodules:
    enums: Enumeration types (Characteristic, Starport, TradeCode, CampaignRole, etc.)
    characteristics: Characteristic blocks and derived values
    world: Universal World Profile
    campaign: Memberships, character records, and decisions
    requests: Typed request payloads for the access service

Example:
    >>> from traveller_manager.models import Characteristics, CampaignRole
    >>> upp = Characteristics(
    ...     strength=7, dexterity=8, endurance=9,
    ...     intelligence=10, education=11, social_standing=6,
    ... )
    >>> CampaignRole.GAMEMASTER.level
    3
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from traveller_manager.models.enums import (
    CampaignRole,
    Characteristic,
    DecisionCode,
    Starport,
    SubscriptionTier,
    TaskDifficulty,
    TradeCode,
)

# =============================================================================
# Characters & Worlds
# =============================================================================
from traveller_manager.models.characteristics import (
    Characteristics,
    DerivedCharacteristics,
)
from traveller_manager.models.world import WorldProfile

# =============================================================================
# Campaigns & Decisions
# =============================================================================
from traveller_manager.models.campaign import (
    CampaignMembership,
    CharacterRecord,
    Decision,
    ValidationResult,
)
from traveller_manager.models.requests import (
    CampaignMemberRequest,
    CharacterCreateRequest,
    DiceRollRequest,
    EquipmentRequest,
    PlanetRequest,
    SkillRequest,
    StarSystemRequest,
    format_validation_errors,
)


__all__ = [
    # Enums
    "CampaignRole",
    "Characteristic",
    "DecisionCode",
    "Starport",
    "SubscriptionTier",
    "TaskDifficulty",
    "TradeCode",
    # Characters & worlds
    "Characteristics",
    "DerivedCharacteristics",
    "WorldProfile",
    # Campaigns
    "CampaignMembership",
    "CharacterRecord",
    "Decision",
    "ValidationResult",
    # Requests
    "CampaignMemberRequest",
    "CharacterCreateRequest",
    "DiceRollRequest",
    "EquipmentRequest",
    "PlanetRequest",
    "SkillRequest",
    "StarSystemRequest",
    "format_validation_errors",
]
