"""Traveller Campaign Manager - rules engine and campaign access control.

Implements the Traveller tabletop rules a campaign manager needs to
validate and resolve game data: characteristic DMs, Universal World
Profiles and trade codes, dice notation and task checks, subsector hex
distances, and campaign/character permissions.

ARCHITECTURE:
- The rules engine is pure: values in, values or Decisions out
- Storage resolves records; services hand them to the engine
- Randomness is injected, so every roll can be reproduced

Example:
    >>> from traveller_manager import decode_uwp, trade_classifications, DiceRoller
    >>>
    >>> world = decode_uwp("A867569-C")
    >>> sorted(code.value for code in trade_classifications(world))
    ['Ag', 'Ga', 'Ht', 'Na', 'Ni']
    >>>
    >>> roller = DiceRoller(seed=7)
    >>> check = roller.task_check(skill_level=1, characteristic_modifier=1)
    >>> check.effect == check.final_result - 8
    True

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for characters, worlds, and campaigns.
    engine: Characteristic calculus, UWP codec, dice, hex grid, permissions.
    storage: SQLite persistence for users, campaigns, and characters.
    services: Campaign access and mutation validation.
"""

from __future__ import annotations

# Core
from traveller_manager.core.config import Settings, get_settings
from traveller_manager.core.exceptions import TravellerManagerError
from traveller_manager.core.logging import configure_logging, get_logger

# Models
from traveller_manager.models import (
    CampaignMembership,
    CampaignRole,
    Characteristics,
    CharacterRecord,
    Decision,
    DecisionCode,
    TradeCode,
    WorldProfile,
)

# Rules engine
from traveller_manager.engine import (
    DiceRoller,
    calculate_hex_distance,
    characteristic_modifier,
    check_campaign_permission,
    check_character_permission,
    decode_uwp,
    encode_uwp,
    perform_task_check,
    roll_dice,
    trade_classifications,
    validate_characteristics,
)

# Persistence & services
from traveller_manager.services import CampaignAccessService
from traveller_manager.storage import Database


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TravellerManagerError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "CampaignMembership",
    "CampaignRole",
    "Characteristics",
    "CharacterRecord",
    "Decision",
    "DecisionCode",
    "TradeCode",
    "WorldProfile",
    # Engine
    "DiceRoller",
    "calculate_hex_distance",
    "characteristic_modifier",
    "check_campaign_permission",
    "check_character_permission",
    "decode_uwp",
    "encode_uwp",
    "perform_task_check",
    "roll_dice",
    "trade_classifications",
    "validate_characteristics",
    # Services
    "CampaignAccessService",
    "Database",
]
