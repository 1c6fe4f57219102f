"""Rules engine for the Traveller Campaign Manager.

Pure, synchronous rules functions with no storage access: callers pass
in the records and get values or Decisions back.

Submodules:
    characteristics: Characteristic DMs, validation, and derived values
    dice: Dice notation, rolls with named modifiers, and task checks
    uwp: UWP codec, trade classifications, and planet validation
    hexgrid: XXYY hex coordinates and jump distances
    permissions: Campaign and character permission decisions
    formatting: Extended-hex digits and display strings

Example:
    >>> from traveller_manager.engine import decode_uwp, trade_classifications
    >>> sorted(code.value for code in trade_classifications(decode_uwp("A867569-C")))
    ['Ag', 'Ga', 'Ht', 'Na', 'Ni']
"""

from __future__ import annotations

# =============================================================================
# Characteristics
# =============================================================================
from traveller_manager.engine.characteristics import (
    characteristic_modifier,
    derive_secondary,
    ensure_valid_characteristics,
    roll_characteristics,
    to_upp,
    validate_characteristics,
)

# =============================================================================
# Dice
# =============================================================================
from traveller_manager.engine.dice import (
    DiceNotation,
    DiceRoller,
    Modifier,
    RandomSource,
    RollResult,
    TaskCheckResult,
    parse_dice_notation,
    perform_task_check,
    roll_dice,
    roll_die,
)

# =============================================================================
# Formatting
# =============================================================================
from traveller_manager.engine.formatting import (
    format_credits,
    format_distance,
    format_tonnage,
    from_traveller_hex,
    to_traveller_hex,
)

# =============================================================================
# Hex Grid
# =============================================================================
from traveller_manager.engine.hexgrid import (
    HexCoordinate,
    calculate_hex_distance,
    hexes_within,
    is_valid_hex_coordinate,
    parse_hex_coordinate,
)

# =============================================================================
# Permissions
# =============================================================================
from traveller_manager.engine.permissions import (
    check_campaign_permission,
    check_character_permission,
    role_satisfies,
)

# =============================================================================
# World Profiles
# =============================================================================
from traveller_manager.engine.uwp import (
    TRADE_RULES,
    decode_uwp,
    encode_uwp,
    require_uwp,
    trade_classifications,
    validate_planet,
)


__all__ = [
    # Characteristics
    "characteristic_modifier",
    "derive_secondary",
    "ensure_valid_characteristics",
    "roll_characteristics",
    "to_upp",
    "validate_characteristics",
    # Dice
    "DiceNotation",
    "DiceRoller",
    "Modifier",
    "RandomSource",
    "RollResult",
    "TaskCheckResult",
    "parse_dice_notation",
    "perform_task_check",
    "roll_dice",
    "roll_die",
    # Formatting
    "format_credits",
    "format_distance",
    "format_tonnage",
    "from_traveller_hex",
    "to_traveller_hex",
    # Hex grid
    "HexCoordinate",
    "calculate_hex_distance",
    "hexes_within",
    "is_valid_hex_coordinate",
    "parse_hex_coordinate",
    # Permissions
    "check_campaign_permission",
    "check_character_permission",
    "role_satisfies",
    # World profiles
    "TRADE_RULES",
    "decode_uwp",
    "encode_uwp",
    "require_uwp",
    "trade_classifications",
    "validate_planet",
]
