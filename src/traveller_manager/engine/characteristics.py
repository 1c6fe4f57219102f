"""Characteristic calculus for Traveller characters.

Maps raw characteristic scores to dice modifiers (DMs), validates the
creation range, and derives the secondary values used in play.

The DM table is the extended one: it continues below 1 and above 15 so
that damaged or enhanced characteristics still resolve. For the legal
creation range 1-15 it matches the stricter creation table exactly.

    ===========  ====
    Value        DM
    ===========  ====
    0 or less    -3
    1-2          -2
    3-5          -1
    6-8          +0
    9-11         +1
    12-14        +2
    15+          +3
    ===========  ====

Example:
    >>> characteristic_modifier(7)
    0
    >>> characteristic_modifier(12)
    2
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from traveller_manager.core.constants import (
    CHARACTERISTIC_DM_BANDS,
    CHARACTERISTIC_FIELDS,
    CHARACTERISTIC_MAX,
    CHARACTERISTIC_MIN,
    EHEX_DIGITS,
    MAX_CHARACTERISTIC_DM,
)
from traveller_manager.core.exceptions import ValidationError
from traveller_manager.core.logging import get_logger
from traveller_manager.engine.dice import RandomSource, roll_die
from traveller_manager.models.campaign import ValidationResult
from traveller_manager.models.characteristics import (
    Characteristics,
    DerivedCharacteristics,
)


logger = get_logger(__name__)


def characteristic_modifier(value: int) -> int:
    """Calculate the dice modifier for a characteristic value.

    Args:
        value: Raw characteristic value (any integer).

    Returns:
        The DM, from -3 to +3.
    """
    for upper_bound, dm in CHARACTERISTIC_DM_BANDS:
        if value <= upper_bound:
            return dm
    return MAX_CHARACTERISTIC_DM


def _is_in_range(value: Any) -> bool:
    # bool is an int subclass but never a characteristic
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return CHARACTERISTIC_MIN <= value <= CHARACTERISTIC_MAX


def validate_characteristics(
    characteristics: Characteristics | Mapping[str, Any],
) -> ValidationResult:
    """Check every characteristic against the legal creation range.

    All six fields are checked; a missing or non-integer field counts as
    out of range. Every violation is reported, not just the first.

    Args:
        characteristics: A Characteristics model or a plain mapping
            keyed by characteristic field name.

    Returns:
        ValidationResult listing one message per offending field.
    """
    if isinstance(characteristics, Characteristics):
        values: Mapping[str, Any] = characteristics.model_dump()
    else:
        values = characteristics

    errors = [
        f"{field} must be between {CHARACTERISTIC_MIN} and {CHARACTERISTIC_MAX}"
        for field in CHARACTERISTIC_FIELDS
        if not _is_in_range(values.get(field))
    ]

    if errors:
        logger.debug("Characteristics rejected", errors=errors)

    return ValidationResult(is_valid=not errors, errors=errors)


def ensure_valid_characteristics(
    characteristics: Characteristics | Mapping[str, Any],
) -> Characteristics:
    """Validate characteristics and return them as a model.

    Raises:
        ValidationError: Listing every out-of-range field.
    """
    result = validate_characteristics(characteristics)
    if not result.is_valid:
        raise ValidationError(
            "Characteristics out of range",
            field_name="characteristics",
            errors=result.errors,
        )
    if isinstance(characteristics, Characteristics):
        return characteristics
    return Characteristics(**{f: characteristics[f] for f in CHARACTERISTIC_FIELDS})


def derive_secondary(characteristics: Characteristics) -> DerivedCharacteristics:
    """Derive damage thresholds and DMs from a characteristic block.

    Args:
        characteristics: The character's characteristics.

    Returns:
        DerivedCharacteristics with physical/mental damage and all six DMs.
    """
    c = characteristics
    return DerivedCharacteristics(
        physical_damage=(c.strength + c.endurance) // 2,
        mental_damage=(c.intelligence + c.education) // 2,
        strength_dm=characteristic_modifier(c.strength),
        dexterity_dm=characteristic_modifier(c.dexterity),
        endurance_dm=characteristic_modifier(c.endurance),
        intelligence_dm=characteristic_modifier(c.intelligence),
        education_dm=characteristic_modifier(c.education),
        social_standing_dm=characteristic_modifier(c.social_standing),
    )


def roll_characteristics(rng: RandomSource | None = None) -> Characteristics:
    """Roll 2d6 for each characteristic, in UPP order.

    Args:
        rng: Optional random source; defaults to the ``random`` module.

    Returns:
        A freshly rolled Characteristics block (each value 2-12).
    """
    rolled = {
        field: roll_die(6, rng=rng) + roll_die(6, rng=rng)
        for field in CHARACTERISTIC_FIELDS
    }

    logger.debug("Characteristics rolled", **rolled)
    return Characteristics(**rolled)


def to_upp(characteristics: Characteristics) -> str:
    """Render a Universal Personality Profile string, e.g. ``789AB6``.

    Values are written as extended-hex digits; anything outside 0-35 is
    clamped to the nearest digit so the string always has six characters.
    """
    top = len(EHEX_DIGITS) - 1
    return "".join(
        EHEX_DIGITS[min(max(value, 0), top)]
        for value in characteristics.values_in_order()
    )


__all__ = [
    "characteristic_modifier",
    "validate_characteristics",
    "ensure_valid_characteristics",
    "derive_secondary",
    "roll_characteristics",
    "to_upp",
]
