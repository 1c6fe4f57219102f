"""Universal World Profile (UWP) codec and trade classifications.

A UWP packs a world's starport class and seven numeric attributes into a
nine-character string::

    A867569-C
    │││││││ └ tech level
    ││││││└── law level
    │││││└─── government
    ││││└──── population
    │││└───── hydrographics
    ││└────── atmosphere
    │└─────── size
    └──────── starport

Numeric digits use the extended-hex alphabet ``0-9A-Z`` (values 0-35).
The string is the stored wire format and must round-trip exactly. Only
ASCII letters are digits.

The trade rules extend the stored system's table with Barren (Ba), Fluid
Oceans (Fl) and Garden (Ga), so some worlds carry codes the stored table
would not assign.

Example:
    >>> profile = decode_uwp("A867569-C")
    >>> profile.tech_level
    12
    >>> encode_uwp(profile)
    'A867569-C'
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from traveller_manager.core.exceptions import WorldProfileError
from traveller_manager.core.logging import get_logger
from traveller_manager.engine.formatting import from_traveller_hex, to_traveller_hex
from traveller_manager.models.campaign import Decision
from traveller_manager.models.enums import DecisionCode, Starport, TradeCode
from traveller_manager.models.requests import PlanetRequest, format_validation_errors
from traveller_manager.models.world import WorldProfile


logger = get_logger(__name__)

_UWP_PATTERN = re.compile(
    r"([A-EX])([0-9A-Z])([0-9A-Z])([0-9A-Z])([0-9A-Z])([0-9A-Z])([0-9A-Z])-([0-9A-Z])",
    re.IGNORECASE | re.ASCII,
)

_NUMERIC_FIELDS = (
    "size",
    "atmosphere",
    "hydrographics",
    "population",
    "government",
    "law_level",
)


# =============================================================================
# Codec
# =============================================================================


def require_uwp(uwp: str) -> WorldProfile:
    """Decode a UWP string, raising on malformed input.

    Args:
        uwp: UWP string such as ``A867569-C`` (case-insensitive).

    Returns:
        The decoded WorldProfile.

    Raises:
        WorldProfileError: If the string is not a well-formed UWP.
    """
    if not isinstance(uwp, str):
        raise WorldProfileError("UWP must be a string", details={"type": type(uwp).__name__})

    match = _UWP_PATTERN.fullmatch(uwp)
    if match is None:
        raise WorldProfileError("Invalid UWP format", uwp=uwp)

    starport, *digits, tech = match.groups()
    values = {field: from_traveller_hex(d) for field, d in zip(_NUMERIC_FIELDS, digits)}
    return WorldProfile(
        starport=Starport(starport.upper()),
        tech_level=from_traveller_hex(tech),
        **values,
    )


def decode_uwp(uwp: str) -> WorldProfile | None:
    """Decode a UWP string.

    Args:
        uwp: UWP string such as ``A867569-C`` (case-insensitive).

    Returns:
        The decoded WorldProfile, or None if the string is malformed
        (wrong length, missing hyphen, bad starport, bad digit).
    """
    try:
        return require_uwp(uwp)
    except WorldProfileError:
        return None


def encode_uwp(profile: WorldProfile) -> str:
    """Encode a WorldProfile as its canonical upper-case UWP string."""
    body = "".join(to_traveller_hex(getattr(profile, f)) for f in _NUMERIC_FIELDS)
    return f"{profile.starport.value}{body}-{to_traveller_hex(profile.tech_level)}"


# =============================================================================
# Trade Classifications
# =============================================================================

TradeRule = Callable[[WorldProfile], bool]

TRADE_RULES: tuple[tuple[TradeCode, TradeRule], ...] = (
    (
        TradeCode.AGRICULTURAL,
        lambda w: 4 <= w.atmosphere <= 9 and 4 <= w.hydrographics <= 8 and 5 <= w.population <= 7,
    ),
    (
        TradeCode.NON_AGRICULTURAL,
        lambda w: w.atmosphere <= 3 or w.atmosphere >= 10 or w.hydrographics <= 3 or w.population <= 5,
    ),
    (
        TradeCode.INDUSTRIAL,
        lambda w: (
            w.atmosphere <= 2
            or w.atmosphere in (4, 7)
            or (w.atmosphere == 9 and w.population >= 9)
        ),
    ),
    (TradeCode.NON_INDUSTRIAL, lambda w: w.population <= 6),
    (TradeCode.HIGH_POPULATION, lambda w: w.population >= 9),
    (TradeCode.LOW_POPULATION, lambda w: w.population <= 3),
    (
        TradeCode.RICH,
        lambda w: 6 <= w.atmosphere <= 8 and 6 <= w.population <= 8 and 4 <= w.government <= 9,
    ),
    (TradeCode.POOR, lambda w: 2 <= w.atmosphere <= 5 and w.hydrographics <= 3),
    (TradeCode.WATER_WORLD, lambda w: w.hydrographics == 10),
    (TradeCode.DESERT, lambda w: w.atmosphere >= 2 and w.hydrographics == 0),
    (TradeCode.VACUUM, lambda w: w.atmosphere == 0),
    (TradeCode.ASTEROID, lambda w: w.size == 0),
    (TradeCode.ICE_CAPPED, lambda w: w.atmosphere <= 1 and w.hydrographics >= 1),
    (TradeCode.HIGH_TECH, lambda w: w.tech_level >= 12),
    (TradeCode.LOW_TECH, lambda w: w.tech_level <= 5),
    (
        TradeCode.BARREN,
        lambda w: w.population == 0 and w.government == 0 and w.law_level == 0,
    ),
    (TradeCode.FLUID_OCEANS, lambda w: w.atmosphere >= 10 and w.hydrographics >= 1),
    (
        TradeCode.GARDEN,
        lambda w: 6 <= w.size <= 8 and w.atmosphere in (5, 6, 8) and 5 <= w.hydrographics <= 7,
    ),
)
"""Trade code rules; every code whose predicate holds applies."""


def trade_classifications(profile: WorldProfile) -> frozenset[TradeCode]:
    """Derive the trade codes that apply to a world.

    Args:
        profile: The world's decoded UWP.

    Returns:
        Set of applicable TradeCode values (possibly empty).
    """
    return frozenset(code for code, rule in TRADE_RULES if rule(profile))


# =============================================================================
# Planet Validation
# =============================================================================


def validate_planet(request: PlanetRequest | Mapping[str, Any]) -> Decision:
    """Check that a planet's UWP string agrees with its individual fields.

    Args:
        request: Planet payload carrying both the UWP and the fields, as a
            PlanetRequest or a plain mapping.

    Returns:
        Success with ``{"profile", "trade_codes"}``; INVALID_UWP when the
        string does not decode; UWP_MISMATCH when any field disagrees;
        VALIDATION_ERROR when a mapping payload fails field validation.
    """
    if not isinstance(request, PlanetRequest):
        try:
            request = PlanetRequest.model_validate(request)
        except PydanticValidationError as exc:
            return Decision.deny(DecisionCode.VALIDATION_ERROR, format_validation_errors(exc))

    try:
        profile = require_uwp(request.uwp)
    except WorldProfileError as exc:
        return Decision.deny(DecisionCode.INVALID_UWP, exc.message)

    mismatched = [
        field
        for field in ("starport", *_NUMERIC_FIELDS, "tech_level")
        if getattr(profile, field) != getattr(request, field)
    ]
    if mismatched:
        logger.info("Planet UWP mismatch", uwp=request.uwp, fields=mismatched)
        return Decision.deny(
            DecisionCode.UWP_MISMATCH,
            "UWP string does not match individual characteristics",
        )

    return Decision.allow(
        {"profile": profile, "trade_codes": trade_classifications(profile)}
    )


__all__ = [
    "TRADE_RULES",
    "require_uwp",
    "decode_uwp",
    "encode_uwp",
    "trade_classifications",
    "validate_planet",
]
