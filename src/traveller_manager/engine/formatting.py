"""Display formatting for Traveller values.

Covers the extended-hex digits used by UWP and UPP strings as well as
the credit, tonnage, and parsec strings shown by the UI layer.

Example:
    >>> to_traveller_hex(12)
    'C'
    >>> format_credits(1500000)
    'Cr1,500,000'
"""

from __future__ import annotations

from traveller_manager.core.constants import EHEX_DIGITS, MAX_PROFILE_VALUE


def to_traveller_hex(value: int) -> str:
    """Render 0-35 as a single digit (0-9 then A-Z).

    Args:
        value: Integer to render.

    Returns:
        One character from ``0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ``.

    Raises:
        ValueError: If the value has no single-digit representation.
    """
    if not 0 <= value <= MAX_PROFILE_VALUE:
        msg = f"Value must be between 0 and {MAX_PROFILE_VALUE}, got {value}"
        raise ValueError(msg)
    return EHEX_DIGITS[value]


def from_traveller_hex(digit: str) -> int | None:
    """Read a single extended-hex digit, case-insensitively.

    Returns:
        The digit's value, or None if it is not a single valid digit.
    """
    if not isinstance(digit, str) or len(digit) != 1:
        return None
    index = EHEX_DIGITS.find(digit.upper())
    return index if index >= 0 else None


def format_credits(amount: int) -> str:
    """Format an amount of credits, e.g. ``Cr1,000``."""
    return f"Cr{amount:,}"


def format_tonnage(tons: int) -> str:
    """Format a displacement, e.g. ``50,000 tons``."""
    return f"{tons:,} tons"


def format_distance(parsecs: int) -> str:
    """Format a jump distance in parsecs."""
    if parsecs == 1:
        return "1 parsec"
    return f"{parsecs} parsecs"


__all__ = [
    "to_traveller_hex",
    "from_traveller_hex",
    "format_credits",
    "format_tonnage",
    "format_distance",
]
