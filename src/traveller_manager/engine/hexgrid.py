"""Subsector hex grid coordinates and jump distances.

Hex locations are written ``XXYY``: a two-digit column followed by a
two-digit row (``0101`` through ``3240`` on a full sector map). Rows are
staggered by parity, so distances are computed after converting offset
coordinates to cube coordinates, where hex distance is the largest of
the three axis deltas.

Example:
    >>> calculate_hex_distance("0101", "0303")
    3
    >>> calculate_hex_distance("1910", "2716")
    11
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from traveller_manager.core.exceptions import HexCoordinateError
from traveller_manager.core.logging import get_logger


logger = get_logger(__name__)

_HEX_PATTERN = re.compile(r"[0-9]{4}")


@dataclass(frozen=True, order=True)
class HexCoordinate:
    """A column/row location on a sector map.

    Attributes:
        column: Column number (the ``XX`` part).
        row: Row number (the ``YY`` part).
    """

    column: int
    row: int

    @classmethod
    def parse(cls, text: str) -> HexCoordinate:
        """Parse an ``XXYY`` coordinate string.

        Raises:
            HexCoordinateError: If the text is not exactly four digits.
        """
        if not isinstance(text, str) or _HEX_PATTERN.fullmatch(text) is None:
            raise HexCoordinateError(
                "Hex coordinate must be four digits (XXYY)",
                coordinate=str(text),
            )
        return cls(column=int(text[:2]), row=int(text[2:]))

    def to_cube(self) -> tuple[int, int, int]:
        """Convert to cube coordinates ``(q, r, s)`` with ``q + r + s == 0``."""
        q = self.column - (self.row + (self.row & 1)) // 2
        r = self.row
        return q, r, -q - r

    def distance_to(self, other: HexCoordinate) -> int:
        """Number of hex steps between two locations."""
        q1, r1, s1 = self.to_cube()
        q2, r2, s2 = other.to_cube()
        return max(abs(q1 - q2), abs(r1 - r2), abs(s1 - s2))

    def __str__(self) -> str:
        return f"{self.column:02d}{self.row:02d}"


def is_valid_hex_coordinate(text: str) -> bool:
    """Return True when the text is a well-formed ``XXYY`` coordinate."""
    return isinstance(text, str) and _HEX_PATTERN.fullmatch(text) is not None


def parse_hex_coordinate(text: str) -> HexCoordinate | None:
    """Parse a coordinate string, returning None when it is malformed."""
    try:
        return HexCoordinate.parse(text)
    except HexCoordinateError:
        return None


def calculate_hex_distance(hex1: str, hex2: str) -> int | None:
    """Calculate the jump distance in parsecs between two hex locations.

    Args:
        hex1: First location, ``XXYY``.
        hex2: Second location, ``XXYY``.

    Returns:
        The distance (0 for identical hexes), or None when either
        coordinate is malformed.
    """
    a = parse_hex_coordinate(hex1)
    b = parse_hex_coordinate(hex2)
    if a is None or b is None:
        logger.debug("Rejected hex coordinates", hex1=hex1, hex2=hex2)
        return None
    return a.distance_to(b)


def hexes_within(
    origin: str,
    candidates: Iterable[str],
    max_distance: int,
) -> list[tuple[str, int]]:
    """List the candidate hexes reachable from origin within a jump range.

    Malformed candidates are skipped.

    Args:
        origin: Starting location, ``XXYY``.
        candidates: Locations to test.
        max_distance: Largest distance to include, in parsecs.

    Returns:
        ``(coordinate, distance)`` pairs sorted by distance, then coordinate.

    Raises:
        HexCoordinateError: If the origin itself is malformed.
    """
    start = HexCoordinate.parse(origin)
    reachable: list[tuple[str, int]] = []
    for candidate in candidates:
        target = parse_hex_coordinate(candidate)
        if target is None:
            continue
        distance = start.distance_to(target)
        if distance <= max_distance:
            reachable.append((str(target), distance))
    reachable.sort(key=lambda item: (item[1], item[0]))
    return reachable


__all__ = [
    "HexCoordinate",
    "is_valid_hex_coordinate",
    "parse_hex_coordinate",
    "calculate_hex_distance",
    "hexes_within",
]
