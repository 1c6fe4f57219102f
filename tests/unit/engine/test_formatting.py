"""Tests for display formatting helpers."""

from __future__ import annotations

import pytest

from traveller_manager.engine.formatting import (
    format_credits,
    format_distance,
    format_tonnage,
    from_traveller_hex,
    to_traveller_hex,
)


class TestTravellerHex:
    """Tests for extended-hex digits."""

    @pytest.mark.parametrize(
        ("value", "digit"),
        [(0, "0"), (9, "9"), (10, "A"), (15, "F"), (16, "G"), (35, "Z")],
    )
    def test_to_hex(self, value: int, digit: str) -> None:
        """Test values render as single digits."""
        assert to_traveller_hex(value) == digit

    @pytest.mark.parametrize("value", [-1, 36])
    def test_out_of_range(self, value: int) -> None:
        """Test values without a digit are rejected."""
        with pytest.raises(ValueError):
            to_traveller_hex(value)

    def test_from_hex(self) -> None:
        """Test digits read back case-insensitively."""
        assert from_traveller_hex("C") == 12
        assert from_traveller_hex("c") == 12
        assert from_traveller_hex("Z") == 35

    @pytest.mark.parametrize("digit", ["", "10", "#", "-"])
    def test_from_hex_invalid(self, digit: str) -> None:
        """Test non-digits read as None."""
        assert from_traveller_hex(digit) is None

    def test_inverse(self) -> None:
        """Test every value survives a round trip."""
        assert all(from_traveller_hex(to_traveller_hex(v)) == v for v in range(36))


class TestDisplayStrings:
    """Tests for credit, tonnage and distance strings."""

    def test_credits(self) -> None:
        """Test credits use thousands separators."""
        assert format_credits(1000) == "Cr1,000"
        assert format_credits(1500000) == "Cr1,500,000"
        assert format_credits(0) == "Cr0"

    def test_tonnage(self) -> None:
        """Test tonnage uses thousands separators."""
        assert format_tonnage(100) == "100 tons"
        assert format_tonnage(50000) == "50,000 tons"

    def test_distance(self) -> None:
        """Test parsec pluralization."""
        assert format_distance(1) == "1 parsec"
        assert format_distance(0) == "0 parsecs"
        assert format_distance(4) == "4 parsecs"
