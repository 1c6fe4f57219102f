"""Tests for the characteristic calculus."""

from __future__ import annotations

import random

import pytest

from traveller_manager.core.exceptions import ValidationError
from traveller_manager.engine.characteristics import (
    characteristic_modifier,
    derive_secondary,
    ensure_valid_characteristics,
    roll_characteristics,
    to_upp,
    validate_characteristics,
)
from traveller_manager.models.characteristics import Characteristics
from traveller_manager.models.enums import Characteristic


class TestCharacteristicModifier:
    """Tests for the characteristic DM table."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (-4, -3),
            (0, -3),
            (1, -2),
            (2, -2),
            (3, -1),
            (5, -1),
            (6, 0),
            (7, 0),
            (8, 0),
            (9, 1),
            (11, 1),
            (12, 2),
            (14, 2),
            (15, 3),
            (20, 3),
        ],
    )
    def test_table(self, value: int, expected: int) -> None:
        """Test every band boundary of the DM table."""
        assert characteristic_modifier(value) == expected

    def test_monotonic(self) -> None:
        """Test that a higher value never yields a lower DM."""
        dms = [characteristic_modifier(v) for v in range(-5, 40)]
        assert dms == sorted(dms)
        assert min(dms) == -3
        assert max(dms) == 3


class TestValidateCharacteristics:
    """Tests for characteristic range validation."""

    def test_valid_block(self, sample_characteristics: dict[str, int]) -> None:
        """Test that a legal block passes."""
        result = validate_characteristics(sample_characteristics)

        assert result.is_valid is True
        assert result.errors == []

    def test_accepts_model(self, characteristics_model: Characteristics) -> None:
        """Test that a Characteristics model is accepted directly."""
        assert validate_characteristics(characteristics_model).is_valid

    def test_reports_every_violation(self, sample_characteristics: dict[str, int]) -> None:
        """Test that all offending fields are reported, in field order."""
        values = {**sample_characteristics, "strength": 0, "education": 16}

        result = validate_characteristics(values)

        assert result.is_valid is False
        assert result.errors == [
            "strength must be between 1 and 15",
            "education must be between 1 and 15",
        ]

    def test_bounds_inclusive(self, sample_characteristics: dict[str, int]) -> None:
        """Test that 1 and 15 are both legal."""
        values = {**sample_characteristics, "strength": 1, "dexterity": 15}

        assert validate_characteristics(values).is_valid

    def test_missing_and_non_integer(self, sample_characteristics: dict[str, int]) -> None:
        """Test that missing, string and boolean values are violations."""
        values = dict(sample_characteristics)
        del values["endurance"]
        values["intelligence"] = "10"
        values["social_standing"] = True

        result = validate_characteristics(values)

        assert len(result.errors) == 3
        assert "endurance must be between 1 and 15" in result.errors

    def test_model_does_not_clamp(self) -> None:
        """Test that out-of-range values survive model construction."""
        block = Characteristics(
            strength=20,
            dexterity=7,
            endurance=7,
            intelligence=7,
            education=7,
            social_standing=-1,
        )

        assert block.strength == 20
        assert len(validate_characteristics(block).errors) == 2


class TestEnsureValidCharacteristics:
    """Tests for the raising validation variant."""

    def test_returns_model(self, sample_characteristics: dict[str, int]) -> None:
        """Test that a valid mapping comes back as a model."""
        block = ensure_valid_characteristics(sample_characteristics)

        assert isinstance(block, Characteristics)
        assert block.education == 11

    def test_raises_with_all_errors(self, sample_characteristics: dict[str, int]) -> None:
        """Test that every violation is carried on the exception."""
        values = {**sample_characteristics, "strength": 0, "dexterity": 99}

        with pytest.raises(ValidationError) as exc_info:
            ensure_valid_characteristics(values)

        assert len(exc_info.value.errors) == 2


class TestDeriveSecondary:
    """Tests for derived characteristics."""

    def test_damage_and_dms(self, characteristics_model: Characteristics) -> None:
        """Test damage thresholds and per-characteristic DMs."""
        derived = derive_secondary(characteristics_model)

        assert derived.physical_damage == (7 + 9) // 2
        assert derived.mental_damage == (10 + 11) // 2
        assert derived.strength_dm == 0
        assert derived.intelligence_dm == 1
        assert derived.social_standing_dm == 0

    def test_damage_rounds_down(self) -> None:
        """Test odd sums are floored."""
        block = Characteristics(
            strength=7,
            dexterity=7,
            endurance=8,
            intelligence=3,
            education=4,
            social_standing=7,
        )

        derived = derive_secondary(block)

        assert derived.physical_damage == 7
        assert derived.mental_damage == 3


class TestRollAndUpp:
    """Tests for rolling characteristics and UPP strings."""

    def test_roll_uses_two_dice_per_characteristic(self, scripted_dice: type) -> None:
        """Test each characteristic is the sum of two d6 in UPP order."""
        dice = scripted_dice([1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6])

        block = roll_characteristics(rng=dice)

        assert block.values_in_order() == (2, 4, 6, 8, 10, 12)
        assert dice.calls == [(1, 6)] * 12

    def test_roll_range(self) -> None:
        """Test rolled values always lie in 2-12."""
        rng = random.Random(2024)
        for _ in range(50):
            block = roll_characteristics(rng=rng)
            assert all(2 <= v <= 12 for v in block.values_in_order())

    def test_upp(self, characteristics_model: Characteristics) -> None:
        """Test UPP rendering in extended hex."""
        assert to_upp(characteristics_model) == "789AB6"

    def test_characteristic_names(self) -> None:
        """Test enum abbreviations and names."""
        assert Characteristic.SOCIAL_STANDING.abbreviation == "SOC"
        assert Characteristic.STRENGTH.abbreviation == "STR"
        assert Characteristic.EDUCATION.full_name == "Education"
