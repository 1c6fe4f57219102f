"""Tests for dice notation, rolls, and task checks."""

from __future__ import annotations

import random

import pytest

from traveller_manager.core.config import GameSettings
from traveller_manager.core.exceptions import DiceRollError
from traveller_manager.engine.dice import (
    DiceNotation,
    DiceRoller,
    Modifier,
    parse_dice_notation,
    perform_task_check,
    roll_dice,
    roll_die,
)


class TestParseDiceNotation:
    """Tests for dice notation parsing."""

    @pytest.mark.parametrize(
        ("notation", "expected"),
        [
            ("2d6", DiceNotation(2, 6, 0)),
            ("1d20", DiceNotation(1, 20, 0)),
            ("3d8+2", DiceNotation(3, 8, 2)),
            ("1d6-1", DiceNotation(1, 6, -1)),
            ("2D6", DiceNotation(2, 6, 0)),
            ("10d10+15", DiceNotation(10, 10, 15)),
        ],
    )
    def test_valid(self, notation: str, expected: DiceNotation) -> None:
        """Test well-formed notation parses to its parts."""
        assert parse_dice_notation(notation) == expected

    @pytest.mark.parametrize(
        "notation",
        ["d6", "2d", "2x6", "2d6+", "2d6 + 1", " 2d6", "2d6+1d4", "", "0d6", "2d0", "abc"],
    )
    def test_invalid(self, notation: str) -> None:
        """Test malformed notation yields None."""
        assert parse_dice_notation(notation) is None

    def test_non_string(self) -> None:
        """Test non-string input yields None."""
        assert parse_dice_notation(26) is None  # type: ignore[arg-type]

    def test_str(self) -> None:
        """Test notation renders back to its canonical text."""
        assert str(DiceNotation(3, 8, 2)) == "3d8+2"
        assert str(DiceNotation(1, 6, -1)) == "1d6-1"
        assert str(DiceNotation(2, 6)) == "2d6"


class TestRollDie:
    """Tests for single die rolls."""

    def test_range(self) -> None:
        """Test results stay within [1, sides]."""
        rng = random.Random(7)
        results = {roll_die(6, rng) for _ in range(500)}
        assert results == {1, 2, 3, 4, 5, 6}

    def test_zero_sides(self) -> None:
        """Test a die with no sides is rejected."""
        with pytest.raises(DiceRollError):
            roll_die(0)


class TestRollDice:
    """Tests for notation rolls with modifiers."""

    def test_total_and_individual(self, scripted_dice: type) -> None:
        """Test dice are summed in roll order."""
        result = roll_dice("3d6", rng=scripted_dice([2, 5, 6]))

        assert result is not None
        assert result.individual == (2, 5, 6)
        assert result.total == 13
        assert result.modifiers == ()
        assert result.final_result == 13

    def test_base_modifier_recorded_first(self, scripted_dice: type) -> None:
        """Test inline modifier becomes the leading 'base' modifier."""
        result = roll_dice(
            "2d6+2",
            [Modifier("skill", 1), ("range", -2)],
            rng=scripted_dice([3, 4]),
        )

        assert result is not None
        assert [m.name for m in result.modifiers] == ["base", "skill", "range"]
        assert result.modifier_total == 1
        assert result.final_result == 7 + 2 + 1 - 2

    def test_zero_inline_modifier_not_recorded(self, scripted_dice: type) -> None:
        """Test a '+0' inline modifier adds no entry."""
        result = roll_dice("2d6+0", rng=scripted_dice([1, 1]))

        assert result is not None
        assert result.modifiers == ()

    def test_invalid_notation(self) -> None:
        """Test unparseable notation yields None."""
        assert roll_dice("2d") is None

    def test_requests_correct_die_size(self, scripted_dice: type) -> None:
        """Test the random source is asked for the notation's die size."""
        dice = scripted_dice([17])
        roll_dice("1d20", rng=dice)
        assert dice.calls == [(1, 20)]

    def test_final_result_is_total_plus_modifiers(self) -> None:
        """Test final_result equals total plus every modifier."""
        rng = random.Random(99)
        for _ in range(100):
            result = roll_dice("4d6-3", [("situational", 2)], rng=rng)
            assert result is not None
            assert all(1 <= d <= 6 for d in result.individual)
            assert result.total == sum(result.individual)
            assert result.final_result == result.total + sum(m.value for m in result.modifiers)


class TestPerformTaskCheck:
    """Tests for 2d6 task checks."""

    def test_success_on_exact_target(self, scripted_dice: type) -> None:
        """Test meeting the difficulty exactly succeeds with effect 0."""
        check = perform_task_check(1, 1, 8, rng=scripted_dice([3, 3]))

        assert check.notation == "2d6"
        assert check.final_result == 8
        assert check.success is True
        assert check.effect == 0

    def test_failure(self, scripted_dice: type) -> None:
        """Test falling short fails with negative effect."""
        check = perform_task_check(0, -1, 10, rng=scripted_dice([2, 3]))

        assert check.final_result == 4
        assert check.success is False
        assert check.effect == -6

    def test_modifier_order(self, scripted_dice: type) -> None:
        """Test skill then characteristic then extra modifiers."""
        check = perform_task_check(
            2,
            -1,
            extra_modifiers=[("cover", -2)],
            rng=scripted_dice([6, 6]),
        )

        assert [m.name for m in check.modifiers] == ["skill", "characteristic", "cover"]
        assert check.difficulty == 8
        assert check.final_result == 12 + 2 - 1 - 2

    def test_effect_is_margin_over_difficulty(self) -> None:
        """Test effect and success agree for random rolls."""
        rng = random.Random(5)
        for difficulty in range(2, 16):
            check = perform_task_check(1, 0, difficulty, rng=rng)
            assert check.effect == check.final_result - difficulty
            assert check.success == (check.effect >= 0)


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_seed_is_reproducible(self) -> None:
        """Test the same seed yields the same rolls."""
        first = [DiceRoller(seed=42).roll("3d6").individual for _ in range(3)]
        second = [DiceRoller(seed=42).roll("3d6").individual for _ in range(3)]
        assert first == second

    def test_invalid_notation_raises(self) -> None:
        """Test roll() raises instead of returning None."""
        with pytest.raises(DiceRollError) as exc_info:
            DiceRoller(seed=1).roll("d6")

        assert exc_info.value.details["expression"] == "d6"

    def test_rng_and_seed_exclusive(self) -> None:
        """Test passing both a source and a seed is rejected."""
        with pytest.raises(ValueError):
            DiceRoller(random.Random(), seed=3)

    def test_task_check_default_difficulty(self, scripted_dice: type) -> None:
        """Test task_check falls back to the configured difficulty."""
        roller = DiceRoller(scripted_dice([4, 4]), default_difficulty=10)

        check = roller.task_check(skill_level=1, characteristic_modifier=0)

        assert check.difficulty == 10
        assert check.success is False

    def test_from_settings(self) -> None:
        """Test construction from GameSettings."""
        settings = GameSettings(default_task_difficulty=6, dice_seed=11)

        roller = DiceRoller.from_settings(settings)

        assert roller.default_difficulty == 6
        assert roller.roll("2d6").individual == DiceRoller(seed=11).roll("2d6").individual
