"""Dice rolling mechanics for Traveller.

Parses ``<count>d<sides>[+|-<modifier>]`` notation, rolls dice with named
modifiers, and resolves the 2d6 task check used throughout the ruleset.

Randomness is pluggable: every roll accepts any object exposing
``randint(a, b)`` (a ``random.Random`` instance, or a scripted source in
tests). Without one, the ``random`` module is used.

Example:
    >>> parse_dice_notation("3d8+2")
    DiceNotation(count=3, sides=8, modifier=2)
    >>> check = perform_task_check(skill_level=2, characteristic_modifier=1)
    >>> check.effect == check.final_result - 8
    True
"""

from __future__ import annotations

import random
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from traveller_manager.core.config import GameSettings
from traveller_manager.core.constants import (
    BASE_MODIFIER_NAME,
    CHARACTERISTIC_MODIFIER_NAME,
    DEFAULT_TASK_DIFFICULTY,
    SKILL_MODIFIER_NAME,
    TASK_CHECK_DICE,
)
from traveller_manager.core.exceptions import DiceRollError
from traveller_manager.core.logging import get_logger


logger = get_logger(__name__)

_DICE_PATTERN = re.compile(r"([0-9]+)[dD]([0-9]+)([+-][0-9]+)?")


class RandomSource(Protocol):
    """Anything that can produce a uniform integer in [a, b]."""

    def randint(self, a: int, b: int) -> int: ...


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class DiceNotation:
    """A parsed dice notation string.

    Attributes:
        count: Number of dice (at least 1).
        sides: Faces per die (at least 1).
        modifier: Inline modifier, possibly negative or zero.
    """

    count: int
    sides: int
    modifier: int = 0

    def __str__(self) -> str:
        if self.modifier:
            return f"{self.count}d{self.sides}{self.modifier:+d}"
        return f"{self.count}d{self.sides}"


@dataclass(frozen=True)
class Modifier:
    """A named dice modifier (DM)."""

    name: str
    value: int


@dataclass(frozen=True)
class RollResult:
    """Outcome of a single roll.

    Attributes:
        notation: The notation that was rolled.
        individual: Per-die outcomes, in roll order.
        total: Sum of the individual dice.
        modifiers: Applied modifiers, in application order.
        final_result: total plus every modifier value.
    """

    notation: str
    individual: tuple[int, ...]
    total: int
    modifiers: tuple[Modifier, ...]
    final_result: int

    @property
    def modifier_total(self) -> int:
        """Sum of all applied modifier values."""
        return sum(m.value for m in self.modifiers)


@dataclass(frozen=True)
class TaskCheckResult(RollResult):
    """Outcome of a 2d6 task check.

    Attributes:
        difficulty: Target number the check was made against.
        success: Whether final_result met the difficulty.
        effect: final_result minus difficulty.
    """

    difficulty: int
    success: bool
    effect: int


# =============================================================================
# Rolling Functions
# =============================================================================


def _source(rng: RandomSource | None) -> RandomSource:
    return rng if rng is not None else random


def _as_modifier(modifier: Modifier | tuple[str, int]) -> Modifier:
    if isinstance(modifier, Modifier):
        return modifier
    name, value = modifier
    return Modifier(name=name, value=value)


def parse_dice_notation(notation: str) -> DiceNotation | None:
    """Parse dice notation such as ``2d6``, ``3d8+2`` or ``1d20-1``.

    Args:
        notation: The notation string.

    Returns:
        The parsed notation, or None when the string is not valid dice
        notation (including a missing count such as ``d6``, or a zero
        count or side number).
    """
    if not isinstance(notation, str):
        return None

    match = _DICE_PATTERN.fullmatch(notation)
    if match is None:
        return None

    count = int(match.group(1))
    sides = int(match.group(2))
    if count < 1 or sides < 1:
        return None

    modifier = int(match.group(3)) if match.group(3) else 0
    return DiceNotation(count=count, sides=sides, modifier=modifier)


def roll_die(sides: int, rng: RandomSource | None = None) -> int:
    """Roll one die.

    Args:
        sides: Number of faces (at least 1).
        rng: Optional random source.

    Returns:
        A uniform integer in [1, sides].

    Raises:
        DiceRollError: If sides is less than 1.
    """
    if sides < 1:
        raise DiceRollError("A die needs at least one side", details={"sides": sides})
    return _source(rng).randint(1, sides)


def _roll_parsed(parsed: DiceNotation, rng: RandomSource | None) -> tuple[int, ...]:
    return tuple(roll_die(parsed.sides, rng) for _ in range(parsed.count))


def roll_dice(
    notation: str,
    modifiers: Iterable[Modifier | tuple[str, int]] = (),
    *,
    rng: RandomSource | None = None,
) -> RollResult | None:
    """Roll dice from notation and apply named modifiers.

    A non-zero inline modifier (the ``+1`` in ``2d6+1``) is applied first
    under the name ``base``; caller modifiers follow in the order given.

    Args:
        notation: Dice notation to roll.
        modifiers: Additional named modifiers.
        rng: Optional random source.

    Returns:
        The roll result, or None if the notation does not parse.
    """
    parsed = parse_dice_notation(notation)
    if parsed is None:
        logger.debug("Rejected dice notation", notation=notation)
        return None

    individual = _roll_parsed(parsed, rng)
    total = sum(individual)

    applied: list[Modifier] = []
    if parsed.modifier != 0:
        applied.append(Modifier(name=BASE_MODIFIER_NAME, value=parsed.modifier))
    applied.extend(_as_modifier(m) for m in modifiers)

    result = RollResult(
        notation=notation,
        individual=individual,
        total=total,
        modifiers=tuple(applied),
        final_result=total + sum(m.value for m in applied),
    )
    logger.debug(
        "Dice rolled",
        notation=notation,
        individual=list(individual),
        final_result=result.final_result,
    )
    return result


def perform_task_check(
    skill_level: int,
    characteristic_modifier: int,
    difficulty: int = DEFAULT_TASK_DIFFICULTY,
    extra_modifiers: Iterable[Modifier | tuple[str, int]] = (),
    *,
    rng: RandomSource | None = None,
) -> TaskCheckResult:
    """Resolve a task check: 2d6 + skill + characteristic DM vs difficulty.

    Args:
        skill_level: Skill level applied as the ``skill`` modifier.
        characteristic_modifier: Characteristic DM applied as ``characteristic``.
        difficulty: Target number; the check succeeds on final_result >= difficulty.
        extra_modifiers: Situational modifiers appended after skill and characteristic.
        rng: Optional random source.

    Returns:
        TaskCheckResult with success flag and effect.
    """
    individual = _roll_parsed(DiceNotation(count=2, sides=6), rng)
    total = sum(individual)

    applied = (
        Modifier(name=SKILL_MODIFIER_NAME, value=skill_level),
        Modifier(name=CHARACTERISTIC_MODIFIER_NAME, value=characteristic_modifier),
        *(_as_modifier(m) for m in extra_modifiers),
    )
    final_result = total + sum(m.value for m in applied)
    difficulty = int(difficulty)

    result = TaskCheckResult(
        notation=TASK_CHECK_DICE,
        individual=individual,
        total=total,
        modifiers=applied,
        final_result=final_result,
        difficulty=difficulty,
        success=final_result >= difficulty,
        effect=final_result - difficulty,
    )
    logger.debug(
        "Task check resolved",
        difficulty=difficulty,
        final_result=final_result,
        effect=result.effect,
    )
    return result


# =============================================================================
# Dice Roller
# =============================================================================


class DiceRoller:
    """Dice roller bound to one random source.

    Unlike the module-level functions, ``roll`` raises DiceRollError on
    invalid notation, for callers that prefer exceptions.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> result = roller.roll("2d6+1")
        >>> 3 <= result.final_result <= 13
        True
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        *,
        seed: int | None = None,
        default_difficulty: int = DEFAULT_TASK_DIFFICULTY,
    ) -> None:
        """Initialize the dice roller.

        Args:
            rng: Random source to draw from. Mutually exclusive with seed.
            seed: Seed for a private random.Random, for reproducible rolls.
            default_difficulty: Difficulty used by task_check when none is given.
        """
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self.default_difficulty = default_difficulty
        logger.info("DiceRoller initialized", seed=seed, default_difficulty=default_difficulty)

    @classmethod
    def from_settings(cls, settings: GameSettings) -> DiceRoller:
        """Build a roller from game settings (seed and default difficulty)."""
        return cls(
            seed=settings.dice_seed,
            default_difficulty=settings.default_task_difficulty,
        )

    def roll_die(self, sides: int) -> int:
        return roll_die(sides, self._rng)

    def roll(
        self,
        notation: str,
        modifiers: Iterable[Modifier | tuple[str, int]] = (),
    ) -> RollResult:
        """Roll dice according to the given notation.

        Args:
            notation: Dice notation (e.g. '2d6', '1d20-1').
            modifiers: Additional named modifiers.

        Returns:
            The roll result.

        Raises:
            DiceRollError: If the notation is invalid.
        """
        result = roll_dice(notation, modifiers, rng=self._rng)
        if result is None:
            raise DiceRollError("Invalid dice notation", expression=str(notation))
        logger.info("Dice rolled", notation=notation, final_result=result.final_result)
        return result

    def task_check(
        self,
        skill_level: int,
        characteristic_modifier: int,
        difficulty: int | None = None,
        extra_modifiers: Iterable[Modifier | tuple[str, int]] = (),
    ) -> TaskCheckResult:
        """Resolve a task check against the given or default difficulty."""
        target = self.default_difficulty if difficulty is None else difficulty
        result = perform_task_check(
            skill_level,
            characteristic_modifier,
            target,
            extra_modifiers,
            rng=self._rng,
        )
        logger.info(
            "Task check rolled",
            difficulty=target,
            final_result=result.final_result,
            success=result.success,
        )
        return result


__all__ = [
    "RandomSource",
    "DiceNotation",
    "Modifier",
    "RollResult",
    "TaskCheckResult",
    "parse_dice_notation",
    "roll_die",
    "roll_dice",
    "perform_task_check",
    "DiceRoller",
]
