"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Traveller Campaign Manager test suite.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from traveller_manager.models.characteristics import Characteristics
from traveller_manager.models.enums import CampaignRole, SubscriptionTier
from traveller_manager.storage.database import Database


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedDice:
    """Random source that returns pre-arranged die faces in order.

    Records every ``randint`` call so tests can assert on the ranges
    that were requested.
    """

    def __init__(self, faces: Iterable[int]) -> None:
        self._faces = list(faces)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._faces:
            raise AssertionError("ScriptedDice ran out of faces")
        face = self._faces.pop(0)
        if not a <= face <= b:
            raise AssertionError(f"Scripted face {face} outside [{a}, {b}]")
        return face


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from traveller_manager.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TRAVELLER_MANAGER_DEBUG": "true",
        "TRAVELLER_MANAGER_LOG_LEVEL": "DEBUG",
        "TRAVELLER_MANAGER_GAME_DEFAULT_TASK_DIFFICULTY": "10",
        "TRAVELLER_MANAGER_CAMPAIGN_FREE_CAMPAIGN_LIMIT": "1",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def scripted_dice() -> type[ScriptedDice]:
    """Provide the scripted random source class.

    Returns:
        ScriptedDice, to be instantiated with the faces a test needs.
    """
    return ScriptedDice


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_characteristics() -> dict[str, int]:
    """Provide a legal characteristic block (UPP 789AB6).

    Returns:
        Dictionary of characteristic values.
    """
    return {
        "strength": 7,
        "dexterity": 8,
        "endurance": 9,
        "intelligence": 10,
        "education": 11,
        "social_standing": 6,
    }


@pytest.fixture
def characteristics_model(sample_characteristics: dict[str, int]) -> Characteristics:
    """Provide the sample characteristics as a model."""
    return Characteristics(**sample_characteristics)


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Database:
    """Provide an empty database in a temporary directory."""
    return Database(tmp_path / "traveller.db")


@pytest.fixture
def seeded_database(database: Database) -> Database:
    """Provide a database with one campaign and its people.

    Contents:
        - ``gm-1``: FREE tier gamemaster of ``camp-1``
        - ``player-1``: active PLAYER in ``camp-1``, owns character ``char-1``
        - ``player-2``: active PLAYER in ``camp-1``
        - ``observer-1``: active OBSERVER in ``camp-1``
        - ``outsider-1``: registered, not a member
    """
    database.add_user("gm@example.com", "Gamemaster", SubscriptionTier.FREE, user_id="gm-1")
    database.add_user("p1@example.com", "Player One", user_id="player-1")
    database.add_user("p2@example.com", "Player Two", user_id="player-2")
    database.add_user("obs@example.com", "Observer", user_id="observer-1")
    database.add_user("out@example.com", "Outsider", user_id="outsider-1")

    database.add_campaign("Spinward Marches", "gm-1", max_players=3, campaign_id="camp-1")
    database.add_member("camp-1", "player-1", CampaignRole.PLAYER)
    database.add_member("camp-1", "player-2", CampaignRole.PLAYER)
    database.add_member("camp-1", "observer-1", CampaignRole.OBSERVER)

    database.add_character(
        "Jamison",
        "player-1",
        "camp-1",
        Characteristics(
            strength=7,
            dexterity=8,
            endurance=9,
            intelligence=10,
            education=11,
            social_standing=6,
        ),
        character_id="char-1",
    )
    return database
