"""Configuration management for the Traveller Campaign Manager.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.

Example:
    >>> from traveller_manager.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.default_task_difficulty
    8

Environment Variables:
    TRAVELLER_MANAGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TRAVELLER_MANAGER_JSON_LOGS: Emit JSON log lines instead of console output
    TRAVELLER_MANAGER_DATABASE_PATH: Path to the SQLite database file
    TRAVELLER_MANAGER_GAME_DEFAULT_TASK_DIFFICULTY: Target number for task checks
    TRAVELLER_MANAGER_GAME_DICE_SEED: Fixed seed for reproducible dice
    TRAVELLER_MANAGER_CAMPAIGN_FREE_CAMPAIGN_LIMIT: Campaigns allowed on the free tier
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from traveller_manager.core.constants import (
    CAMPAIGN_LIMITS,
    DEFAULT_MAX_PLAYERS,
    DEFAULT_TASK_DIFFICULTY,
)
from traveller_manager.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for persistent storage.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAVELLER_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/traveller.db"),
        description="Path to SQLite database",
    )


class GameSettings(BaseSettings):
    """Configuration for rules engine behavior.

    Attributes:
        default_task_difficulty: Target number used when a task check
            does not name one.
        dice_seed: Optional seed for reproducible dice rolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAVELLER_MANAGER_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_task_difficulty: int = Field(
        default=DEFAULT_TASK_DIFFICULTY,
        ge=2,
        le=16,
        description="Default task check difficulty",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Seed for reproducible dice rolls",
    )


class CampaignSettings(BaseSettings):
    """Configuration for campaign membership limits.

    Attributes:
        free_campaign_limit: Campaigns a FREE tier gamemaster may run.
        standard_campaign_limit: Campaigns a STANDARD tier gamemaster may run.
        premium_campaign_limit: Campaigns a PREMIUM tier gamemaster may run.
        default_max_players: Player cap for campaigns that do not set one.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAVELLER_MANAGER_CAMPAIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    free_campaign_limit: int = Field(default=CAMPAIGN_LIMITS["FREE"], ge=0)
    standard_campaign_limit: int = Field(default=CAMPAIGN_LIMITS["STANDARD"], ge=0)
    premium_campaign_limit: int = Field(default=CAMPAIGN_LIMITS["PREMIUM"], ge=0)
    default_max_players: int = Field(
        default=DEFAULT_MAX_PLAYERS,
        ge=2,
        le=20,
        description="Default player cap per campaign",
    )

    @model_validator(mode="after")
    def validate_tier_order(self) -> "CampaignSettings":
        """Ensure higher subscription tiers never allow fewer campaigns.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the limits decrease from one tier to the next.
        """
        if not (
            self.free_campaign_limit
            <= self.standard_campaign_limit
            <= self.premium_campaign_limit
        ):
            raise ConfigurationError(
                "Campaign limits must not decrease from FREE to STANDARD to PREMIUM",
                config_key="campaign_limits",
                details={
                    "free": self.free_campaign_limit,
                    "standard": self.standard_campaign_limit,
                    "premium": self.premium_campaign_limit,
                },
            )
        return self

    def limit_for_tier(self, tier: str) -> int:
        """Return the campaign limit for a subscription tier name."""
        limits = {
            "FREE": self.free_campaign_limit,
            "STANDARD": self.standard_campaign_limit,
            "PREMIUM": self.premium_campaign_limit,
        }
        return limits.get(tier.upper(), self.free_campaign_limit)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        storage: Storage settings.
        game: Rules engine settings.
        campaign: Campaign limit settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAVELLER_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Traveller Campaign Manager",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)
    campaign: CampaignSettings = Field(default_factory=CampaignSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "GameSettings",
    "CampaignSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
