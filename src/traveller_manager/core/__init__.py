"""Core module providing configuration, logging, and base exceptions.

This module serves as the foundation for the Traveller Campaign Manager,
providing essential infrastructure components used throughout the application.

Exports:
    Exceptions:
        TravellerManagerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        campaign_context: Scope log entries to a campaign and user.
"""

from __future__ import annotations

from traveller_manager.core.config import (
    CampaignSettings,
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from traveller_manager.core.exceptions import (
    AccessControlError,
    ConfigurationError,
    DiceRollError,
    DuplicateRecordError,
    HexCoordinateError,
    PermissionDeniedError,
    RulesEngineError,
    StorageError,
    TravellerManagerError,
    ValidationError,
    WorldProfileError,
)
from traveller_manager.core.logging import (
    bind_context,
    campaign_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "TravellerManagerError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Rules engine exceptions
    "RulesEngineError",
    "DiceRollError",
    "WorldProfileError",
    "HexCoordinateError",
    # Access control exceptions
    "AccessControlError",
    "PermissionDeniedError",
    # Storage exceptions
    "StorageError",
    "DuplicateRecordError",
    # Configuration
    "Settings",
    "StorageSettings",
    "GameSettings",
    "CampaignSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "campaign_context",
    "clear_context",
]
