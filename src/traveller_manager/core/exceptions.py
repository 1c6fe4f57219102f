"""Custom exception hierarchy for the Traveller Campaign Manager.

The rules engine reports routine failures (bad UWP strings, bad dice
notation, denied permissions) as return values. The exceptions below cover
the raising variants of those APIs, configuration problems, and storage
failures. All exceptions inherit from TravellerManagerError, enabling unified
error handling at the application boundary while preserving domain context.

Example:
    >>> from traveller_manager.core.exceptions import DiceRollError
    >>> raise DiceRollError("Invalid dice notation", expression="2x6")
"""

from __future__ import annotations

from typing import Any


class TravellerManagerError(Exception):
    """Base exception for all Traveller Campaign Manager errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Engine Exceptions
# =============================================================================


class RulesEngineError(TravellerManagerError):
    """Base exception for rules engine errors.

    Raised by the strict (raising) variants of the rules functions.
    """


class DiceRollError(RulesEngineError):
    """Raised when dice notation cannot be parsed or rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice notation that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class WorldProfileError(RulesEngineError):
    """Raised when a Universal World Profile string is malformed."""

    def __init__(
        self,
        message: str,
        *,
        uwp: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize world profile error with the offending UWP.

        Args:
            message: Human-readable error description.
            uwp: The UWP string that failed to decode.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if uwp is not None:
            combined_details["uwp"] = uwp
        super().__init__(message, details=combined_details)


class HexCoordinateError(RulesEngineError):
    """Raised when a sector hex coordinate is malformed."""

    def __init__(
        self,
        message: str,
        *,
        coordinate: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if coordinate is not None:
            combined_details["coordinate"] = coordinate
        super().__init__(message, details=combined_details)


# =============================================================================
# Access Control Exceptions
# =============================================================================


class AccessControlError(TravellerManagerError):
    """Base exception for access control errors."""


class PermissionDeniedError(AccessControlError):
    """Raised when a caller converts a failed decision into an exception.

    Attributes:
        code: Machine-readable decision code (e.g. INSUFFICIENT_PERMISSIONS).
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize permission error with its decision code.

        Args:
            message: Human-readable error description.
            code: Machine-readable decision code.
            details: Optional dictionary containing additional error context.
        """
        self.code = code
        combined_details = details or {}
        combined_details["code"] = code
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(TravellerManagerError):
    """Base exception for persistence errors."""


class DuplicateRecordError(StorageError):
    """Raised when an insert violates a uniqueness constraint."""


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(TravellerManagerError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(TravellerManagerError):
    """Raised when data validation fails in a raising API.

    Attributes:
        errors: Every violation found, not just the first.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            errors: All violation messages collected during validation.
            details: Optional dictionary containing additional error context.
        """
        self.errors = list(errors or [])
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        if self.errors:
            combined_details["errors"] = self.errors
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "TravellerManagerError",
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
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
