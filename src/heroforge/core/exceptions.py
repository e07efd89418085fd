"""Custom exception hierarchy for the HeroForge simulation engine.

Gameplay outcomes never raise: a lost fight or a failed roll is encoded in
the returned value. The exceptions below are reserved for programming and
configuration faults, such as invalid settings, a broken random source or
an unknown hero id handed to a repository. All of them inherit from
HeroForgeError so callers can catch everything at the application boundary.

Example:
    >>> from heroforge.core.exceptions import RandomSourceError
    >>> raise RandomSourceError("Draw outside [0, 1)", value=1.5)
"""

from __future__ import annotations

from typing import Any


class HeroForgeError(Exception):
    """Base exception for all HeroForge engine errors.

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
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Engine Domain Exceptions
# =============================================================================


class EngineError(HeroForgeError):
    """Base exception for simulation engine faults.

    Raised only when the engine itself is misused. Degenerate gameplay input
    (no enemies, no world state, empty effect lists) is not an error.
    """


class RandomSourceError(EngineError):
    """Raised when the injected random source misbehaves.

    The engine expects every draw to lie in ``[0, 1)``. A source returning
    anything else would silently skew every probability in the game.
    """

    def __init__(
        self,
        message: str,
        *,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize random source error with the offending value.

        Args:
            message: Human-readable error description.
            value: The value the source produced.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if value is not None:
            combined_details["value"] = value
        super().__init__(message, details=combined_details)


class ProgressionError(EngineError):
    """Raised when rank tables are inconsistent."""


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(HeroForgeError):
    """Base exception for caller-side repository errors."""


class HeroNotFoundError(PersistenceError):
    """Raised when a repository has no hero with the requested id."""

    def __init__(
        self,
        message: str,
        *,
        hero_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the missing hero id.

        Args:
            message: Human-readable error description.
            hero_id: The id that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if hero_id:
            combined_details["hero_id"] = hero_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(HeroForgeError):
    """Raised when engine configuration is invalid.

    This includes out-of-range tuning constants or incompatible
    combinations of settings.
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


class ValidationError(HeroForgeError):
    """Raised when an engine call receives arguments it cannot interpret.

    This covers programming mistakes such as an inverted integer range, not
    untrusted content data, which is clamped instead.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "HeroForgeError",
    # Engine exceptions
    "EngineError",
    "RandomSourceError",
    "ProgressionError",
    # Persistence exceptions
    "PersistenceError",
    "HeroNotFoundError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
