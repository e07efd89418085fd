"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HeroForgeError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Invalid engine call arguments.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the cached settings.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up structured logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from heroforge.core.config import (
    CombatSettings,
    DecisionSettings,
    RegenSettings,
    RewardSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from heroforge.core.exceptions import (
    ConfigurationError,
    EngineError,
    HeroForgeError,
    HeroNotFoundError,
    PersistenceError,
    ProgressionError,
    RandomSourceError,
    ValidationError,
)
from heroforge.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Configuration
    "CombatSettings",
    "DecisionSettings",
    "RegenSettings",
    "RewardSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
    # Exceptions
    "ConfigurationError",
    "EngineError",
    "HeroForgeError",
    "HeroNotFoundError",
    "PersistenceError",
    "ProgressionError",
    "RandomSourceError",
    "ValidationError",
    # Logging
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
