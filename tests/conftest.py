"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the HeroForge engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from heroforge.core.config import Settings
    from heroforge.engine.dice import DiceRoller
    from heroforge.models.hero import HeroSnapshot


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from heroforge.core.config import clear_settings_cache

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
        "HEROFORGE_DEBUG": "true",
        "HEROFORGE_LOG_LEVEL": "DEBUG",
        "HEROFORGE_COMBAT_MAX_TURNS": "25",
        "HEROFORGE_REGEN_CATCH_UP_CAP_MINUTES": "3",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings() -> Settings:
    """Provide default engine settings."""
    from heroforge.core.config import Settings

    return Settings()


# =============================================================================
# Randomness Fixtures
# =============================================================================


@pytest.fixture
def fixed_dice() -> DiceRoller:
    """Dice whose every draw returns 0.5 (percentile rolls come up 51)."""
    from heroforge.engine.dice import DiceRoller, FixedRandomSource

    return DiceRoller(source=FixedRandomSource(0.5))


@pytest.fixture
def sequence_dice() -> Callable[[Sequence[float]], DiceRoller]:
    """Factory for dice cycling through a fixed list of draws."""
    from heroforge.engine.dice import DiceRoller, SequenceRandomSource

    def _make(values: Sequence[float]) -> DiceRoller:
        return DiceRoller(source=SequenceRandomSource(values))

    return _make


@pytest.fixture
def seeded_dice() -> DiceRoller:
    """Dice backed by a seeded ``random.Random``."""
    from heroforge.engine.dice import DiceRoller

    return DiceRoller(seed=1234)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """A fixed, timezone-aware reference instant."""
    return datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_hero() -> Callable[..., HeroSnapshot]:
    """Factory building hero snapshots from keyword overrides.

    Example:
        >>> hero = make_hero(derived={"hp": 50}, alignment="lawful_good")
    """
    from heroforge.models.hero import HeroSnapshot
    from heroforge.models.world import WorldState

    def _make(*, with_world: bool = True, **overrides: Any) -> HeroSnapshot:
        data: dict[str, Any] = {
            "id": "hero-1",
            "name": "Aria",
            "attributes": {
                "strength": 10,
                "agility": 10,
                "constitution": 10,
                "intelligence": 10,
                "wisdom": 10,
                "charisma": 10,
            },
            "derived": {"hp": 30, "current_hp": 30, "mp": 10, "current_mp": 10, "armor_class": 10},
        }
        data.update(overrides)
        if with_world and "world_state" not in data:
            data["world_state"] = WorldState.initialize()
        return HeroSnapshot.model_validate(data)

    return _make


@pytest.fixture
def hero(make_hero: Callable[..., HeroSnapshot]) -> HeroSnapshot:
    """A default level-1 hero with an initialized world state."""
    return make_hero()
