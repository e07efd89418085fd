"""HeroForge - simulation core for a browser RPG.

Turns player actions into numeric outcomes: combat results, stamina/HP/MP
over time, reputation shifts and rank promotions. Every random draw goes
through one injectable ``DiceRoller`` so outcomes are reproducible.

Example:
    >>> from heroforge import GameEngine, HeroSnapshot, WorldState
    >>> from heroforge.engine import DiceRoller
    >>>
    >>> hero = HeroSnapshot(name="Aria", world_state=WorldState.initialize())
    >>> engine = GameEngine(dice=DiceRoller(seed=42))
    >>> report = engine.fight(hero, [{"type": "goblin", "count": 2, "level": 1}])
    >>> print(report.result.log[-1])

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 models (hero snapshot, world state, effects, ranks).
    engine: Combat, regeneration, decisions, ranks and the GameEngine facade.
    storage: Caller-side repository interface.
"""

from __future__ import annotations

# Core
from heroforge.core.config import Settings, get_settings
from heroforge.core.exceptions import HeroForgeError
from heroforge.core.logging import configure_logging, get_logger

# Models
from heroforge.models import (
    CombatResult,
    DecisionChoice,
    EnemyDescriptor,
    HeroSnapshot,
    Rank,
    WorldState,
)

# Engine
from heroforge.engine import DiceRoller, GameEngine


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "HeroForgeError",
    "configure_logging",
    "get_logger",
    # Models
    "CombatResult",
    "DecisionChoice",
    "EnemyDescriptor",
    "HeroSnapshot",
    "Rank",
    "WorldState",
    # Engine
    "DiceRoller",
    "GameEngine",
]
