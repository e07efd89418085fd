"""Simulation engine for the HeroForge core.

Submodules:
    dice: The single injectable random source (DiceRoller)
    modifiers: Element and alignment modifier tables
    scaling: Streak, difficulty, floor and stamina-cost utilities
    combat: Turn-based combat resolver and auto-resolve
    regen: Vitals/stamina regeneration ticker
    decisions: Roll-based decision-effect processor
    ranks: Rank/progression state machine
    game_engine: Facade running the standard control flow

Example:
    >>> from heroforge.engine import GameEngine, DiceRoller
    >>> engine = GameEngine(dice=DiceRoller(seed=42))
    >>> report = engine.fight(hero, [{"type": "wolf"}])
"""

from __future__ import annotations

# =============================================================================
# Randomness
# =============================================================================
from heroforge.engine.dice import (
    DiceRoller,
    FixedRandomSource,
    RandomSource,
    SequenceRandomSource,
)

# =============================================================================
# Modifiers and Scaling
# =============================================================================
from heroforge.engine.modifiers import (
    AlignmentModifiers,
    alignment_modifiers,
    compute_element_multiplier,
    element_multiplier,
)
from heroforge.engine.scaling import (
    DeathPenalty,
    DifficultyParams,
    compute_death_penalty,
    compute_effective_stamina_cost,
    difficulty_params,
    floor_enemy_multiplier,
    is_boss_floor,
    is_mini_boss_floor,
    reward_multiplier,
)

# =============================================================================
# Components
# =============================================================================
from heroforge.engine.combat import CombatResolver
from heroforge.engine.decisions import DecisionProcessor
from heroforge.engine.ranks import PromotionEstimate, RankSystem
from heroforge.engine.regen import RegenerationTicker
from heroforge.engine.game_engine import DecisionReport, FightReport, GameEngine


__all__ = [
    # Randomness
    "DiceRoller",
    "FixedRandomSource",
    "RandomSource",
    "SequenceRandomSource",
    # Modifiers
    "AlignmentModifiers",
    "alignment_modifiers",
    "compute_element_multiplier",
    "element_multiplier",
    # Scaling
    "DeathPenalty",
    "DifficultyParams",
    "compute_death_penalty",
    "compute_effective_stamina_cost",
    "difficulty_params",
    "floor_enemy_multiplier",
    "is_boss_floor",
    "is_mini_boss_floor",
    "reward_multiplier",
    # Components
    "CombatResolver",
    "DecisionProcessor",
    "PromotionEstimate",
    "RankSystem",
    "RegenerationTicker",
    "DecisionReport",
    "FightReport",
    "GameEngine",
]
