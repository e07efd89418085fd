"""Pydantic V2 models for the HeroForge simulation core.

Submodules:
    enums: Enumeration types (Element, Alignment, Rank, Difficulty, etc.)
    hero: The mutable HeroSnapshot aggregate and its components
    world: Factions, NPCs, active events and the decision log
    effects: Decision effects (tagged union) and choices
    combat: Encounter inputs, per-fight state and CombatResult
    bestiary: Enemy templates and loot tables
    ranks: Rank state models
    progression: Static rank tables

Example:
    >>> from heroforge.models import HeroSnapshot, WorldState
    >>> hero = HeroSnapshot(name="Aria", world_state=WorldState.initialize())
    >>> hero.world_state.factions["Adventurers"].reputation
    10
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from heroforge.models.enums import (
    Alignment,
    AnimationTier,
    Attribute,
    Difficulty,
    Element,
    ItemRarity,
    PetSkill,
    Rank,
    RewardType,
)

# =============================================================================
# World
# =============================================================================
from heroforge.models.world import (
    DecisionImpact,
    DecisionLogEntry,
    FactionState,
    ImmediateImpact,
    LongTermImpact,
    NpcState,
    RollResult,
    WorldState,
)

# =============================================================================
# Ranks
# =============================================================================
from heroforge.models.ranks import (
    HeroRankData,
    RankAchievements,
    RankCelebration,
    RankHistoryEntry,
    RankInfo,
    RankProgress,
    RankReward,
    RankThreshold,
)

# =============================================================================
# Hero
# =============================================================================
from heroforge.models.hero import (
    Attributes,
    DerivedStats,
    HeroSnapshot,
    HeroStats,
    Mount,
    MountBuff,
    Pet,
    Progression,
    RestBuff,
    Stamina,
)

# =============================================================================
# Effects
# =============================================================================
from heroforge.models.effects import (
    DecisionChoice,
    DecisionOutcome,
    Effect,
    GoldEffect,
    ItemEffect,
    NpcRelationEffect,
    ReputationEffect,
    RollModifier,
    SpawnEnemyEffect,
    WorldEventEffect,
    XpEffect,
    parse_effects,
)

# =============================================================================
# Combat
# =============================================================================
from heroforge.models.combat import (
    CombatOptions,
    CombatResult,
    EnemyDescriptor,
    EnemyTemplate,
    LootEntry,
    LootItem,
)


__all__ = [
    # Enums
    "Alignment",
    "AnimationTier",
    "Attribute",
    "Difficulty",
    "Element",
    "ItemRarity",
    "PetSkill",
    "Rank",
    "RewardType",
    # World
    "DecisionImpact",
    "DecisionLogEntry",
    "FactionState",
    "ImmediateImpact",
    "LongTermImpact",
    "NpcState",
    "RollResult",
    "WorldState",
    # Ranks
    "HeroRankData",
    "RankAchievements",
    "RankCelebration",
    "RankHistoryEntry",
    "RankInfo",
    "RankProgress",
    "RankReward",
    "RankThreshold",
    # Hero
    "Attributes",
    "DerivedStats",
    "HeroSnapshot",
    "HeroStats",
    "Mount",
    "MountBuff",
    "Pet",
    "Progression",
    "RestBuff",
    "Stamina",
    # Effects
    "DecisionChoice",
    "DecisionOutcome",
    "Effect",
    "GoldEffect",
    "ItemEffect",
    "NpcRelationEffect",
    "ReputationEffect",
    "RollModifier",
    "SpawnEnemyEffect",
    "WorldEventEffect",
    "XpEffect",
    "parse_effects",
    # Combat
    "CombatOptions",
    "CombatResult",
    "EnemyDescriptor",
    "EnemyTemplate",
    "LootEntry",
    "LootItem",
]
