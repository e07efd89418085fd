"""Reward and scaling utilities.

Pure helpers feeding multipliers into the combat resolver and the decision
processor: streak and difficulty multipliers, boss floor detection, loot
rarity floors, mount stamina discounts and the caller-level death penalty.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from heroforge.core.config import CombatSettings, RewardSettings, get_settings
from heroforge.core.constants import BOSS_FLOOR_INTERVAL, MINIBOSS_FLOOR_INTERVAL
from heroforge.models.enums import Difficulty, ItemRarity
from heroforge.models.hero import HeroSnapshot


# =============================================================================
# Multipliers
# =============================================================================


def reward_multiplier(streak: int, settings: RewardSettings | None = None) -> float:
    """Reward multiplier for a streak of consecutive successes.

    Example:
        >>> reward_multiplier(0)
        1.0
    """
    settings = settings or get_settings().reward
    return 1 + max(0, streak) * settings.streak_step


@dataclass(frozen=True)
class DifficultyParams:
    """Scaling applied by a difficulty tier.

    Attributes:
        enemy_scale: Multiplier on enemy HP and attack.
        reward_scale: Multiplier on XP and gold rewards.
        success_bias: Flat modifier added to decision rolls.
    """

    enemy_scale: float
    reward_scale: float
    success_bias: int


DIFFICULTY_TABLE: dict[Difficulty, DifficultyParams] = {
    Difficulty.EASY: DifficultyParams(enemy_scale=0.8, reward_scale=0.8, success_bias=10),
    Difficulty.NORMAL: DifficultyParams(enemy_scale=1.0, reward_scale=1.0, success_bias=0),
    Difficulty.HARD: DifficultyParams(enemy_scale=1.25, reward_scale=1.35, success_bias=-10),
    Difficulty.EPIC: DifficultyParams(enemy_scale=1.6, reward_scale=1.8, success_bias=-20),
}


def difficulty_params(difficulty: Difficulty | str | None) -> DifficultyParams:
    """Look up the scaling for a difficulty tag. ``None`` means normal."""
    if difficulty is None:
        return DIFFICULTY_TABLE[Difficulty.NORMAL]
    return DIFFICULTY_TABLE[Difficulty(difficulty)]


# =============================================================================
# Dungeon Floors
# =============================================================================


def is_boss_floor(floor: int) -> bool:
    return floor > 0 and floor % BOSS_FLOOR_INTERVAL == 0


def is_mini_boss_floor(floor: int) -> bool:
    return floor > 0 and floor % MINIBOSS_FLOOR_INTERVAL == 0 and not is_boss_floor(floor)


def floor_enemy_multiplier(floor: int, settings: CombatSettings | None = None) -> float:
    """Boss/mini-boss stat multiplier for a floor (1.0 on ordinary floors)."""
    settings = settings or get_settings().combat
    if is_boss_floor(floor):
        return settings.boss_multiplier
    if is_mini_boss_floor(floor):
        return settings.miniboss_multiplier
    return 1.0


def minimum_loot_rarity(floor: int, settings: CombatSettings | None = None) -> ItemRarity:
    """Lowest rarity a drop may have on a dungeon floor.

    The floor rises one tier every ``rarity_floor_step`` floors and stops at
    legendary.

    Example:
        >>> minimum_loot_rarity(25)
        <ItemRarity.RARE: 'rare'>
    """
    settings = settings or get_settings().combat
    tiers = list(ItemRarity)
    step = max(0, floor) // settings.rarity_floor_step
    return tiers[min(step, len(tiers) - 1)]


# =============================================================================
# Stamina Cost
# =============================================================================


def compute_mount_reduction(
    hero: HeroSnapshot,
    now: datetime | None = None,
    settings: RewardSettings | None = None,
) -> float:
    """Stamina cost discount granted by the active mount.

    Blends the mount's speed bonus, an unexpired mount buff, the refine
    level and the mastery tier (one tier per 10 mastery).

    Returns:
        The discount, clamped to ``[0, mount_reduction_cap]``.
    """
    settings = settings or get_settings().reward
    mount = hero.active_mount
    if mount is None:
        return 0.0

    speed = mount.speed_bonus
    buff = hero.mount_buff
    if buff is not None and (now is None or buff.is_active(now)):
        speed += buff.speed_bonus

    reduction = (
        speed * settings.speed_reduction_per_point
        + mount.refine_level * settings.refine_reduction_per_level
        + (mount.mastery // 10) * settings.mastery_reduction_per_tier
    )
    return max(0.0, min(settings.mount_reduction_cap, reduction))


def compute_effective_stamina_cost(
    hero: HeroSnapshot,
    base_cost: int,
    now: datetime | None = None,
    settings: RewardSettings | None = None,
) -> int:
    """Stamina actually charged for an action after the mount discount.

    Example:
        >>> compute_effective_stamina_cost(HeroSnapshot(), 20)
        20
    """
    reduction = compute_mount_reduction(hero, now, settings)
    return max(1, round(base_cost * (1 - reduction)))


# =============================================================================
# Death Penalty
# =============================================================================


@dataclass(frozen=True)
class DeathPenalty:
    gold: int
    xp: int


def compute_death_penalty(hero: HeroSnapshot, settings: RewardSettings | None = None) -> DeathPenalty:
    """Gold and XP a hero loses when dying in a dungeon.

    The combat resolver never applies this; it is a caller-level policy
    applied after a defeat.
    """
    settings = settings or get_settings().reward
    return DeathPenalty(
        gold=int(hero.progression.gold * settings.death_penalty_gold),
        xp=int(hero.progression.xp * settings.death_penalty_xp),
    )


__all__ = [
    "reward_multiplier",
    "DifficultyParams",
    "DIFFICULTY_TABLE",
    "difficulty_params",
    "is_boss_floor",
    "is_mini_boss_floor",
    "floor_enemy_multiplier",
    "minimum_loot_rarity",
    "compute_mount_reduction",
    "compute_effective_stamina_cost",
    "DeathPenalty",
    "compute_death_penalty",
]
