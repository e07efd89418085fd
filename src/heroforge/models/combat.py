"""Pydantic V2 models for combat resolution.

``EnemyDescriptor`` and ``CombatOptions`` are the inputs handed to the
resolver, ``Combatant`` is its internal per-fight state and
``CombatResult`` is the value object it hands back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from heroforge.models.enums import Difficulty, Element, ItemRarity


# =============================================================================
# Inputs
# =============================================================================


class EnemyDescriptor(BaseModel):
    """A group of identical enemies in one encounter.

    ``count`` is clamped to be non-negative and ``level`` to at least 1.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(description="Enemy template key, e.g. 'wolf'")
    count: int = Field(default=1)
    level: int = Field(default=1)
    element: Element | None = Field(default=None, description="Overrides the template element")

    @field_validator("count", mode="before")
    @classmethod
    def clamp_count(cls, value: Any) -> int:
        return max(0, int(value or 0))

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level(cls, value: Any) -> int:
        return max(1, int(value or 1))


class CombatOptions(BaseModel):
    """Context of an encounter.

    Attributes:
        floor: Dungeon floor, 0 outside dungeons.
        party_bonus_percent: Reward bonus from party play.
        streak: Consecutive successes feeding the reward multiplier.
        difficulty: Optional difficulty tier scaling enemies and rewards.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    floor: int = Field(default=0, ge=0)
    party_bonus_percent: float = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    difficulty: Difficulty | None = None


# =============================================================================
# Bestiary
# =============================================================================


class LootItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rarity: ItemRarity = ItemRarity.COMMON
    price: int = Field(default=0, ge=0)


class LootEntry(BaseModel):
    """One possible drop and its base chance."""

    model_config = ConfigDict(frozen=True)

    item: LootItem
    drop_rate: float = Field(ge=0, le=1)


class EnemyTemplate(BaseModel):
    """Level-1 stat block for an enemy type."""

    model_config = ConfigDict(frozen=True)

    name: str
    hp: int = Field(default=20, ge=1)
    strength: int = Field(default=5, ge=0)
    agility: int = Field(default=5, ge=0)
    constitution: int = Field(default=5, ge=0)
    armor: int = Field(default=0, ge=0)
    weapon_name: str = "claws"
    weapon_attack: int = Field(default=2, ge=0)
    crit_chance: float = Field(default=0.05, ge=0, le=1)
    element: Element = Element.PHYSICAL
    loot: tuple[LootEntry, ...] = ()


# =============================================================================
# Per-fight State
# =============================================================================


class Combatant(BaseModel):
    """Mutable fighter state for the duration of one resolution."""

    name: str
    is_hero: bool = False
    level: int = 1
    element: Element = Element.PHYSICAL
    max_hp: int
    hp: int
    strength: int
    agility: int
    constitution: int
    armor: int
    weapon_name: str
    weapon_attack: int
    crit_percent: float
    template_key: str | None = None
    stunned: bool = False

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def power(self) -> int:
        return self.strength + self.agility + self.constitution


# =============================================================================
# Result
# =============================================================================


class CombatResult(BaseModel):
    """Outcome of a combat resolution.

    XP and gold are reported, not applied: crediting them to the hero's
    economy is the caller's job. ``damage_taken`` is the total damage the
    hero received during the fight.
    """

    victory: bool
    turns: int = Field(default=0, ge=0)
    damage_taken: int = Field(default=0, ge=0)
    xp_gained: int = Field(default=0, ge=0)
    gold_gained: int = Field(default=0, ge=0)
    items_gained: list[LootItem] = Field(default_factory=list)
    enemies_defeated: int = Field(default=0, ge=0)
    log: list[str] = Field(default_factory=list)

    pet_damage: int = Field(default=0, ge=0)
    pet_healing: int = Field(default=0, ge=0)
    pet_stuns: int = Field(default=0, ge=0)
    pet_energy_used: int = Field(default=0, ge=0)
    pet_element_highlights: list[Element] = Field(default_factory=list)


__all__ = [
    "EnemyDescriptor",
    "CombatOptions",
    "LootItem",
    "LootEntry",
    "EnemyTemplate",
    "Combatant",
    "CombatResult",
]
