"""Enumeration types for the HeroForge engine.

This module defines the closed tag sets the engine reasons about: hero
attributes, elements, the nine alignments, difficulty tiers, effect types
and the ordered rank ladder.
"""

from __future__ import annotations

from enum import StrEnum


class Attribute(StrEnum):
    """The six core hero attributes."""

    STRENGTH = "strength"
    AGILITY = "agility"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


class Element(StrEnum):
    """Elemental affinity of a hero, enemy or pet.

    Physical is neutral to everything. Light and dark beat each other.
    """

    FIRE = "fire"
    ICE = "ice"
    THUNDER = "thunder"
    EARTH = "earth"
    LIGHT = "light"
    DARK = "dark"
    PHYSICAL = "physical"


class Alignment(StrEnum):
    """The nine alignments (lawful/neutral/chaotic x good/neutral/evil).

    Each axis layers an additive combat modifier: lawful improves hit
    chance, chaotic improves crit chance, evil drains life and good
    hits dark-element defenders harder.
    """

    LAWFUL_GOOD = "lawful_good"
    NEUTRAL_GOOD = "neutral_good"
    CHAOTIC_GOOD = "chaotic_good"
    LAWFUL_NEUTRAL = "lawful_neutral"
    TRUE_NEUTRAL = "true_neutral"
    CHAOTIC_NEUTRAL = "chaotic_neutral"
    LAWFUL_EVIL = "lawful_evil"
    NEUTRAL_EVIL = "neutral_evil"
    CHAOTIC_EVIL = "chaotic_evil"

    @property
    def is_lawful(self) -> bool:
        return self.value.startswith("lawful_")

    @property
    def is_chaotic(self) -> bool:
        return self.value.startswith("chaotic_")

    @property
    def is_good(self) -> bool:
        return self.value.endswith("_good")

    @property
    def is_evil(self) -> bool:
        return self.value.endswith("_evil")


class Difficulty(StrEnum):
    """Closed set of difficulty tags used by missions and dungeons."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EPIC = "epic"


class PetSkill(StrEnum):
    """Exclusive pet skills and the kind of contribution they make."""

    FERAL_INSTINCT = "feral_instinct"
    """Heavy bonus strike."""

    ARCANE_PULSE = "arcane_pulse"
    """Elemental burst scaled by the pet element, ignoring armor."""

    SACRED_AURA = "sacred_aura"
    """Heals the hero."""

    SHADOW_WHISPER = "shadow_whisper"
    """Stuns the current target for its next counter-attack."""


class ItemRarity(StrEnum):
    """Loot rarity tiers, lowest first."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def order(self) -> int:
        """Position of the tier, common == 0."""
        return list(ItemRarity).index(self)


class RewardType(StrEnum):
    """Kinds of rank rewards."""

    VISUAL = "visual"
    GAMEPLAY = "gameplay"
    COSMETIC = "cosmetic"
    SPECIAL = "special"


class AnimationTier(StrEnum):
    """Celebration animation intensity for a promotion."""

    ASCENSION = "ascension"
    EPIC = "epic"
    LEGENDARY = "legendary"


class Rank(StrEnum):
    """Ordered rank ladder, F lowest.

    String comparison would order "A" before "F", so the rich comparison
    operators are overridden to follow the ladder instead.
    """

    F = "F"
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"
    SS = "SS"
    SSS = "SSS"

    @property
    def order(self) -> int:
        """Position of the rank on the ladder (F == 0)."""
        return _RANK_LADDER.index(self)

    def next(self) -> Rank | None:
        """Get the rank directly above this one, or None at the top."""
        index = self.order
        if index + 1 >= len(_RANK_LADDER):
            return None
        return _RANK_LADDER[index + 1]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.order >= other.order


_RANK_LADDER: list[Rank] = list(Rank)


__all__ = [
    "Attribute",
    "Element",
    "Alignment",
    "Difficulty",
    "PetSkill",
    "ItemRarity",
    "RewardType",
    "AnimationTier",
    "Rank",
]
