"""Pydantic V2 models for the hero snapshot.

The ``HeroSnapshot`` is the single mutable aggregate every engine call
receives and mutates in place. Content data feeding it is not fully trusted,
so construction clamps out-of-range values instead of rejecting them, and
``HeroSnapshot.clamp_vitals`` re-applies the vital bounds after the engine
has mutated the snapshot.

Components intentionally do not validate on assignment: the engine writes
already-bounded values and calls ``clamp_vitals`` itself.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from heroforge.core.constants import (
    DEFAULT_STAMINA_MAX,
    DEFAULT_STAMINA_RATE,
    MAX_FATIGUE,
    MAX_PET_ENERGY,
    MIN_ATTRIBUTE,
)
from heroforge.models.enums import Alignment, Attribute, Element, PetSkill
from heroforge.models.ranks import HeroRankData
from heroforge.models.world import WorldState


def _non_negative(value: Any) -> int:
    if value is None:
        return 0
    return max(0, int(value))


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# =============================================================================
# Base Component
# =============================================================================


class Component(BaseModel):
    """Base class for the mutable parts of a hero snapshot."""

    model_config = ConfigDict(
        frozen=False,
        extra="ignore",
    )


# =============================================================================
# Core Components
# =============================================================================


class Attributes(Component):
    """The six core attributes, each clamped to be non-negative."""

    strength: int = Field(default=10, description="Physical power")
    agility: int = Field(default=10, description="Speed and reflexes")
    constitution: int = Field(default=10, description="Health and endurance")
    intelligence: int = Field(default=10, description="Arcane aptitude")
    wisdom: int = Field(default=10, description="Perception and insight")
    charisma: int = Field(default=10, description="Force of personality")

    @field_validator("*", mode="before")
    @classmethod
    def clamp_attribute(cls, value: Any) -> int:
        """Clamp negative or missing attributes to the minimum."""
        if value is None:
            return MIN_ATTRIBUTE
        return max(MIN_ATTRIBUTE, int(value))

    def get(self, attribute: Attribute | str) -> int:
        """Look up an attribute by enum or name."""
        return int(getattr(self, Attribute(attribute).value))


class DerivedStats(Component):
    """Derived combat stats and current vitals.

    ``current_hp`` defaults to ``hp`` (and ``current_mp`` to ``mp``) when
    omitted, and both are clamped into ``[0, max]``.
    """

    hp: int = Field(default=30, description="Maximum HP")
    current_hp: int = Field(default=30, description="Current HP")
    mp: int = Field(default=10, description="Maximum MP")
    current_mp: int = Field(default=10, description="Current MP")
    armor_class: int = Field(default=10, description="Armor class")
    power: int = Field(default=0, description="Aggregate power score")
    luck: int | None = Field(default=None, description="Luck stat added to decision rolls")

    @model_validator(mode="before")
    @classmethod
    def default_current_vitals(cls, data: Any) -> Any:
        """Fill missing current vitals from their maximums."""
        if isinstance(data, dict):
            data = dict(data)
            if data.get("current_hp") is None and "hp" in data:
                data["current_hp"] = data["hp"]
            if data.get("current_mp") is None and "mp" in data:
                data["current_mp"] = data["mp"]
        return data

    @field_validator("hp", "mp", "armor_class", "power", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)

    @model_validator(mode="after")
    def clamp_current(self) -> "DerivedStats":
        self.clamp()
        return self

    def clamp(self) -> None:
        """Clamp current vitals into ``[0, max]``."""
        self.current_hp = max(0, min(self.hp, int(self.current_hp)))
        self.current_mp = max(0, min(self.mp, int(self.current_mp)))


class Stamina(Component):
    """Stamina pool regenerated over wall-clock time.

    Attributes:
        current: Current stamina, within ``[0, max]``.
        max: Pool size.
        last_recovery: When regeneration was last credited. ``None`` means
            the pool has never been ticked.
        recovery_rate: Stamina regenerated per minute.
    """

    current: int = Field(default=DEFAULT_STAMINA_MAX)
    max: int = Field(default=DEFAULT_STAMINA_MAX)
    last_recovery: datetime | None = Field(default=None)
    recovery_rate: int = Field(default=DEFAULT_STAMINA_RATE)

    @field_validator("current", "max", "recovery_rate", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)

    @field_validator("last_recovery")
    @classmethod
    def normalize_last_recovery(cls, value: datetime | None) -> datetime | None:
        return None if value is None else ensure_utc(value)

    @model_validator(mode="after")
    def clamp_current(self) -> "Stamina":
        self.clamp()
        return self

    def clamp(self) -> None:
        """Clamp current stamina into ``[0, max]``."""
        self.current = max(0, min(self.max, int(self.current)))


class Progression(Component):
    """Economy and experience counters."""

    xp: int = Field(default=0)
    level: int = Field(default=1)
    gold: int = Field(default=0)
    fatigue: int = Field(default=0, description="Fatigue percentage (0-100)")

    @field_validator("xp", "gold", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level(cls, value: Any) -> int:
        return max(1, _non_negative(value))

    @field_validator("fatigue", mode="before")
    @classmethod
    def clamp_fatigue(cls, value: Any) -> int:
        return min(MAX_FATIGUE, _non_negative(value))


class HeroStats(Component):
    """Lifetime counters feeding the rank system."""

    quests_completed: int = Field(default=0)

    @field_validator("quests_completed", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)


# =============================================================================
# Companions and Buffs
# =============================================================================


class Pet(Component):
    """Combat companion. Only its bonus-relevant fields are modelled."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(default="Companion")
    element: Element = Field(default=Element.PHYSICAL)
    level: int = Field(default=1)
    exclusive_skill: PetSkill | None = Field(default=None)
    energy: int = Field(default=MAX_PET_ENERGY, description="Energy pool (0-100)")

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level(cls, value: Any) -> int:
        return max(1, _non_negative(value))

    @field_validator("energy", mode="before")
    @classmethod
    def clamp_energy(cls, value: Any) -> int:
        return min(MAX_PET_ENERGY, _non_negative(value))


class Mount(Component):
    """Mount. Only the stamina-discount fields are modelled."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(default="Mount")
    speed_bonus: int = Field(default=0)
    refine_level: int = Field(default=0)
    mastery: int = Field(default=0)

    @field_validator("speed_bonus", "refine_level", "mastery", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)


class TimedBuff(Component):
    """Base for buffs that expire at a wall-clock instant."""

    expires_at: datetime | None = Field(default=None, description="None never expires")

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, value: datetime | None) -> datetime | None:
        return None if value is None else ensure_utc(value)

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or ensure_utc(now) < ensure_utc(self.expires_at)


class MountBuff(TimedBuff):
    """Temporary speed bonus stacked on the active mount."""

    speed_bonus: int = Field(default=0)

    @field_validator("speed_bonus", mode="before")
    @classmethod
    def clamp_non_negative(cls, value: Any) -> int:
        return _non_negative(value)


class RestBuff(TimedBuff):
    """Resting buff multiplying HP/MP/stamina regeneration."""

    multiplier: float | None = Field(
        default=None,
        description="Override for the configured rest multiplier",
    )


# =============================================================================
# Hero Snapshot
# =============================================================================


class HeroSnapshot(Component):
    """Mutable aggregate passed through every engine call.

    Example:
        >>> hero = HeroSnapshot(name="Aria", derived={"hp": 40})
        >>> hero.derived.current_hp
        40
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(default="Hero")
    attributes: Attributes = Field(default_factory=Attributes)
    derived: DerivedStats = Field(default_factory=DerivedStats)
    stamina: Stamina = Field(default_factory=Stamina)
    progression: Progression = Field(default_factory=Progression)
    stats: HeroStats = Field(default_factory=HeroStats)
    alignment: Alignment = Field(default=Alignment.TRUE_NEUTRAL)
    element: Element = Field(default=Element.PHYSICAL)

    world_state: WorldState | None = Field(default=None)
    rank_data: HeroRankData | None = Field(default=None)

    titles: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)

    pets: list[Pet] = Field(default_factory=list)
    active_pet_id: str | None = Field(default=None)
    mounts: list[Mount] = Field(default_factory=list)
    active_mount_id: str | None = Field(default=None)
    mount_buff: MountBuff | None = Field(default=None)
    rest_buff: RestBuff | None = Field(default=None)
    in_dungeon: bool = Field(default=False)

    @property
    def active_pet(self) -> Pet | None:
        if self.active_pet_id is None:
            return None
        return next((p for p in self.pets if p.id == self.active_pet_id), None)

    @property
    def active_mount(self) -> Mount | None:
        if self.active_mount_id is None:
            return None
        return next((m for m in self.mounts if m.id == self.active_mount_id), None)

    @property
    def luck(self) -> int:
        """Luck stat; derived from charisma and wisdom when not set."""
        if self.derived.luck is not None:
            return max(0, self.derived.luck)
        return (self.attributes.charisma + self.attributes.wisdom) // 2

    @property
    def level(self) -> int:
        return self.progression.level

    def clamp_vitals(self) -> None:
        """Re-apply vital bounds after in-place mutation."""
        self.derived.clamp()
        self.stamina.clamp()
        for pet in self.pets:
            pet.energy = max(0, min(MAX_PET_ENERGY, pet.energy))


__all__ = [
    "ensure_utc",
    "Component",
    "Attributes",
    "DerivedStats",
    "Stamina",
    "Progression",
    "HeroStats",
    "Pet",
    "Mount",
    "TimedBuff",
    "MountBuff",
    "RestBuff",
    "HeroSnapshot",
]
