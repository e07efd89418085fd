"""World state models: factions, NPCs, active events and the decision log.

The decision log is append-only. Its entries (and the roll/impact records
inside them) are frozen models, so nothing downstream can rewrite history.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Any
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, field_validator


# =============================================================================
# Factions and NPCs
# =============================================================================


class FactionState(BaseModel):
    """Standing of the hero with one named faction."""

    model_config = ConfigDict(extra="ignore")

    reputation: int = Field(default=0, description="Signed standing with the faction")
    alliances: list[str] = Field(default_factory=list)
    enemies: list[str] = Field(default_factory=list)
    influence: int = Field(default=0, description="Weight of the faction in the world")

    @field_validator("influence", mode="before")
    @classmethod
    def clamp_influence(cls, value: Any) -> int:
        if value is None:
            return 0
        return max(0, int(value))


class NpcState(BaseModel):
    """Status of one named NPC relative to the hero."""

    model_config = ConfigDict(extra="ignore")

    alive: bool = True
    relation_to_player: int = 0
    current_location: str | None = None


# =============================================================================
# Decision Log Records
# =============================================================================

FrozenDeltas = Annotated[
    Mapping[str, int],
    AfterValidator(lambda value: MappingProxyType(dict(value))),
    PlainSerializer(lambda value: dict(value), return_type=dict[str, int]),
]
"""Name to delta mapping that is read-only once validated."""


class RollResult(BaseModel):
    """Outcome of a single 1..100 decision roll."""

    model_config = ConfigDict(frozen=True)

    roll: int = Field(ge=1, description="Raw die result")
    modifiers: int = Field(default=0, description="Sum of attribute, bonus and luck modifiers")
    threshold: int = Field(description="Risk threshold the total had to reach")
    success: bool

    @property
    def total(self) -> int:
        return self.roll + self.modifiers


class ImmediateImpact(BaseModel):
    """Deltas the caller applies to the hero's economy."""

    model_config = ConfigDict(frozen=True)

    gold: int = 0
    xp: int = 0
    reputation: FrozenDeltas = Field(default_factory=dict, validate_default=True)
    items: tuple[str, ...] = ()


class LongTermImpact(BaseModel):
    """World changes recorded for narrative context."""

    model_config = ConfigDict(frozen=True)

    npc_relations: FrozenDeltas = Field(default_factory=dict, validate_default=True)
    world_events: tuple[str, ...] = ()


class DecisionImpact(BaseModel):
    model_config = ConfigDict(frozen=True)

    immediate: ImmediateImpact = Field(default_factory=ImmediateImpact)
    long_term: LongTermImpact = Field(default_factory=LongTermImpact)


class DecisionLogEntry(BaseModel):
    """Immutable audit record of one risk-based choice."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: f"decision_{uuid4().hex}")
    hero_id: str
    quest_id: str
    choice_id: str
    choice_text: str
    timestamp: datetime
    impact: DecisionImpact
    roll_result: RollResult


# =============================================================================
# World State
# =============================================================================

DEFAULT_FACTIONS: dict[str, dict[str, object]] = {
    "City Guard": {"reputation": 0, "influence": 50},
    "Merchants": {"reputation": 0, "influence": 30},
    "Thieves": {"reputation": 0, "influence": 20, "enemies": ["City Guard"]},
    "Bandits": {
        "reputation": -10,
        "influence": 15,
        "enemies": ["City Guard", "Merchants"],
    },
    "Diplomats": {"reputation": 0, "influence": 25},
    "Adventurers": {"reputation": 10, "influence": 40},
}

DEFAULT_NPCS: dict[str, dict[str, object]] = {
    "Guard Captain": {"relation_to_player": 0, "current_location": "Barracks"},
    "Merchant Aldric": {"relation_to_player": 5, "current_location": "Market"},
    "Sage Elara": {"relation_to_player": 0, "current_location": "Library"},
    "Smith Gorin": {"relation_to_player": 0, "current_location": "Forge"},
}


class WorldState(BaseModel):
    """Per-hero world: faction standings, NPCs, active events and history.

    Attributes:
        factions: Faction name to standing.
        npc_status: NPC name to status.
        decision_log: Append-only list of decision records, oldest first.
        active_events: Set of active world event tags.
    """

    model_config = ConfigDict(extra="ignore")

    factions: dict[str, FactionState] = Field(default_factory=dict)
    npc_status: dict[str, NpcState] = Field(default_factory=dict)
    decision_log: list[DecisionLogEntry] = Field(default_factory=list)
    active_events: set[str] = Field(default_factory=set)

    @classmethod
    def initialize(cls) -> WorldState:
        """Build the starting world for a newly created hero."""
        return cls.model_validate(
            {
                "factions": DEFAULT_FACTIONS,
                "npc_status": DEFAULT_NPCS,
            }
        )

    def adjust_reputation(self, faction: str, delta: int) -> bool:
        """Shift a known faction's reputation. Unknown factions are ignored.

        Returns:
            True if the faction exists and was updated.
        """
        state = self.factions.get(faction)
        if state is None:
            return False
        state.reputation += delta
        return True

    def adjust_npc_relation(self, npc: str, delta: int) -> bool:
        """Shift a known NPC's relation to the hero. Unknown NPCs are ignored."""
        state = self.npc_status.get(npc)
        if state is None:
            return False
        state.relation_to_player += delta
        return True

    def append_decision(self, entry: DecisionLogEntry) -> None:
        self.decision_log.append(entry)

    def meets_requirements(
        self,
        *,
        faction_reputation: Mapping[str, int] | None = None,
        npc_alive: Iterable[str] | None = None,
    ) -> bool:
        """Check quest gating requirements against this world.

        Args:
            faction_reputation: Minimum reputation required per faction.
                Unknown factions count as reputation 0.
            npc_alive: NPCs that must exist and be alive.

        Returns:
            True if every requirement holds.
        """
        for faction, minimum in (faction_reputation or {}).items():
            state = self.factions.get(faction)
            current = state.reputation if state is not None else 0
            if current < minimum:
                return False

        for npc in npc_alive or ():
            state = self.npc_status.get(npc)
            if state is None or not state.alive:
                return False

        return True


__all__ = [
    "FactionState",
    "NpcState",
    "FrozenDeltas",
    "RollResult",
    "ImmediateImpact",
    "LongTermImpact",
    "DecisionImpact",
    "DecisionLogEntry",
    "DEFAULT_FACTIONS",
    "DEFAULT_NPCS",
    "WorldState",
]
