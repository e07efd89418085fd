"""Decision effects and choices.

``Effect`` is a tagged union discriminated on ``type``, so every consumer
can dispatch exhaustively over the concrete effect classes instead of
switching on raw strings.

Example:
    >>> effects = parse_effects([{"type": "gold", "value": 30}])
    >>> effects[0].value
    30
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from heroforge.models.enums import Attribute
from heroforge.models.world import DecisionLogEntry, RollResult


class EffectBase(BaseModel):
    """Fields shared by every effect.

    Attributes:
        probability: Independent chance that the effect applies. ``None``
            means it always applies and no draw is made.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    probability: float | None = Field(default=None, ge=0, le=1)


class GoldEffect(EffectBase):
    type: Literal["gold"] = "gold"
    value: int = 0


class XpEffect(EffectBase):
    type: Literal["xp"] = "xp"
    value: int = 0


class ReputationEffect(EffectBase):
    type: Literal["reputation"] = "reputation"
    target: str
    value: int = 0


class ItemEffect(EffectBase):
    type: Literal["item"] = "item"
    target: str


class NpcRelationEffect(EffectBase):
    type: Literal["npc_relation"] = "npc_relation"
    target: str
    value: int = 0


class WorldEventEffect(EffectBase):
    type: Literal["world_event"] = "world_event"
    target: str


class SpawnEnemyEffect(EffectBase):
    """Schedules an enemy encounter by pushing a ``spawn:`` world event."""

    type: Literal["spawn_enemy"] = "spawn_enemy"
    target: str
    value: int = Field(default=1, ge=1, description="Number of enemies to spawn")


Effect = Annotated[
    GoldEffect
    | XpEffect
    | ReputationEffect
    | ItemEffect
    | NpcRelationEffect
    | WorldEventEffect
    | SpawnEnemyEffect,
    Field(discriminator="type"),
]

_EFFECT_LIST_ADAPTER: TypeAdapter[list[Effect]] = TypeAdapter(list[Effect])


def parse_effects(raw: Iterable[Any]) -> list[Effect]:
    """Validate raw effect dicts (or effect models) into typed effects.

    Raises:
        pydantic.ValidationError: If an entry has an unknown ``type`` or is
            missing a required target.
    """
    return _EFFECT_LIST_ADAPTER.validate_python(list(raw))


# =============================================================================
# Choices
# =============================================================================


class RollModifier(BaseModel):
    """Attribute scaling and flat bonus applied to a decision roll."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    attribute: Attribute | None = None
    multiplier: float | None = Field(default=None, ge=0)
    bonus: int = 0


class DecisionChoice(BaseModel):
    """A risk-weighted choice offered to the hero.

    ``risk_threshold`` is deliberately not capped at 100: content may offer
    choices that can never succeed.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    text: str = ""
    risk_threshold: int = Field(default=50, ge=0)
    roll_modifier: RollModifier | None = None
    success_effects: list[Effect] = Field(default_factory=list)
    failure_effects: list[Effect] = Field(default_factory=list)


class DecisionOutcome(BaseModel):
    """Result of processing one choice."""

    model_config = ConfigDict(frozen=True)

    success: bool
    roll_result: RollResult
    applied_effects: list[Effect] = Field(default_factory=list)
    log_entry: DecisionLogEntry


__all__ = [
    "EffectBase",
    "GoldEffect",
    "XpEffect",
    "ReputationEffect",
    "ItemEffect",
    "NpcRelationEffect",
    "WorldEventEffect",
    "SpawnEnemyEffect",
    "Effect",
    "parse_effects",
    "RollModifier",
    "DecisionChoice",
    "DecisionOutcome",
]
