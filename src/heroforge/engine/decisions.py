"""Roll-based decision processing.

A decision rolls ``1..100`` plus attribute, bonus, luck and difficulty
modifiers against a risk threshold, selects the success or failure effect
list, applies each effect (subject to its own probability draw) and appends
an immutable entry to the hero's decision log.

"Success" refers to the roll only: effects listed under the failure branch
are still applied when the roll fails.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from heroforge.core.config import Settings, get_settings
from heroforge.core.constants import LUCK_BLESSING_EVENT, SPAWN_EVENT_PREFIX
from heroforge.core.logging import get_logger
from heroforge.engine.dice import DiceRoller
from heroforge.engine.scaling import difficulty_params
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
from heroforge.models.enums import Difficulty
from heroforge.models.hero import HeroSnapshot
from heroforge.models.world import (
    DecisionImpact,
    DecisionLogEntry,
    ImmediateImpact,
    LongTermImpact,
    RollResult,
)


logger = get_logger(__name__)


def select_reputation_targets(effects: Sequence[Effect], limit: int) -> set[str]:
    """Pick the factions a single choice is allowed to touch.

    Factions are ranked by the absolute value of their net reputation
    change across ``effects``; ties keep the order of first appearance.

    Args:
        effects: The selected effect list.
        limit: Maximum number of distinct factions.

    Returns:
        Names of the factions whose reputation effects survive.
    """
    net: dict[str, int] = {}
    for effect in effects:
        if isinstance(effect, ReputationEffect):
            net[effect.target] = net.get(effect.target, 0) + effect.value

    ranked = sorted(net, key=lambda target: abs(net[target]), reverse=True)
    return set(ranked[: max(0, limit)])


class DecisionProcessor:
    """Apply risk-based quest choices to a hero's world state.

    Example:
        >>> processor = DecisionProcessor(DiceRoller(seed=3))
        >>> outcome = processor.process_choice(
        ...     hero, "q-1", "c-1", "Bribe the guard",
        ...     success_effects=[{"type": "gold", "value": -20}],
        ... )
        >>> outcome.log_entry.choice_id
        'c-1'
    """

    def __init__(self, dice: DiceRoller, settings: Settings | None = None) -> None:
        """Initialize the processor.

        Args:
            dice: Shared random source for every draw.
            settings: Engine settings; defaults to the cached settings.
        """
        self.dice = dice
        self.settings = settings or get_settings()

    def roll_modifiers(
        self,
        hero: HeroSnapshot,
        roll_modifier: RollModifier | None = None,
        difficulty: Difficulty | None = None,
    ) -> int:
        """Sum of attribute, flat bonus, luck and difficulty modifiers."""
        modifiers = hero.luck
        if roll_modifier is not None:
            if roll_modifier.attribute is not None:
                multiplier = roll_modifier.multiplier
                if multiplier is None:
                    multiplier = self.settings.decision.default_attribute_multiplier
                modifiers += math.floor(hero.attributes.get(roll_modifier.attribute) * multiplier)
            modifiers += roll_modifier.bonus
        if difficulty is not None:
            modifiers += difficulty_params(difficulty).success_bias
        return modifiers

    def execute_roll(
        self,
        hero: HeroSnapshot,
        risk_threshold: int,
        roll_modifier: RollModifier | None = None,
        difficulty: Difficulty | None = None,
    ) -> RollResult:
        """Roll the percentile die against a threshold."""
        roll = self.dice.roll_percent()
        modifiers = self.roll_modifiers(hero, roll_modifier, difficulty)
        return RollResult(
            roll=roll,
            modifiers=modifiers,
            threshold=risk_threshold,
            success=roll + modifiers >= risk_threshold,
        )

    def process_choice(
        self,
        hero: HeroSnapshot,
        quest_id: str,
        choice_id: str,
        choice_text: str,
        success_effects: Iterable[Effect | Mapping[str, Any]] = (),
        failure_effects: Iterable[Effect | Mapping[str, Any]] = (),
        risk_threshold: int | None = None,
        roll_modifier: RollModifier | Mapping[str, Any] | None = None,
        *,
        difficulty: Difficulty | None = None,
        now: datetime | None = None,
    ) -> DecisionOutcome:
        """Roll, apply the selected effects and log the decision.

        Args:
            hero: Hero snapshot; its world state is mutated in place.
            quest_id: Quest the choice belongs to.
            choice_id: Identifier of the chosen option.
            choice_text: Text of the chosen option, kept in the log.
            success_effects: Effects applied when the roll succeeds.
            failure_effects: Effects applied when the roll fails.
            risk_threshold: Total the roll must reach; may exceed 100.
            roll_modifier: Attribute scaling and flat bonus for the roll.
            difficulty: Optional tier whose success bias shifts the roll.
            now: Timestamp for the log entry; defaults to the current UTC time.

        Returns:
            The outcome, including the log entry that was appended. Heroes
            without a world state still get an outcome; world effects and
            the log append are skipped for them.
            Faction and NPC effects whose target is missing are skipped and
            left out of ``applied_effects`` and the impact summary.
        """
        decision = self.settings.decision
        if risk_threshold is None:
            risk_threshold = decision.default_risk_threshold
        if roll_modifier is not None and not isinstance(roll_modifier, RollModifier):
            roll_modifier = RollModifier.model_validate(roll_modifier)

        roll_result = self.execute_roll(hero, risk_threshold, roll_modifier, difficulty)
        selected = parse_effects(success_effects if roll_result.success else failure_effects)
        allowed_factions = select_reputation_targets(selected, decision.max_reputation_targets)

        world = hero.world_state
        gold = 0
        xp = 0
        reputation: defaultdict[str, int] = defaultdict(int)
        items: list[str] = []
        npc_relations: defaultdict[str, int] = defaultdict(int)
        world_events: list[str] = []
        applied: list[Effect] = []

        for effect in selected:
            if isinstance(effect, ReputationEffect) and effect.target not in allowed_factions:
                continue
            if effect.probability is not None and not self.dice.chance(effect.probability):
                continue

            # Faction and NPC effects count only when their target exists.
            if isinstance(effect, ReputationEffect):
                if world is None or not world.adjust_reputation(effect.target, effect.value):
                    continue
                reputation[effect.target] += effect.value
            elif isinstance(effect, NpcRelationEffect):
                if world is None or not world.adjust_npc_relation(effect.target, effect.value):
                    continue
                npc_relations[effect.target] += effect.value
            elif isinstance(effect, GoldEffect):
                gold += effect.value
            elif isinstance(effect, XpEffect):
                xp += effect.value
            elif isinstance(effect, ItemEffect):
                items.append(effect.target)
            elif isinstance(effect, WorldEventEffect):
                world_events.append(effect.target)
                if world is not None:
                    world.active_events.add(effect.target)
            elif isinstance(effect, SpawnEnemyEffect):
                event = f"{SPAWN_EVENT_PREFIX}{effect.target}"
                world_events.append(event)
                if world is not None:
                    world.active_events.add(event)
            applied.append(effect)

        if self.dice.chance(decision.luck_blessing_chance):
            world_events.append(LUCK_BLESSING_EVENT)
            if world is not None:
                world.active_events.add(LUCK_BLESSING_EVENT)

        log_entry = DecisionLogEntry(
            hero_id=hero.id,
            quest_id=quest_id,
            choice_id=choice_id,
            choice_text=choice_text,
            timestamp=now or datetime.now(UTC),
            impact=DecisionImpact(
                immediate=ImmediateImpact(
                    gold=gold,
                    xp=xp,
                    reputation=dict(reputation),
                    items=tuple(items),
                ),
                long_term=LongTermImpact(
                    npc_relations=dict(npc_relations),
                    world_events=tuple(world_events),
                ),
            ),
            roll_result=roll_result,
        )
        if world is not None:
            world.append_decision(log_entry)

        logger.debug(
            "Choice processed",
            hero_id=hero.id,
            quest_id=quest_id,
            choice_id=choice_id,
            success=roll_result.success,
            total=roll_result.total,
            threshold=risk_threshold,
            applied=len(applied),
        )

        return DecisionOutcome(
            success=roll_result.success,
            roll_result=roll_result,
            applied_effects=applied,
            log_entry=log_entry,
        )

    def process(
        self,
        hero: HeroSnapshot,
        quest_id: str,
        choice: DecisionChoice,
        *,
        difficulty: Difficulty | None = None,
        now: datetime | None = None,
    ) -> DecisionOutcome:
        """Process a ``DecisionChoice`` value object."""
        return self.process_choice(
            hero,
            quest_id,
            choice.id,
            choice.text,
            choice.success_effects,
            choice.failure_effects,
            choice.risk_threshold,
            choice.roll_modifier,
            difficulty=difficulty,
            now=now,
        )

    @staticmethod
    def meets_requirements(
        hero: HeroSnapshot,
        *,
        faction_reputation: Mapping[str, int] | None = None,
        npc_alive: Iterable[str] | None = None,
    ) -> bool:
        """Quest gating check. Heroes without a world state always pass."""
        if hero.world_state is None:
            return True
        return hero.world_state.meets_requirements(
            faction_reputation=faction_reputation,
            npc_alive=npc_alive,
        )


__all__ = [
    "select_reputation_targets",
    "DecisionProcessor",
]
