"""Engine facade wiring every component around one shared random source.

``GameEngine`` follows the standard control flow: catch regeneration up to
``now``, run the action, credit its rewards, then refresh rank data. One
instance serves any number of heroes; callers must still serialize calls
per hero, since snapshots are mutated in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from heroforge.core.config import Settings, get_settings
from heroforge.core.logging import bind_context, clear_context, get_logger
from heroforge.engine.combat import CombatResolver
from heroforge.engine.decisions import DecisionProcessor
from heroforge.engine.dice import DiceRoller
from heroforge.engine.ranks import RankSystem
from heroforge.engine.regen import RegenerationTicker
from heroforge.engine.scaling import compute_death_penalty
from heroforge.models.combat import CombatOptions, CombatResult, EnemyDescriptor
from heroforge.models.effects import DecisionChoice, DecisionOutcome
from heroforge.models.enums import Difficulty
from heroforge.models.hero import HeroSnapshot
from heroforge.models.ranks import RankCelebration


logger = get_logger(__name__)


@dataclass(frozen=True)
class FightReport:
    result: CombatResult
    celebration: RankCelebration | None = None


@dataclass(frozen=True)
class DecisionReport:
    outcome: DecisionOutcome
    celebration: RankCelebration | None = None


class GameEngine:
    """One-stop entry point for the simulation core.

    Example:
        >>> engine = GameEngine(dice=DiceRoller(seed=1))
        >>> report = engine.fight(hero, [{"type": "goblin", "count": 2}])
        >>> report.result.victory
        True
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        dice: DiceRoller | None = None,
        rank_system: RankSystem | None = None,
    ) -> None:
        """Initialize the engine and its components.

        Args:
            settings: Engine settings; defaults to the cached settings.
            dice: Shared random source; defaults to an unseeded roller.
            rank_system: Rank system; defaults to the standard thresholds.
        """
        self.settings = settings or get_settings()
        self.dice = dice or DiceRoller()
        self.combat = CombatResolver(self.dice, self.settings)
        self.regen = RegenerationTicker(self.settings)
        self.decisions = DecisionProcessor(self.dice, self.settings)
        self.ranks = rank_system or RankSystem()

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return now or datetime.now(UTC)

    def catch_up(self, hero: HeroSnapshot, now: datetime | None = None) -> None:
        """Regenerate vitals and stamina up to ``now``."""
        self.regen.tick(hero, self._now(now))

    def fight(
        self,
        hero: HeroSnapshot,
        enemies: Iterable[EnemyDescriptor | Mapping[str, Any]],
        options: CombatOptions | None = None,
        *,
        now: datetime | None = None,
        auto: bool = False,
    ) -> FightReport:
        """Catch up regen, resolve a fight, credit rewards and refresh ranks.

        On victory the XP and gold are added to the hero's progression. On
        defeat nothing is deducted; see ``apply_death_penalty``.
        """
        now = self._now(now)
        bind_context(hero_id=hero.id)
        try:
            self.regen.tick(hero, now)
            if auto:
                result = self.combat.auto_resolve(hero, enemies, options)
            else:
                result = self.combat.resolve(hero, enemies, options)
            if result.victory:
                hero.progression.xp += result.xp_gained
                hero.progression.gold += result.gold_gained
            celebration = self.ranks.update_rank_data(hero, now)
        finally:
            clear_context()
        return FightReport(result=result, celebration=celebration)

    def decide(
        self,
        hero: HeroSnapshot,
        quest_id: str,
        choice: DecisionChoice,
        *,
        difficulty: Difficulty | None = None,
        now: datetime | None = None,
    ) -> DecisionReport:
        """Catch up regen, process a choice, credit gold/XP and refresh ranks."""
        now = self._now(now)
        bind_context(hero_id=hero.id)
        try:
            self.regen.tick(hero, now)
            outcome = self.decisions.process(hero, quest_id, choice, difficulty=difficulty, now=now)
            immediate = outcome.log_entry.impact.immediate
            hero.progression.gold = max(0, hero.progression.gold + immediate.gold)
            hero.progression.xp = max(0, hero.progression.xp + immediate.xp)
            celebration = self.ranks.update_rank_data(hero, now)
        finally:
            clear_context()
        return DecisionReport(outcome=outcome, celebration=celebration)

    def progress(
        self,
        hero: HeroSnapshot,
        *,
        missions: int = 0,
        xp: int = 0,
        now: datetime | None = None,
    ) -> RankCelebration | None:
        """Record completed missions and XP, then refresh rank data."""
        hero.stats.quests_completed += max(0, missions)
        hero.progression.xp += max(0, xp)
        return self.ranks.update_rank_data(hero, self._now(now))

    def apply_death_penalty(self, hero: HeroSnapshot) -> None:
        """Deduct the dungeon death penalty from the hero's gold and XP."""
        penalty = compute_death_penalty(hero, self.settings.reward)
        hero.progression.gold -= penalty.gold
        hero.progression.xp -= penalty.xp
        logger.debug("Death penalty applied", hero_id=hero.id, gold=penalty.gold, xp=penalty.xp)


__all__ = [
    "FightReport",
    "DecisionReport",
    "GameEngine",
]
