"""Tests for the GameEngine facade."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest
import structlog

from heroforge.core.config import Settings
from heroforge.engine.dice import DiceRoller
from heroforge.engine.game_engine import GameEngine
from heroforge.models.effects import DecisionChoice
from heroforge.models.enums import Rank
from heroforge.models.hero import HeroSnapshot


@pytest.fixture
def engine(fixed_dice: DiceRoller, settings: Settings) -> GameEngine:
    """Engine sharing the constant 0.5 source across components."""
    return GameEngine(settings=settings, dice=fixed_dice)


class TestComposition:
    """Tests for engine wiring."""

    def test_components_share_dice(self, engine: GameEngine, fixed_dice: DiceRoller) -> None:
        """Test every component draws from the same roller."""
        assert engine.combat.dice is fixed_dice
        assert engine.decisions.dice is fixed_dice

    def test_defaults(self) -> None:
        """Test the engine builds its own defaults."""
        engine = GameEngine()
        assert isinstance(engine.settings, Settings)
        assert engine.ranks.thresholds[Rank.F].xp == 0


class TestFight:
    """Tests for GameEngine.fight."""

    def test_victory_credits_rewards(self, engine: GameEngine, hero: HeroSnapshot, now: datetime) -> None:
        """Test XP and gold are credited after a won fight."""
        report = engine.fight(hero, [{"type": "wolf"}], now=now)

        assert report.result.victory is True
        assert hero.progression.xp == 39
        assert hero.progression.gold == 29
        assert hero.stamina.last_recovery == now
        assert hero.rank_data is not None
        assert report.celebration is None

    def test_fight_promotes(self, engine: GameEngine, make_hero: Callable[..., HeroSnapshot], now: datetime) -> None:
        """Test a fight pushing XP over a threshold returns a celebration."""
        hero = make_hero(progression={"xp": 190}, stats={"quests_completed": 2})

        report = engine.fight(hero, [{"type": "wolf"}], now=now)

        assert report.celebration is not None
        assert report.celebration.rank == Rank.E
        assert hero.rank_data.current_rank == Rank.E

    def test_defeat_credits_nothing(self, engine: GameEngine, make_hero: Callable[..., HeroSnapshot], now: datetime) -> None:
        """Test a lost fight leaves the economy alone."""
        hero = make_hero(derived={"hp": 15}, progression={"xp": 40, "gold": 12})

        report = engine.fight(hero, [{"type": "troll"}], now=now)

        assert report.result.victory is False
        assert hero.progression.xp == 40
        assert hero.progression.gold == 12

    def test_auto_fight(self, engine: GameEngine, hero: HeroSnapshot, now: datetime) -> None:
        """Test the auto-resolve path credits rewards as well."""
        report = engine.fight(hero, [{"type": "wolf"}], now=now, auto=True)

        assert report.result.victory is True
        assert hero.progression.xp == 39

    def test_context_cleared(self, engine: GameEngine, hero: HeroSnapshot, now: datetime) -> None:
        """Test the hero id is unbound from the log context afterwards."""
        engine.fight(hero, [], now=now)
        assert "hero_id" not in structlog.contextvars.get_contextvars()

    def test_regen_runs_before_fight(
        self,
        engine: GameEngine,
        make_hero: Callable[..., HeroSnapshot],
        now: datetime,
    ) -> None:
        """Test vitals are caught up before fighting."""
        hero = make_hero(
            derived={"hp": 30, "current_hp": 20},
            stamina={"last_recovery": now - timedelta(minutes=5)},
        )

        report = engine.fight(hero, [], now=now)

        assert report.result.victory is True
        assert hero.derived.current_hp == 30


class TestDecide:
    """Tests for GameEngine.decide."""

    def test_credits_gold_and_xp(self, engine: GameEngine, hero: HeroSnapshot, now: datetime) -> None:
        """Test immediate gold and XP are applied."""
        choice = DecisionChoice(
            id="help",
            text="Help the smith",
            risk_threshold=50,
            success_effects=[{"type": "gold", "value": 30}, {"type": "xp", "value": 15}],
        )

        report = engine.decide(hero, "q-1", choice, now=now)

        assert report.outcome.success is True
        assert hero.progression.gold == 30
        assert hero.progression.xp == 15

    def test_gold_never_negative(self, engine: GameEngine, make_hero: Callable[..., HeroSnapshot], now: datetime) -> None:
        """Test a costly choice cannot push gold below zero."""
        hero = make_hero(progression={"gold": 10})
        choice = DecisionChoice(id="bribe", risk_threshold=0, success_effects=[{"type": "gold", "value": -50}])

        engine.decide(hero, "q-1", choice, now=now)

        assert hero.progression.gold == 0


class TestProgressAndPenalty:
    """Tests for mission progress and the death penalty."""

    def test_progress(self, engine: GameEngine, hero: HeroSnapshot, now: datetime) -> None:
        """Test completed missions and XP drive promotions."""
        assert engine.progress(hero, missions=1, xp=100, now=now) is None

        celebration = engine.progress(hero, missions=1, xp=100, now=now)

        assert celebration is not None
        assert celebration.rank == Rank.E
        assert hero.stats.quests_completed == 2

    def test_death_penalty(self, engine: GameEngine, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test the penalty deducts half the gold and 30% of the XP."""
        hero = make_hero(progression={"gold": 101, "xp": 10})

        engine.apply_death_penalty(hero)

        assert hero.progression.gold == 51
        assert hero.progression.xp == 7

    def test_catch_up(self, engine: GameEngine, make_hero: Callable[..., HeroSnapshot], now: datetime) -> None:
        """Test explicit regeneration catch-up."""
        hero = make_hero(stamina={"current": 0, "recovery_rate": 10, "last_recovery": now - timedelta(minutes=2)})

        engine.catch_up(hero, now)

        assert hero.stamina.current == 20
