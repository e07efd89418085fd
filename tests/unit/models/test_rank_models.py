"""Tests for rank enums, tables and models."""

from __future__ import annotations

from heroforge.models.enums import Alignment, Rank
from heroforge.models.progression import (
    RANK_INFO,
    RANK_REWARDS,
    RANK_THRESHOLDS,
    get_mission_multiplier,
    get_rank_rewards,
    get_xp_bonus_percent,
)
from heroforge.models.ranks import HeroRankData


class TestRankEnum:
    """Tests for the ordered rank ladder."""

    def test_ladder_order(self) -> None:
        """Test ranks compare by ladder position, not by string."""
        assert Rank.A > Rank.F
        assert Rank.SSS > Rank.SS > Rank.S > Rank.A
        assert sorted([Rank.S, Rank.F, Rank.A, Rank.C]) == [Rank.F, Rank.C, Rank.A, Rank.S]
        assert max(Rank.B, Rank.E) == Rank.B

    def test_next(self) -> None:
        """Test stepping up the ladder."""
        assert Rank.F.next() == Rank.E
        assert Rank.S.next() == Rank.SS
        assert Rank.SSS.next() is None

    def test_order(self) -> None:
        """Test ladder positions."""
        assert Rank.F.order == 0
        assert Rank.SSS.order == 8


class TestAlignmentAxes:
    """Tests for alignment axis helpers."""

    def test_axes(self) -> None:
        """Test the lawful/chaotic and good/evil axes."""
        assert Alignment.LAWFUL_EVIL.is_lawful
        assert Alignment.LAWFUL_EVIL.is_evil
        assert Alignment.CHAOTIC_GOOD.is_chaotic
        assert Alignment.CHAOTIC_GOOD.is_good
        neutral = Alignment.TRUE_NEUTRAL
        assert not (neutral.is_lawful or neutral.is_chaotic or neutral.is_good or neutral.is_evil)


class TestProgressionTables:
    """Tests for the static rank tables."""

    def test_every_rank_covered(self) -> None:
        """Test that every table covers the full ladder."""
        for rank in Rank:
            assert rank in RANK_THRESHOLDS
            assert rank in RANK_INFO
            assert rank in RANK_REWARDS

    def test_thresholds_cumulative(self) -> None:
        """Test XP and mission requirements never decrease up the ladder."""
        ladder = list(Rank)
        for lower, upper in zip(ladder, ladder[1:]):
            assert RANK_THRESHOLDS[upper].xp >= RANK_THRESHOLDS[lower].xp
            assert RANK_THRESHOLDS[upper].missions >= RANK_THRESHOLDS[lower].missions

    def test_bonuses(self) -> None:
        """Test rank bonus lookups."""
        assert get_xp_bonus_percent(Rank.F) == 0
        assert get_xp_bonus_percent(Rank.SSS) == 45
        assert get_mission_multiplier(Rank.E) == 1.05

    def test_starting_reward_unlocked(self) -> None:
        """Test the F rank badge comes pre-unlocked."""
        rewards = get_rank_rewards(Rank.F)
        assert len(rewards) == 1
        assert rewards[0].unlocked is True


class TestHeroRankData:
    """Tests for the per-hero rank record."""

    def test_defaults(self) -> None:
        """Test an empty rank record."""
        data = HeroRankData()
        assert data.current_rank == Rank.F
        assert data.rank_history == []
        assert data.achievements.total_promotions == 0
