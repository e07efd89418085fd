"""Rank/progression state machine.

A hero holds the highest rank whose XP, mission, title and special
requirements are all met, walking the ladder from F upward and stopping at
the first rank that is not. Thresholds are cumulative, so the computed rank
only rises while the underlying stats do.

``update_rank_data`` compares the computed rank with the stored one and
records promotions (history entry plus celebration payload). Rewards are
listed, never granted; that is a caller action. The stored rank is never
lowered.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from heroforge.core.constants import (
    ACHIEVEMENT_POINTS,
    LEVEL_POINTS,
    MISSION_POINTS,
    MISSIONS_PER_DAY_ESTIMATE,
    TITLE_POINTS,
    XP_PER_DAY_ESTIMATE,
)
from heroforge.core.exceptions import ProgressionError
from heroforge.core.logging import get_logger
from heroforge.models.enums import AnimationTier, Rank
from heroforge.models.hero import HeroSnapshot
from heroforge.models.progression import (
    RANK_THRESHOLDS,
    SPECIAL_REQUIREMENT_MARKERS,
    get_rank_info,
    get_rank_rewards,
)
from heroforge.models.ranks import (
    HeroRankData,
    RankCelebration,
    RankHistoryEntry,
    RankProgress,
    RankReward,
    RankThreshold,
)


logger = get_logger(__name__)


@dataclass(frozen=True)
class PromotionEstimate:
    """Rough time to the next rank at the average daily pace."""

    days: int
    description: str


def validate_thresholds(thresholds: Mapping[Rank, RankThreshold]) -> None:
    """Check that a threshold table covers the whole ladder and is cumulative.

    Raises:
        ProgressionError: If a rank is missing or asks for less than the
            rank below it.
    """
    previous: RankThreshold | None = None
    previous_rank: Rank | None = None
    for rank in Rank:
        threshold = thresholds.get(rank)
        if threshold is None:
            raise ProgressionError(f"No threshold defined for rank {rank}", details={"rank": str(rank)})
        if previous is not None and (
            threshold.xp < previous.xp
            or threshold.missions < previous.missions
            or threshold.titles < previous.titles
            or not set(previous.special_requirements) <= set(threshold.special_requirements)
        ):
            raise ProgressionError(
                f"Threshold for rank {rank} is lower than for rank {previous_rank}",
                details={"rank": str(rank), "previous_rank": str(previous_rank)},
            )
        previous = threshold
        previous_rank = rank


class RankSystem:
    """Derive ranks from cumulative hero stats and track promotions.

    Example:
        >>> ranks = RankSystem()
        >>> ranks.calculate_rank(HeroSnapshot())
        <Rank.F: 'F'>
    """

    def __init__(self, thresholds: Mapping[Rank, RankThreshold] | None = None) -> None:
        """Initialize the rank system.

        Args:
            thresholds: Custom threshold table; defaults to the standard one.

        Raises:
            ProgressionError: If the table is incomplete or not cumulative.
        """
        self.thresholds: Mapping[Rank, RankThreshold] = thresholds or RANK_THRESHOLDS
        validate_thresholds(self.thresholds)

    # -------------------------------------------------------------------------
    # Requirements
    # -------------------------------------------------------------------------

    @staticmethod
    def meets_special_requirements(hero: HeroSnapshot, requirements: tuple[str, ...]) -> bool:
        """Check tag requirements such as having a legendary achievement.

        Unknown tags are treated as met.
        """
        for requirement in requirements:
            marker = SPECIAL_REQUIREMENT_MARKERS.get(requirement)
            if marker is None:
                continue
            if not any(marker in achievement for achievement in hero.achievements):
                return False
        return True

    def meets_threshold(self, hero: HeroSnapshot, rank: Rank) -> bool:
        threshold = self.thresholds[rank]
        return (
            hero.progression.xp >= threshold.xp
            and hero.stats.quests_completed >= threshold.missions
            and len(hero.titles) >= threshold.titles
            and self.meets_special_requirements(hero, threshold.special_requirements)
        )

    # -------------------------------------------------------------------------
    # Calculations
    # -------------------------------------------------------------------------

    def calculate_rank(self, hero: HeroSnapshot) -> Rank:
        """Highest consecutive rank whose requirements the hero meets."""
        current = Rank.F
        for rank in Rank:
            if not self.meets_threshold(hero, rank):
                break
            current = rank
        return current

    def calculate_progress(self, hero: HeroSnapshot, current: Rank | None = None) -> RankProgress:
        """Percent progress toward the next rank.

        Progress is the minimum of XP progress and mission progress, so a
        hero is only as close as their weakest metric.

        Args:
            hero: Hero to evaluate.
            current: Rank to measure from; defaults to the computed rank.
        """
        current = current or self.calculate_rank(hero)
        xp = hero.progression.xp
        missions = hero.stats.quests_completed
        next_rank = current.next()

        if next_rank is None:
            return RankProgress(
                current_rank=current,
                next_rank=None,
                current_xp=xp,
                required_xp=xp,
                current_missions=missions,
                required_missions=missions,
                progress_percentage=100.0,
                can_promote=False,
            )

        current_threshold = self.thresholds[current]
        next_threshold = self.thresholds[next_rank]

        xp_span = next_threshold.xp - current_threshold.xp
        if xp_span > 0:
            xp_progress = (xp - current_threshold.xp) / xp_span * 100
        else:
            xp_progress = 100.0
        if next_threshold.missions > 0:
            mission_progress = missions / next_threshold.missions * 100
        else:
            mission_progress = 100.0

        progress = max(0.0, min(100.0, xp_progress, mission_progress))

        return RankProgress(
            current_rank=current,
            next_rank=next_rank,
            current_xp=xp,
            required_xp=next_threshold.xp,
            current_missions=missions,
            required_missions=next_threshold.missions,
            progress_percentage=progress,
            can_promote=self.meets_threshold(hero, next_rank),
        )

    @staticmethod
    def calculate_rank_points(hero: HeroSnapshot) -> int:
        """Leaderboard score blending XP, missions, level, titles and achievements."""
        return (
            hero.progression.xp
            + hero.stats.quests_completed * MISSION_POINTS
            + hero.progression.level * LEVEL_POINTS
            + len(hero.titles) * TITLE_POINTS
            + len(hero.achievements) * ACHIEVEMENT_POINTS
        )

    # -------------------------------------------------------------------------
    # Promotions
    # -------------------------------------------------------------------------

    @staticmethod
    def animation_for(rank: Rank) -> AnimationTier:
        if rank >= Rank.S:
            return AnimationTier.LEGENDARY
        if rank >= Rank.B:
            return AnimationTier.EPIC
        return AnimationTier.ASCENSION

    def create_celebration(self, hero: HeroSnapshot, rank: Rank) -> RankCelebration:
        info = get_rank_info(rank)
        return RankCelebration(
            rank=rank,
            title=f"Promoted to {info.name}!",
            message=f"Congratulations, {hero.name}! You reached rank {rank} - {info.name}. {info.description}",
            rewards=tuple(r.model_copy(update={"unlocked": True}) for r in get_rank_rewards(rank)),
            animation=self.animation_for(rank),
        )

    @staticmethod
    def notable_achievement(hero: HeroSnapshot) -> str:
        if hero.achievements:
            return hero.achievements[-1]
        return f"Reached {hero.progression.xp} total XP"

    def initialize_rank_data(self, hero: HeroSnapshot, now: datetime | None = None) -> HeroRankData:
        """Build starting rank data for a hero without any."""
        rank = self.calculate_rank(hero)
        data = HeroRankData(
            current_rank=rank,
            rank_history=[
                RankHistoryEntry(
                    rank=rank,
                    achieved_at=now or datetime.now(UTC),
                    hero_level=hero.level,
                    notable_achievement="The journey begins",
                    celebration_viewed=True,
                )
            ],
            total_rank_points=self.calculate_rank_points(hero),
            rank_progress=self.calculate_progress(hero, rank),
            unlocked_rewards=[r.model_copy(update={"unlocked": True}) for r in get_rank_rewards(rank)],
        )
        data.achievements.highest_rank_reached = rank
        return data

    def update_rank_data(self, hero: HeroSnapshot, now: datetime | None = None) -> RankCelebration | None:
        """Refresh ``hero.rank_data`` in place and detect a promotion.

        A hero without rank data gets it initialized first. When the freshly
        computed rank is above the stored one, a history entry and a pending
        celebration are appended. A lower computed rank never demotes.

        Returns:
            The celebration for a promotion, or None.
        """
        if hero.rank_data is None:
            hero.rank_data = self.initialize_rank_data(hero, now)

        data = hero.rank_data
        computed = self.calculate_rank(hero)
        data.total_rank_points = self.calculate_rank_points(hero)

        if computed <= data.current_rank:
            data.rank_progress = self.calculate_progress(hero, data.current_rank)
            return None

        previous = data.current_rank
        celebration = self.create_celebration(hero, computed)
        data.current_rank = computed
        data.rank_history.append(
            RankHistoryEntry(
                rank=computed,
                achieved_at=now or datetime.now(UTC),
                hero_level=hero.level,
                notable_achievement=self.notable_achievement(hero),
            )
        )
        data.pending_celebrations.append(celebration)
        data.rank_progress = self.calculate_progress(hero, computed)
        data.achievements.highest_rank_reached = computed
        data.achievements.total_promotions += 1

        logger.debug("Rank promotion detected", hero_id=hero.id, previous=str(previous), rank=str(computed))
        return celebration

    def pending_rewards(self, hero: HeroSnapshot) -> list[RankReward]:
        """Rewards of the hero's current rank not yet marked unlocked."""
        rank = self.calculate_rank(hero)
        unlocked: set[str] = set()
        if hero.rank_data is not None:
            rank = max(rank, hero.rank_data.current_rank)
            unlocked = {r.name for r in hero.rank_data.unlocked_rewards}
        return [r for r in get_rank_rewards(rank) if r.name not in unlocked]

    def estimate_time_to_next_rank(self, hero: HeroSnapshot) -> PromotionEstimate:
        """Days to the next rank assuming 100 XP and one mission per day."""
        progress = self.calculate_progress(hero)
        if progress.next_rank is None:
            return PromotionEstimate(days=0, description="Maximum rank reached!")

        xp_needed = max(0, progress.required_xp - progress.current_xp)
        missions_needed = max(0, progress.required_missions - progress.current_missions)
        days = max(
            math.ceil(xp_needed / XP_PER_DAY_ESTIMATE),
            math.ceil(missions_needed / MISSIONS_PER_DAY_ESTIMATE),
        )

        if days <= 1:
            description = "Very close to promotion!"
        elif days <= 7:
            description = f"About {days} days"
        elif days <= 30:
            description = f"About {math.ceil(days / 7)} weeks"
        else:
            description = f"About {math.ceil(days / 30)} months"
        return PromotionEstimate(days=days, description=description)


__all__ = [
    "PromotionEstimate",
    "validate_thresholds",
    "RankSystem",
]
