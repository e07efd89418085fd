"""Pydantic V2 models for the rank/progression state machine."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from heroforge.models.enums import AnimationTier, Rank, RewardType


class RankThreshold(BaseModel):
    """Cumulative requirements for holding a rank."""

    model_config = ConfigDict(frozen=True)

    xp: int = Field(ge=0)
    missions: int = Field(ge=0)
    titles: int = Field(default=0, ge=0)
    special_requirements: tuple[str, ...] = ()


class RankInfo(BaseModel):
    """Display information for a rank."""

    model_config = ConfigDict(frozen=True)

    rank: Rank
    name: str
    description: str


class RankReward(BaseModel):
    """A reward unlocked by reaching a rank. Granting it is the caller's job."""

    model_config = ConfigDict(frozen=True)

    type: RewardType
    name: str
    description: str
    unlocked: bool = False


class RankProgress(BaseModel):
    """Snapshot of how close a hero is to the next rank.

    Attributes:
        progress_percentage: Minimum of XP progress and mission progress,
            in ``[0, 100]``.
        can_promote: True when every requirement of ``next_rank`` is met.
    """

    current_rank: Rank
    next_rank: Rank | None
    current_xp: int
    required_xp: int
    current_missions: int
    required_missions: int
    progress_percentage: float = Field(ge=0, le=100)
    can_promote: bool = False


class RankHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: Rank
    achieved_at: datetime
    hero_level: int
    notable_achievement: str
    celebration_viewed: bool = False


class RankCelebration(BaseModel):
    """Payload describing a promotion for the caller to present."""

    model_config = ConfigDict(frozen=True)

    rank: Rank
    title: str
    message: str
    rewards: tuple[RankReward, ...] = ()
    animation: AnimationTier = AnimationTier.ASCENSION


class RankAchievements(BaseModel):
    highest_rank_reached: Rank = Rank.F
    total_promotions: int = Field(default=0, ge=0)


class HeroRankData(BaseModel):
    """Rank state stored on the hero snapshot."""

    model_config = ConfigDict(extra="ignore")

    current_rank: Rank = Rank.F
    rank_history: list[RankHistoryEntry] = Field(default_factory=list)
    total_rank_points: int = Field(default=0, ge=0)
    rank_progress: RankProgress | None = None
    unlocked_rewards: list[RankReward] = Field(default_factory=list)
    pending_celebrations: list[RankCelebration] = Field(default_factory=list)
    achievements: RankAchievements = Field(default_factory=RankAchievements)


__all__ = [
    "RankThreshold",
    "RankInfo",
    "RankReward",
    "RankProgress",
    "RankHistoryEntry",
    "RankCelebration",
    "RankAchievements",
    "HeroRankData",
]
