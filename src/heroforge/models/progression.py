"""Rank progression data.

Static tables for the rank ladder:
- Cumulative thresholds (XP, missions, titles, special requirements)
- Display info and rewards per rank
- XP bonus and mission reward multiplier per rank

Thresholds must be cumulative: every requirement of a rank is at least the
matching requirement of the rank below it. ``RankSystem`` checks this when
it is constructed with a custom table.
"""

from __future__ import annotations

from heroforge.models.enums import Rank, RewardType
from heroforge.models.ranks import RankInfo, RankReward, RankThreshold

# =============================================================================
# Special Requirements
# =============================================================================

LEGENDARY_QUEST = "legendary_quest"
EPIC_ACHIEVEMENT = "epic_achievement"

SPECIAL_REQUIREMENT_MARKERS: dict[str, str] = {
    LEGENDARY_QUEST: "Legendary",
    EPIC_ACHIEVEMENT: "Epic",
}
"""Requirement tag to the substring an achievement name must contain."""


# =============================================================================
# Thresholds
# =============================================================================

RANK_THRESHOLDS: dict[Rank, RankThreshold] = {
    Rank.F: RankThreshold(xp=0, missions=0),
    Rank.E: RankThreshold(xp=200, missions=2),
    Rank.D: RankThreshold(xp=600, missions=5),
    Rank.C: RankThreshold(xp=1200, missions=10, titles=1),
    Rank.B: RankThreshold(xp=2500, missions=20, titles=2),
    Rank.A: RankThreshold(
        xp=4000, missions=30, titles=3, special_requirements=(LEGENDARY_QUEST,)
    ),
    Rank.S: RankThreshold(
        xp=7000,
        missions=50,
        titles=5,
        special_requirements=(LEGENDARY_QUEST, EPIC_ACHIEVEMENT),
    ),
    Rank.SS: RankThreshold(
        xp=9500,
        missions=70,
        titles=6,
        special_requirements=(LEGENDARY_QUEST, EPIC_ACHIEVEMENT),
    ),
    Rank.SSS: RankThreshold(
        xp=13000,
        missions=100,
        titles=8,
        special_requirements=(LEGENDARY_QUEST, EPIC_ACHIEVEMENT),
    ),
}


# =============================================================================
# Display Info
# =============================================================================

RANK_INFO: dict[Rank, RankInfo] = {
    Rank.F: RankInfo(rank=Rank.F, name="Novice", description="A newcomer to the world of adventure."),
    Rank.E: RankInfo(rank=Rank.E, name="Adventurer", description="A seasoned traveller with small victories."),
    Rank.D: RankInfo(rank=Rank.D, name="Explorer", description="A steady adventurer, known in the taverns."),
    Rank.C: RankInfo(rank=Rank.C, name="Local Hero", description="Recognised in towns and villages."),
    Rank.B: RankInfo(rank=Rank.B, name="Guardian", description="A notable protector, admired by the people."),
    Rank.A: RankInfo(rank=Rank.A, name="Champion", description="An elite hero, famous across the realm."),
    Rank.S: RankInfo(rank=Rank.S, name="Living Legend", description="A living myth, a symbol of eternal glory."),
    Rank.SS: RankInfo(rank=Rank.SS, name="Immortal Icon", description="Beyond legend: the measure of every hero."),
    Rank.SSS: RankInfo(rank=Rank.SSS, name="Absolute Myth", description="The pinnacle of the guild."),
}


# =============================================================================
# Rewards
# =============================================================================


def _reward(kind: RewardType, name: str, description: str) -> RankReward:
    return RankReward(type=kind, name=name, description=description)


RANK_REWARDS: dict[Rank, tuple[RankReward, ...]] = {
    Rank.F: (
        RankReward(
            type=RewardType.VISUAL,
            name="Novice Badge",
            description="Your first adventurer's badge",
            unlocked=True,
        ),
    ),
    Rank.E: (
        _reward(RewardType.COSMETIC, "Green Cloak", "A simple but worthy cloak"),
        _reward(RewardType.GAMEPLAY, "+5% XP Bonus", "Extra experience from missions"),
    ),
    Rank.D: (
        _reward(RewardType.VISUAL, "Explorer Crest", "The mark of a true explorer"),
        _reward(RewardType.GAMEPLAY, "Special Missions", "Access to medium difficulty missions"),
    ),
    Rank.C: (
        _reward(RewardType.COSMETIC, "Purple Armor", "Armor fit for a local hero"),
        _reward(RewardType.GAMEPLAY, "+10% Gold Bonus", "Extra gold from missions"),
    ),
    Rank.B: (
        _reward(RewardType.VISUAL, "Golden Aura", "A radiant golden aura"),
        _reward(RewardType.SPECIAL, "Guardian Title", "The exclusive Guardian title"),
    ),
    Rank.A: (
        _reward(RewardType.COSMETIC, "Champion Cape", "The cape of a realm champion"),
        _reward(RewardType.SPECIAL, "Epic Story", "A personalised epic chronicle"),
    ),
    Rank.S: (
        _reward(RewardType.SPECIAL, "Personal Legend", "A legend told in your name"),
        _reward(RewardType.VISUAL, "Legendary Effect", "Legendary visual effects"),
        _reward(RewardType.GAMEPLAY, "Full Access", "Access to every mission tier"),
    ),
    Rank.SS: (
        _reward(RewardType.GAMEPLAY, "Exclusive Skill: Higher Order", "An exclusive rank skill"),
        _reward(RewardType.COSMETIC, "Immortal Icon Attire", "Attire of an immortal icon"),
        _reward(RewardType.VISUAL, "Mythic Aura", "A mythic aura"),
    ),
    Rank.SSS: (
        _reward(RewardType.SPECIAL, "Guild Letter of Praise", "A letter from the guild masters"),
        _reward(RewardType.GAMEPLAY, "Mythic Mission Invitation", "Invitations to mythic missions"),
        _reward(RewardType.COSMETIC, "Crown of the Absolute Myth", "The crown of the absolute myth"),
    ),
}


# =============================================================================
# Rank Bonuses
# =============================================================================

RANK_XP_BONUS_PERCENT: dict[Rank, int] = {
    Rank.F: 0,
    Rank.E: 5,
    Rank.D: 10,
    Rank.C: 15,
    Rank.B: 20,
    Rank.A: 25,
    Rank.S: 30,
    Rank.SS: 35,
    Rank.SSS: 45,
}

RANK_MISSION_MULTIPLIER: dict[Rank, float] = {
    Rank.F: 1.0,
    Rank.E: 1.05,
    Rank.D: 1.1,
    Rank.C: 1.12,
    Rank.B: 1.15,
    Rank.A: 1.18,
    Rank.S: 1.22,
    Rank.SS: 1.25,
    Rank.SSS: 1.3,
}


def get_xp_bonus_percent(rank: Rank) -> int:
    """Get the XP bonus percentage granted by a rank."""
    return RANK_XP_BONUS_PERCENT.get(rank, 0)


def get_mission_multiplier(rank: Rank) -> float:
    """Get the mission reward multiplier granted by a rank."""
    return RANK_MISSION_MULTIPLIER.get(rank, 1.0)


def get_rank_info(rank: Rank) -> RankInfo:
    return RANK_INFO[rank]


def get_rank_rewards(rank: Rank) -> tuple[RankReward, ...]:
    return RANK_REWARDS.get(rank, ())


__all__ = [
    "LEGENDARY_QUEST",
    "EPIC_ACHIEVEMENT",
    "SPECIAL_REQUIREMENT_MARKERS",
    "RANK_THRESHOLDS",
    "RANK_INFO",
    "RANK_REWARDS",
    "RANK_XP_BONUS_PERCENT",
    "RANK_MISSION_MULTIPLIER",
    "get_xp_bonus_percent",
    "get_mission_multiplier",
    "get_rank_info",
    "get_rank_rewards",
]
