"""Engine-wide constants for the HeroForge simulation core.

Values here are structural (bounds, intervals, event names). Tunable
balance numbers live in :mod:`heroforge.core.config` instead.
"""

from __future__ import annotations

# =============================================================================
# Hero Bounds
# =============================================================================

MIN_ATTRIBUTE = 0
"""Attributes are clamped to be non-negative."""

MAX_FATIGUE = 100
"""Fatigue is a percentage."""

MAX_PET_ENERGY = 100
"""Pet energy pool ceiling."""

DEFAULT_STAMINA_MAX = 100
"""Stamina pool size for heroes created without one."""

DEFAULT_STAMINA_RATE = 10
"""Stamina regenerated per minute for heroes created without a rate."""

# =============================================================================
# Rolls
# =============================================================================

PERCENT_DIE = 100
"""Decision and hit rolls use a 1..100 die."""

MIN_DAMAGE = 1
"""A landed hit always deals at least this much damage."""

# =============================================================================
# Combatants
# =============================================================================

BASIC_WEAPON_ATTACK = 2
"""Weapon attack of a hero fighting with the starter weapon."""

POWER_PER_WEAPON_POINT = 10
"""Points of derived power granting one extra weapon attack point."""

UNARMORED_CLASS = 10
"""Armor class that provides no damage reduction."""

PET_SKILL_BASE = 5
PET_SKILL_PER_LEVEL = 2
PET_STRIKE_MULTIPLIER = 1.5
"""Exclusive pet skills scale with pet level; strikes hit harder than bursts."""

# =============================================================================
# Dungeon Floors
# =============================================================================

BOSS_FLOOR_INTERVAL = 10
"""Every tenth floor hosts a boss."""

MINIBOSS_FLOOR_INTERVAL = 5
"""Every fifth floor that is not a boss floor hosts a mini-boss."""

# =============================================================================
# Elemental Clamp
# =============================================================================

ELEMENT_MULTIPLIER_MIN = 0.4
"""Lower clamp for affinity-adjusted elemental multipliers."""

ELEMENT_MULTIPLIER_MAX = 2.5
"""Upper clamp for affinity-adjusted elemental multipliers."""

ELEMENT_ADVANTAGE = 1.3
"""Multiplier when the attacker's element beats the defender's."""

ELEMENT_DISADVANTAGE = 0.7
"""Multiplier when the defender's element beats the attacker's."""

# =============================================================================
# World Events
# =============================================================================

LUCK_BLESSING_EVENT = "luck_blessing"
"""Ambient world event that may follow any decision."""

SPAWN_EVENT_PREFIX = "spawn:"
"""Prefix for active events created by spawn_enemy effects."""

# =============================================================================
# Time
# =============================================================================

SECONDS_PER_MINUTE = 60

# =============================================================================
# Ranks
# =============================================================================

XP_PER_DAY_ESTIMATE = 100
"""Average daily XP assumed by the promotion time estimate."""

MISSIONS_PER_DAY_ESTIMATE = 1
"""Average daily missions assumed by the promotion time estimate."""

MISSION_POINTS = 50
LEVEL_POINTS = 100
TITLE_POINTS = 200
ACHIEVEMENT_POINTS = 150
