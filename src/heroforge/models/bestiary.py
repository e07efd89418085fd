"""Enemy templates and loot tables.

Template keys are matched case-insensitively. Unknown enemy types fall back
to ``GENERIC_ENEMY`` instead of failing the encounter, since quest content
may name enemies this table does not know.
"""

from __future__ import annotations

from heroforge.models.combat import EnemyTemplate, LootEntry, LootItem
from heroforge.models.enums import Element, ItemRarity

# =============================================================================
# Loot
# =============================================================================

WOLF_PELT = LootItem(id="wolf-pelt", name="Wolf Pelt", price=15)
SMALL_POTION = LootItem(id="small-healing-potion", name="Small Healing Potion", price=25)
GOBLIN_COIN = LootItem(id="goblin-coin", name="Goblin Coin", price=10)
IRON_DAGGER = LootItem(id="iron-dagger", name="Iron Dagger", price=50)
IRON_SWORD = LootItem(id="iron-sword", name="Iron Sword", rarity=ItemRarity.RARE, price=100)
LEATHER_ARMOR = LootItem(id="leather-armor", name="Leather Armor", price=75)
ANCIENT_BONE = LootItem(id="ancient-bone", name="Ancient Bone", rarity=ItemRarity.RARE, price=30)
XP_SCROLL = LootItem(id="xp-scroll", name="Scroll of Experience", rarity=ItemRarity.RARE, price=80)
TROLL_HIDE = LootItem(id="troll-hide", name="Troll Hide", rarity=ItemRarity.UNCOMMON, price=60)


# =============================================================================
# Templates
# =============================================================================

ENEMY_TEMPLATES: dict[str, EnemyTemplate] = {
    "wolf": EnemyTemplate(
        name="Wolf",
        hp=25,
        strength=6,
        agility=8,
        constitution=5,
        armor=1,
        weapon_name="fangs",
        weapon_attack=4,
        crit_chance=0.10,
        loot=(LootEntry(item=WOLF_PELT, drop_rate=0.6), LootEntry(item=SMALL_POTION, drop_rate=0.3)),
    ),
    "goblin": EnemyTemplate(
        name="Goblin",
        hp=20,
        strength=4,
        agility=9,
        constitution=4,
        armor=2,
        weapon_name="rusty dagger",
        weapon_attack=3,
        crit_chance=0.15,
        loot=(LootEntry(item=GOBLIN_COIN, drop_rate=0.7), LootEntry(item=IRON_DAGGER, drop_rate=0.2)),
    ),
    "bandit": EnemyTemplate(
        name="Bandit",
        hp=35,
        strength=7,
        agility=6,
        constitution=6,
        armor=3,
        weapon_name="short sword",
        weapon_attack=5,
        crit_chance=0.08,
        loot=(LootEntry(item=IRON_SWORD, drop_rate=0.25), LootEntry(item=LEATHER_ARMOR, drop_rate=0.4)),
    ),
    "skeleton": EnemyTemplate(
        name="Skeleton",
        hp=30,
        strength=5,
        agility=7,
        constitution=5,
        armor=2,
        weapon_name="ancient sword",
        weapon_attack=4,
        crit_chance=0.05,
        element=Element.DARK,
        loot=(LootEntry(item=ANCIENT_BONE, drop_rate=0.5), LootEntry(item=XP_SCROLL, drop_rate=0.2)),
    ),
    "troll": EnemyTemplate(
        name="Troll",
        hp=80,
        strength=12,
        agility=3,
        constitution=10,
        armor=4,
        weapon_name="giant club",
        weapon_attack=8,
        crit_chance=0.12,
        element=Element.EARTH,
        loot=(LootEntry(item=TROLL_HIDE, drop_rate=0.35),),
    ),
}

GENERIC_ENEMY = EnemyTemplate(name="Creature")


def get_enemy_template(enemy_type: str) -> EnemyTemplate:
    """Look up a template, falling back to the generic creature."""
    return ENEMY_TEMPLATES.get(enemy_type.strip().lower(), GENERIC_ENEMY)


__all__ = [
    "ENEMY_TEMPLATES",
    "GENERIC_ENEMY",
    "get_enemy_template",
]
