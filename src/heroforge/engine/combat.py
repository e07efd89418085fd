"""Turn-based combat resolution.

The resolver consumes a hero snapshot and a list of enemy descriptors, runs
a turn loop and hands back a ``CombatResult``. Each turn every living
fighter acts in initiative order (highest agility first, hero first on
ties); the hero strikes the first living enemy and an active pet may follow
up with its exclusive skill.

The loop is bounded by ``CombatSettings.max_turns``. Running out of turns
counts as a loss, never as an error.

The hero's current HP and the pet's energy are written back to the
snapshot. XP, gold and items are only reported; crediting them is the
caller's job.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from heroforge.core.config import Settings, get_settings
from heroforge.core.constants import (
    BASIC_WEAPON_ATTACK,
    MIN_DAMAGE,
    PET_SKILL_BASE,
    PET_SKILL_PER_LEVEL,
    PET_STRIKE_MULTIPLIER,
    POWER_PER_WEAPON_POINT,
    UNARMORED_CLASS,
)
from heroforge.core.logging import get_logger
from heroforge.engine.dice import DiceRoller
from heroforge.engine.modifiers import (
    NO_ALIGNMENT_MODIFIERS,
    AlignmentModifiers,
    alignment_modifiers,
    element_multiplier,
)
from heroforge.engine.scaling import (
    difficulty_params,
    floor_enemy_multiplier,
    minimum_loot_rarity,
    reward_multiplier,
)
from heroforge.models.bestiary import GENERIC_ENEMY, get_enemy_template
from heroforge.models.combat import (
    CombatOptions,
    CombatResult,
    Combatant,
    EnemyDescriptor,
    LootItem,
)
from heroforge.models.enums import Element, PetSkill
from heroforge.models.hero import HeroSnapshot, Pet


logger = get_logger(__name__)

GOLD_STAT_SHARE = 0.8
GOLD_RANDOM_BONUS_MAX = 9

AUTO_WIN_BASE = 50
AUTO_WIN_PER_POWER = 2
AUTO_WIN_MIN = 10
AUTO_WIN_MAX = 90
AUTO_DEFEAT_DAMAGE_SHARE = 0.3
AUTO_VICTORY_MAX_DAMAGE = 9


@dataclass
class PetTally:
    """Running totals of the active pet's contribution to one fight."""

    damage: int = 0
    healing: int = 0
    stuns: int = 0
    energy_used: int = 0
    element_highlights: list[Element] = field(default_factory=list)


def coerce_enemies(enemies: Iterable[EnemyDescriptor | Mapping[str, Any]]) -> list[EnemyDescriptor]:
    """Validate raw enemy dicts into descriptors (clamping count and level)."""
    return [EnemyDescriptor.model_validate(enemy) for enemy in enemies]


class CombatResolver:
    """Resolve encounters between a hero and groups of enemies.

    Example:
        >>> resolver = CombatResolver(DiceRoller(seed=7))
        >>> result = resolver.resolve(hero, [EnemyDescriptor(type="wolf")])
        >>> result.victory in (True, False)
        True
    """

    def __init__(self, dice: DiceRoller, settings: Settings | None = None) -> None:
        """Initialize the resolver.

        Args:
            dice: Shared random source for every draw.
            settings: Engine settings; defaults to the cached settings.
        """
        self.dice = dice
        self.settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Fighters
    # -------------------------------------------------------------------------

    def build_hero(self, hero: HeroSnapshot) -> Combatant:
        """Project the hero snapshot into per-fight state."""
        combat = self.settings.combat
        attributes = hero.attributes
        return Combatant(
            name=hero.name,
            is_hero=True,
            level=hero.level,
            element=hero.element,
            max_hp=hero.derived.hp,
            hp=hero.derived.current_hp,
            strength=attributes.strength,
            agility=attributes.agility,
            constitution=attributes.constitution,
            armor=max(0, hero.derived.armor_class - UNARMORED_CLASS),
            weapon_name="weapon",
            weapon_attack=BASIC_WEAPON_ATTACK + hero.derived.power // POWER_PER_WEAPON_POINT,
            crit_percent=combat.base_crit_chance,
        )

    def build_enemy(
        self,
        descriptor: EnemyDescriptor,
        options: CombatOptions | None = None,
        index: int = 0,
    ) -> Combatant:
        """Build one enemy scaled by level, floor, boss status and difficulty.

        Args:
            descriptor: The enemy group this enemy belongs to.
            options: Encounter context.
            index: Position within the group, used to number duplicates.

        Returns:
            The scaled enemy.
        """
        options = options or CombatOptions()
        combat = self.settings.combat
        template = get_enemy_template(descriptor.type)
        name = descriptor.type if template is GENERIC_ENEMY else template.name
        if descriptor.count > 1:
            name = f"{name} #{index + 1}"

        level_mult = 1 + (descriptor.level - 1) * combat.level_scaling
        boss_mult = floor_enemy_multiplier(options.floor, combat)
        enemy_scale = difficulty_params(options.difficulty).enemy_scale
        floor = options.floor

        hp_mult = level_mult * (1 + floor * combat.enemy_hp_per_floor) * boss_mult * enemy_scale
        atk_mult = level_mult * (1 + floor * combat.enemy_atk_per_floor) * boss_mult * enemy_scale
        def_mult = level_mult * (1 + floor * combat.enemy_def_per_floor) * boss_mult

        max_hp = max(1, math.floor(template.hp * hp_mult))
        return Combatant(
            name=name,
            level=descriptor.level,
            element=descriptor.element or template.element,
            max_hp=max_hp,
            hp=max_hp,
            strength=math.floor(template.strength * atk_mult),
            agility=math.floor(template.agility * level_mult),
            constitution=math.floor(template.constitution * level_mult),
            armor=math.floor(template.armor * def_mult),
            weapon_name=template.weapon_name,
            weapon_attack=template.weapon_attack,
            crit_percent=template.crit_chance * 100,
            template_key=descriptor.type.strip().lower(),
        )

    @staticmethod
    def initiative_order(hero: Combatant, enemies: Sequence[Combatant]) -> list[Combatant]:
        """Order fighters by agility, highest first. The hero wins ties."""
        return sorted([hero, *enemies], key=lambda c: (-c.agility, not c.is_hero))

    # -------------------------------------------------------------------------
    # Attack Shape
    # -------------------------------------------------------------------------

    def hit_chance(
        self,
        attacker: Combatant,
        defender: Combatant,
        modifiers: AlignmentModifiers = NO_ALIGNMENT_MODIFIERS,
    ) -> float:
        """Hit chance in percent, clamped to the configured bounds."""
        combat = self.settings.combat
        chance = (
            combat.base_hit_chance
            + (attacker.agility - defender.agility) * combat.hit_per_agility
            + modifiers.hit_bonus
        )
        return max(combat.min_hit_chance, min(combat.max_hit_chance, chance))

    def crit_chance(
        self,
        attacker: Combatant,
        modifiers: AlignmentModifiers = NO_ALIGNMENT_MODIFIERS,
    ) -> float:
        """Crit chance in percent, clamped to ``[0, 100]``."""
        chance = (
            attacker.crit_percent
            + attacker.agility * self.settings.combat.crit_per_agility
            + modifiers.crit_bonus
        )
        return max(0.0, min(100.0, chance))

    def attack(
        self,
        attacker: Combatant,
        defender: Combatant,
        log: list[str],
        modifiers: AlignmentModifiers = NO_ALIGNMENT_MODIFIERS,
    ) -> int:
        """Resolve one attack, mutating the defender's HP.

        Returns:
            Damage dealt (0 on a miss).
        """
        if self.dice.roll_percent() > self.hit_chance(attacker, defender, modifiers):
            log.append(f"{attacker.name} misses {defender.name}.")
            return 0

        is_crit = self.dice.random() * 100 < self.crit_chance(attacker, modifiers)
        raw = (
            (attacker.strength + attacker.weapon_attack)
            * element_multiplier(attacker.element, defender.element)
            * modifiers.damage_factor(defender.element)
        )
        if is_crit:
            raw *= self.settings.combat.crit_multiplier

        damage = max(MIN_DAMAGE, math.floor(raw - defender.armor))
        defender.hp = max(0, defender.hp - damage)

        crit_text = " Critical hit!" if is_crit else ""
        log.append(
            f"{attacker.name} strikes {defender.name} with {attacker.weapon_name} "
            f"for {damage} damage.{crit_text}"
        )
        return damage

    # -------------------------------------------------------------------------
    # Companion
    # -------------------------------------------------------------------------

    def pet_action(
        self,
        pet: Pet,
        hero: Combatant,
        target: Combatant,
        tally: PetTally,
        log: list[str],
    ) -> None:
        """Trigger the pet's exclusive skill if its energy covers the cost."""
        cost = self.settings.combat.pet_skill_cost
        if pet.exclusive_skill is None or pet.energy < cost:
            return

        pet.energy -= cost
        tally.energy_used += cost
        power = PET_SKILL_BASE + PET_SKILL_PER_LEVEL * pet.level
        skill = PetSkill(pet.exclusive_skill)

        if skill in (PetSkill.FERAL_INSTINCT, PetSkill.ARCANE_PULSE):
            multiplier = element_multiplier(pet.element, target.element)
            if skill == PetSkill.FERAL_INSTINCT:
                damage = max(MIN_DAMAGE, math.floor(power * PET_STRIKE_MULTIPLIER * multiplier) - target.armor)
            else:
                damage = max(MIN_DAMAGE, math.floor(power * multiplier))
            target.hp = max(0, target.hp - damage)
            tally.damage += damage
            if multiplier > 1.0:
                tally.element_highlights.append(pet.element)
            log.append(f"[pet] {pet.name} uses {skill.value} on {target.name} for {damage} damage.")
        elif skill == PetSkill.SACRED_AURA:
            healed = min(power, hero.max_hp - hero.hp)
            hero.hp += healed
            tally.healing += healed
            log.append(f"[pet] {pet.name} uses {skill.value} and heals {hero.name} for {healed} HP.")
        elif skill == PetSkill.SHADOW_WHISPER:
            target.stunned = True
            tally.stuns += 1
            log.append(f"[pet] {pet.name} uses {skill.value} and stuns {target.name}.")

    # -------------------------------------------------------------------------
    # Rewards
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_xp(enemy: Combatant, hero_level: int) -> int:
        """XP for one defeated enemy, scaled by its level relative to the hero."""
        base_xp = enemy.max_hp + enemy.strength + enemy.agility
        level_diff = enemy.level - hero_level
        if level_diff >= 0:
            multiplier = 1 + level_diff * 0.2
        else:
            multiplier = max(0.5, 1 + level_diff * 0.1)
        return math.floor(base_xp * multiplier)

    def calculate_gold(self, enemy: Combatant) -> int:
        base_gold = math.floor((enemy.max_hp + enemy.strength) * GOLD_STAT_SHARE)
        return base_gold + self.dice.uniform_int(0, GOLD_RANDOM_BONUS_MAX)

    def roll_loot(self, enemy: Combatant, floor: int = 0) -> list[LootItem]:
        """Independent drop draws for each loot entry of the enemy's template.

        Deeper floors raise every drop rate and impose a minimum rarity;
        drops below that minimum are upgraded to it.
        """
        if enemy.template_key is None:
            return []
        rarity_bonus = floor * self.settings.combat.rarity_per_floor / 100
        minimum = minimum_loot_rarity(floor, self.settings.combat)
        drops: list[LootItem] = []
        for entry in get_enemy_template(enemy.template_key).loot:
            if not self.dice.chance(min(1.0, entry.drop_rate + rarity_bonus)):
                continue
            item = entry.item
            if item.rarity.order < minimum.order:
                item = item.model_copy(update={"rarity": minimum})
            drops.append(item)
        return drops

    def total_multiplier(self, options: CombatOptions) -> float:
        """Streak x difficulty x boss bonus x party bonus."""
        return (
            reward_multiplier(options.streak, self.settings.reward)
            * difficulty_params(options.difficulty).reward_scale
            * floor_enemy_multiplier(options.floor, self.settings.combat)
            * (1 + options.party_bonus_percent / 100)
        )

    def _collect_rewards(
        self,
        hero: HeroSnapshot,
        enemies: Sequence[Combatant],
        options: CombatOptions,
    ) -> tuple[int, int, list[LootItem]]:
        combat = self.settings.combat
        xp = 0
        gold = 0
        items: list[LootItem] = []
        for enemy in enemies:
            xp += self.calculate_xp(enemy, hero.level) + options.floor * combat.xp_per_floor
            gold += self.calculate_gold(enemy) + options.floor * combat.gold_per_floor
            items.extend(self.roll_loot(enemy, options.floor))

        multiplier = self.total_multiplier(options)
        return round(xp * multiplier), round(gold * multiplier), items

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(
        self,
        hero: HeroSnapshot,
        enemies: Iterable[EnemyDescriptor | Mapping[str, Any]],
        options: CombatOptions | None = None,
    ) -> CombatResult:
        """Run a full turn-based fight.

        Args:
            hero: Hero snapshot; current HP and pet energy are updated in place.
            enemies: Enemy groups to face.
            options: Encounter context (floor, streak, difficulty, party bonus).

        Returns:
            The fight outcome. A hero already at 0 HP loses without any turn
            being played; an empty enemy list is an immediate victory.
        """
        options = options or CombatOptions()
        log: list[str] = []

        if hero.derived.current_hp <= 0:
            log.append(f"{hero.name} is already defeated and cannot fight.")
            return CombatResult(victory=False, log=log)

        foes = [
            self.build_enemy(descriptor, options, index)
            for descriptor in coerce_enemies(enemies)
            for index in range(descriptor.count)
        ]
        if not foes:
            log.append("No enemies to fight.")
            return CombatResult(victory=True, log=log)

        fighter = self.build_hero(hero)
        hero_mods = alignment_modifiers(hero.alignment, self.settings.combat)
        pet = hero.active_pet
        tally = PetTally()
        damage_taken = 0
        turn = 0

        log.append(f"{fighter.name} enters combat against {', '.join(f.name for f in foes)}.")

        while fighter.alive and any(f.alive for f in foes) and turn < self.settings.combat.max_turns:
            turn += 1
            log.append(f"Turn {turn}:")
            for actor in self.initiative_order(fighter, foes):
                if not fighter.alive or not any(f.alive for f in foes):
                    break
                if not actor.alive:
                    continue

                if actor.is_hero:
                    target = next(f for f in foes if f.alive)
                    dealt = self.attack(fighter, target, log, hero_mods)
                    if dealt and hero_mods.life_drain_percent:
                        drained = min(
                            math.floor(dealt * hero_mods.life_drain_percent / 100),
                            fighter.max_hp - fighter.hp,
                        )
                        if drained > 0:
                            fighter.hp += drained
                            log.append(f"{fighter.name} drains {drained} HP.")
                    if pet is not None and target.alive:
                        self.pet_action(pet, fighter, target, tally, log)
                    if not target.alive:
                        log.append(f"{target.name} is defeated!")
                elif actor.stunned:
                    actor.stunned = False
                    log.append(f"{actor.name} is stunned and loses the turn.")
                else:
                    damage_taken += self.attack(actor, fighter, log)

        victory = fighter.alive and not any(f.alive for f in foes)
        xp_gained = gold_gained = 0
        items: list[LootItem] = []

        if victory:
            xp_gained, gold_gained, items = self._collect_rewards(hero, foes, options)
            log.append(f"Victory! +{xp_gained} XP, +{gold_gained} gold.")
            if items:
                log.append(f"Items found: {', '.join(item.name for item in items)}.")
        elif not fighter.alive:
            log.append(f"{fighter.name} has been defeated.")
        else:
            log.append(f"Turn limit of {turn} reached; the fight is lost.")

        hero.derived.current_hp = fighter.hp
        hero.clamp_vitals()

        logger.debug(
            "Combat resolved",
            hero_id=hero.id,
            victory=victory,
            turns=turn,
            damage_taken=damage_taken,
            xp=xp_gained,
            gold=gold_gained,
        )

        return CombatResult(
            victory=victory,
            turns=turn,
            damage_taken=damage_taken,
            xp_gained=xp_gained,
            gold_gained=gold_gained,
            items_gained=items,
            enemies_defeated=sum(1 for f in foes if not f.alive),
            log=log,
            pet_damage=tally.damage,
            pet_healing=tally.healing,
            pet_stuns=tally.stuns,
            pet_energy_used=tally.energy_used,
            pet_element_highlights=tally.element_highlights,
        )

    def auto_resolve(
        self,
        hero: HeroSnapshot,
        enemies: Iterable[EnemyDescriptor | Mapping[str, Any]],
        options: CombatOptions | None = None,
    ) -> CombatResult:
        """Resolve a fight instantly by comparing aggregate power.

        Win chance is ``50 + 2 x (hero power - enemy power)`` clamped to
        ``[10, 90]``. A defeat costs 30% of max HP; a victory costs a few HP.
        """
        options = options or CombatOptions()

        if hero.derived.current_hp <= 0:
            return CombatResult(victory=False, log=[f"{hero.name} is already defeated and cannot fight."])

        foes = [
            self.build_enemy(descriptor, options, index)
            for descriptor in coerce_enemies(enemies)
            for index in range(descriptor.count)
        ]
        if not foes:
            return CombatResult(victory=True, log=["No enemies to fight."])

        fighter = self.build_hero(hero)
        power_diff = fighter.power - sum(f.power for f in foes)
        win_chance = max(AUTO_WIN_MIN, min(AUTO_WIN_MAX, AUTO_WIN_BASE + power_diff * AUTO_WIN_PER_POWER))
        victory = self.dice.random() * 100 < win_chance

        if victory:
            xp_gained, gold_gained, items = self._collect_rewards(hero, foes, options)
            damage = self.dice.uniform_int(0, AUTO_VICTORY_MAX_DAMAGE)
            result = CombatResult(
                victory=True,
                damage_taken=damage,
                xp_gained=xp_gained,
                gold_gained=gold_gained,
                items_gained=items,
                enemies_defeated=len(foes),
                log=["Combat auto-resolved: victory!"],
            )
        else:
            damage = math.floor(hero.derived.hp * AUTO_DEFEAT_DAMAGE_SHARE)
            result = CombatResult(
                victory=False,
                damage_taken=damage,
                log=["Combat auto-resolved: defeat."],
            )

        hero.derived.current_hp -= damage
        hero.clamp_vitals()
        logger.debug("Combat auto-resolved", hero_id=hero.id, victory=victory, win_chance=win_chance)
        return result


__all__ = [
    "PetTally",
    "coerce_enemies",
    "CombatResolver",
]
