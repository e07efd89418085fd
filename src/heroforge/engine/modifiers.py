"""Element and alignment modifier tables.

Elements form a four-way cycle (fire > earth > thunder > ice > fire).
Dark overpowers every cycle element. Light and dark are *mutually*
advantaged: each deals boosted damage to the other. Physical is neutral
to everything.
"""

from __future__ import annotations

from dataclasses import dataclass

from heroforge.core.config import CombatSettings
from heroforge.core.constants import (
    ELEMENT_ADVANTAGE,
    ELEMENT_DISADVANTAGE,
    ELEMENT_MULTIPLIER_MAX,
    ELEMENT_MULTIPLIER_MIN,
)
from heroforge.models.enums import Alignment, Element


# =============================================================================
# Element Table
# =============================================================================

ELEMENT_BEATS: dict[Element, frozenset[Element]] = {
    Element.FIRE: frozenset({Element.EARTH}),
    Element.EARTH: frozenset({Element.THUNDER}),
    Element.THUNDER: frozenset({Element.ICE}),
    Element.ICE: frozenset({Element.FIRE}),
    Element.DARK: frozenset({Element.FIRE, Element.ICE, Element.EARTH, Element.THUNDER}),
}
"""One-way advantages: attacker element to the elements it beats."""

MUTUAL_ADVANTAGE: frozenset[frozenset[Element]] = frozenset(
    {frozenset({Element.LIGHT, Element.DARK})}
)
"""Pairs where both sides deal advantaged damage to each other."""


def element_multiplier(attack: Element | str, defend: Element | str) -> float:
    """Damage multiplier for an attack element against a defender element.

    Args:
        attack: Element of the attacker.
        defend: Element of the defender.

    Returns:
        1.3 on advantage, 0.7 on disadvantage, 1.0 otherwise.

    Example:
        >>> element_multiplier(Element.LIGHT, Element.DARK)
        1.3
        >>> element_multiplier(Element.DARK, Element.LIGHT)
        1.3
    """
    attack = Element(attack)
    defend = Element(defend)

    if attack == defend:
        return 1.0
    if frozenset({attack, defend}) in MUTUAL_ADVANTAGE:
        return ELEMENT_ADVANTAGE
    if defend in ELEMENT_BEATS.get(attack, ()):
        return ELEMENT_ADVANTAGE
    if attack in ELEMENT_BEATS.get(defend, ()):
        return ELEMENT_DISADVANTAGE
    return 1.0


def compute_element_multiplier(
    attack: Element | str,
    defend: Element | str,
    *,
    attack_affinity: float = 0,
    defend_resistance: float = 0,
) -> float:
    """Element multiplier adjusted by affinity and resistance percentages.

    Args:
        attack: Element of the attacker.
        defend: Element of the defender.
        attack_affinity: Attacker's affinity with its element, in percent.
        defend_resistance: Defender's resistance to the attack, in percent.

    Returns:
        The adjusted multiplier, clamped to ``[0.4, 2.5]``.
    """
    base = element_multiplier(attack, defend)
    adjusted = base * (1 + (attack_affinity - defend_resistance) / 100)
    return max(ELEMENT_MULTIPLIER_MIN, min(ELEMENT_MULTIPLIER_MAX, adjusted))


# =============================================================================
# Alignment Table
# =============================================================================


@dataclass(frozen=True)
class AlignmentModifiers:
    """Additive combat modifiers granted by an alignment.

    Attributes:
        hit_bonus: Percentage points added to hit chance (lawful).
        crit_bonus: Percentage points added to crit chance (chaotic).
        life_drain_percent: Share of damage dealt healed back (evil).
        bonus_vs_dark_percent: Extra damage against dark defenders (good).
    """

    hit_bonus: float = 0.0
    crit_bonus: float = 0.0
    life_drain_percent: float = 0.0
    bonus_vs_dark_percent: float = 0.0

    def damage_factor(self, defender_element: Element) -> float:
        if defender_element == Element.DARK:
            return 1 + self.bonus_vs_dark_percent / 100
        return 1.0


NO_ALIGNMENT_MODIFIERS = AlignmentModifiers()


def alignment_modifiers(alignment: Alignment | str, settings: CombatSettings) -> AlignmentModifiers:
    """Build the modifiers for an alignment from the combat settings.

    Each axis contributes independently, so lawful evil gets both the hit
    bonus and life drain.
    """
    alignment = Alignment(alignment)
    return AlignmentModifiers(
        hit_bonus=settings.lawful_hit_bonus if alignment.is_lawful else 0.0,
        crit_bonus=settings.chaotic_crit_bonus if alignment.is_chaotic else 0.0,
        life_drain_percent=settings.evil_life_drain_percent if alignment.is_evil else 0.0,
        bonus_vs_dark_percent=settings.good_vs_dark_bonus_percent if alignment.is_good else 0.0,
    )


__all__ = [
    "ELEMENT_BEATS",
    "MUTUAL_ADVANTAGE",
    "element_multiplier",
    "compute_element_multiplier",
    "AlignmentModifiers",
    "NO_ALIGNMENT_MODIFIERS",
    "alignment_modifiers",
]
