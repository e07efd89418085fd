"""Tests for element and alignment modifiers."""

from __future__ import annotations

import pytest

from heroforge.core.config import CombatSettings
from heroforge.engine.modifiers import (
    NO_ALIGNMENT_MODIFIERS,
    alignment_modifiers,
    compute_element_multiplier,
    element_multiplier,
)
from heroforge.models.enums import Alignment, Element


class TestElementMultiplier:
    """Tests for the element table."""

    @pytest.mark.parametrize(
        ("attack", "defend"),
        [
            (Element.FIRE, Element.EARTH),
            (Element.EARTH, Element.THUNDER),
            (Element.THUNDER, Element.ICE),
            (Element.ICE, Element.FIRE),
        ],
    )
    def test_cycle(self, attack: Element, defend: Element) -> None:
        """Test each cycle edge is an advantage one way and a disadvantage back."""
        assert element_multiplier(attack, defend) == 1.3
        assert element_multiplier(defend, attack) == 0.7

    def test_light_and_dark_beat_each_other(self) -> None:
        """Test the mutual light/dark advantage."""
        assert element_multiplier(Element.LIGHT, Element.DARK) == 1.3
        assert element_multiplier(Element.DARK, Element.LIGHT) == 1.3

    @pytest.mark.parametrize("defend", [Element.FIRE, Element.ICE, Element.EARTH, Element.THUNDER])
    def test_dark_beats_cycle_elements(self, defend: Element) -> None:
        """Test dark overpowers every element of the cycle."""
        assert element_multiplier(Element.DARK, defend) == 1.3
        assert element_multiplier(defend, Element.DARK) == 0.7

    def test_neutral_pairs(self) -> None:
        """Test physical, same-element and unrelated pairs."""
        assert element_multiplier(Element.PHYSICAL, Element.FIRE) == 1.0
        assert element_multiplier(Element.DARK, Element.PHYSICAL) == 1.0
        assert element_multiplier(Element.FIRE, Element.FIRE) == 1.0
        assert element_multiplier(Element.FIRE, Element.THUNDER) == 1.0
        assert element_multiplier(Element.LIGHT, Element.FIRE) == 1.0

    def test_string_input(self) -> None:
        """Test raw element strings are accepted."""
        assert element_multiplier("ice", "fire") == 1.3


class TestComputeElementMultiplier:
    """Tests for the affinity-adjusted multiplier."""

    def test_no_adjustment(self) -> None:
        """Test the base multiplier passes through untouched."""
        assert compute_element_multiplier(Element.FIRE, Element.EARTH) == 1.3

    def test_affinity_and_resistance(self) -> None:
        """Test affinity and resistance shift the multiplier."""
        value = compute_element_multiplier(
            Element.FIRE, Element.PHYSICAL, attack_affinity=20, defend_resistance=5
        )
        assert value == pytest.approx(1.15)

    def test_clamped(self) -> None:
        """Test the adjusted multiplier stays within [0.4, 2.5]."""
        assert compute_element_multiplier(Element.FIRE, Element.EARTH, attack_affinity=300) == 2.5
        assert compute_element_multiplier(Element.EARTH, Element.FIRE, defend_resistance=90) == 0.4


class TestAlignmentModifiers:
    """Tests for alignment combat modifiers."""

    def test_lawful_evil(self) -> None:
        """Test both axes contribute independently."""
        mods = alignment_modifiers(Alignment.LAWFUL_EVIL, CombatSettings())
        assert mods.hit_bonus == 5
        assert mods.life_drain_percent == 10
        assert mods.crit_bonus == 0
        assert mods.bonus_vs_dark_percent == 0

    def test_chaotic_good(self) -> None:
        """Test the chaotic crit bonus and the good bonus against dark."""
        mods = alignment_modifiers("chaotic_good", CombatSettings())
        assert mods.crit_bonus == 5
        assert mods.damage_factor(Element.DARK) == pytest.approx(1.15)
        assert mods.damage_factor(Element.FIRE) == 1.0

    def test_true_neutral(self) -> None:
        """Test true neutral gets nothing."""
        assert alignment_modifiers(Alignment.TRUE_NEUTRAL, CombatSettings()) == NO_ALIGNMENT_MODIFIERS

    def test_uses_settings(self) -> None:
        """Test the bonuses come from the combat settings."""
        mods = alignment_modifiers(Alignment.LAWFUL_NEUTRAL, CombatSettings(lawful_hit_bonus=12))
        assert mods.hit_bonus == 12
