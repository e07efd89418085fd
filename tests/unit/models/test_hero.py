"""Tests for hero snapshot models."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from heroforge.models.enums import Alignment, Attribute, Element, PetSkill
from heroforge.models.hero import (
    Attributes,
    DerivedStats,
    HeroSnapshot,
    Mount,
    Pet,
    Progression,
    RestBuff,
    Stamina,
)


class TestAttributes:
    """Tests for Attributes component."""

    def test_default_attributes(self) -> None:
        """Test default attribute values."""
        attrs = Attributes()
        assert attrs.strength == 10
        assert attrs.charisma == 10

    def test_negative_values_clamped(self) -> None:
        """Test that negative attributes are clamped to zero."""
        attrs = Attributes(strength=-5, agility=None)
        assert attrs.strength == 0
        assert attrs.agility == 0

    def test_get_by_enum_or_name(self) -> None:
        """Test attribute lookup by enum and by name."""
        attrs = Attributes(wisdom=14)
        assert attrs.get(Attribute.WISDOM) == 14
        assert attrs.get("wisdom") == 14


class TestDerivedStats:
    """Tests for DerivedStats component."""

    def test_current_defaults_to_max(self) -> None:
        """Test that omitted current vitals start full."""
        derived = DerivedStats(hp=40, mp=12)
        assert derived.current_hp == 40
        assert derived.current_mp == 12

    def test_current_clamped_to_range(self) -> None:
        """Test that current vitals are clamped into [0, max]."""
        derived = DerivedStats(hp=20, current_hp=99, mp=5, current_mp=-3)
        assert derived.current_hp == 20
        assert derived.current_mp == 0

    def test_clamp_after_mutation(self) -> None:
        """Test the explicit clamp after an in-place change."""
        derived = DerivedStats(hp=20)
        derived.current_hp = 35
        derived.clamp()
        assert derived.current_hp == 20


class TestStaminaAndProgression:
    """Tests for Stamina and Progression components."""

    def test_stamina_clamped(self) -> None:
        """Test stamina is clamped to its pool size."""
        stamina = Stamina(current=150, max=100)
        assert stamina.current == 100
        assert stamina.last_recovery is None

    def test_negative_rate_clamped(self) -> None:
        """Test a negative recovery rate is clamped to zero."""
        assert Stamina(recovery_rate=-4).recovery_rate == 0

    def test_progression_bounds(self) -> None:
        """Test level, fatigue and economy bounds."""
        progression = Progression(xp=-10, level=0, gold=-1, fatigue=150)
        assert progression.xp == 0
        assert progression.level == 1
        assert progression.gold == 0
        assert progression.fatigue == 100


class TestCompanions:
    """Tests for pets, mounts and buffs."""

    def test_pet_energy_clamped(self) -> None:
        """Test pet energy never exceeds the pool."""
        pet = Pet(energy=250, exclusive_skill="sacred_aura")
        assert pet.energy == 100
        assert pet.exclusive_skill == PetSkill.SACRED_AURA

    def test_pet_level_clamped(self) -> None:
        """Test a zero or negative pet level is raised to 1."""
        hero = HeroSnapshot(pets=[{"id": "p", "level": 0}, {"id": "q", "level": -4}])
        assert [pet.level for pet in hero.pets] == [1, 1]

    def test_mount_negative_values(self) -> None:
        """Test mount stats are clamped to be non-negative."""
        mount = Mount(speed_bonus=-3, mastery=-1)
        assert mount.speed_bonus == 0
        assert mount.mastery == 0

    def test_timed_buff_expiry(self, now: datetime) -> None:
        """Test buff activity against the expiry instant."""
        buff = RestBuff(expires_at=now + timedelta(minutes=5))
        assert buff.is_active(now)
        assert not buff.is_active(now + timedelta(minutes=5))
        assert RestBuff().is_active(now)

    def test_naive_times_read_as_utc(self, now: datetime) -> None:
        """Test naive expiry and recovery timestamps are stored as UTC."""
        buff = RestBuff(expires_at=(now + timedelta(minutes=5)).replace(tzinfo=None))
        stamina = Stamina(last_recovery=now.replace(tzinfo=None))

        assert buff.expires_at == now + timedelta(minutes=5)
        assert buff.is_active(now)
        assert not buff.is_active((now + timedelta(minutes=6)).replace(tzinfo=None))
        assert stamina.last_recovery == now


class TestHeroSnapshot:
    """Tests for the HeroSnapshot aggregate."""

    def test_defaults(self) -> None:
        """Test a hero created with no data."""
        hero = HeroSnapshot()
        assert hero.alignment == Alignment.TRUE_NEUTRAL
        assert hero.element == Element.PHYSICAL
        assert hero.world_state is None
        assert hero.rank_data is None
        assert hero.level == 1

    def test_factory_hero(self, hero: HeroSnapshot) -> None:
        """Test the shared fixture hero."""
        assert hero.name == "Aria"
        assert hero.derived.current_hp == 30
        assert hero.world_state is not None

    def test_luck_derived_from_attributes(self, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test luck falls back to (charisma + wisdom) // 2."""
        hero = make_hero(attributes={"charisma": 13, "wisdom": 8})
        assert hero.luck == 10

    def test_explicit_luck(self, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test an explicit luck stat wins over the derived one."""
        hero = make_hero(derived={"hp": 30, "luck": 25})
        assert hero.luck == 25

    def test_active_pet_lookup(self, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test the active pet is resolved by id."""
        hero = make_hero(pets=[{"id": "p1", "name": "Ember"}], active_pet_id="p1")
        assert hero.active_pet is not None
        assert hero.active_pet.name == "Ember"

    def test_missing_active_ids(self, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test dangling active ids resolve to None."""
        hero = make_hero(active_pet_id="ghost", active_mount_id="ghost")
        assert hero.active_pet is None
        assert hero.active_mount is None

    def test_clamp_vitals(self, hero: HeroSnapshot) -> None:
        """Test clamp_vitals re-applies every vital bound."""
        hero.derived.current_hp = -7
        hero.stamina.current = 500
        hero.pets.append(Pet())
        hero.pets[0].energy = 180

        hero.clamp_vitals()

        assert hero.derived.current_hp == 0
        assert hero.stamina.current == hero.stamina.max
        assert hero.pets[0].energy == 100

    def test_extra_fields_ignored(self) -> None:
        """Test unknown keys from content data are dropped."""
        hero = HeroSnapshot.model_validate({"name": "Bo", "guild": "Red Hand"})
        assert hero.name == "Bo"
        assert not hasattr(hero, "guild")
