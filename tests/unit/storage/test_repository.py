"""Tests for hero persistence."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from heroforge.core.exceptions import HeroNotFoundError, PersistenceError
from heroforge.engine.ranks import RankSystem
from heroforge.models.hero import HeroSnapshot
from heroforge.storage.repository import HeroRepository, InMemoryHeroRepository


@pytest.fixture
def repo() -> InMemoryHeroRepository:
    return InMemoryHeroRepository()


class TestInMemoryHeroRepository:
    """Tests for the in-memory repository."""

    def test_protocol(self, repo: InMemoryHeroRepository) -> None:
        """Test the repository satisfies the storage interface."""
        assert isinstance(repo, HeroRepository)

    def test_save_and_load(self, repo: InMemoryHeroRepository, hero: HeroSnapshot) -> None:
        """Test a saved hero loads back equal."""
        repo.save(hero)

        loaded = repo.load(hero.id)

        assert loaded == hero
        assert hero.id in repo
        assert len(repo) == 1

    def test_load_returns_copy(self, repo: InMemoryHeroRepository, hero: HeroSnapshot) -> None:
        """Test mutating a loaded hero does not touch the stored one."""
        repo.save(hero)
        loaded = repo.load(hero.id)

        loaded.progression.gold = 999

        assert repo.load(hero.id).progression.gold == 0

    def test_full_state_round_trip(
        self,
        repo: InMemoryHeroRepository,
        make_hero: Callable[..., HeroSnapshot],
        now: datetime,
    ) -> None:
        """Test world, rank and companion state survive serialization."""
        hero = make_hero(
            pets=[{"id": "p1", "name": "Ember", "element": "fire", "exclusive_skill": "arcane_pulse"}],
            active_pet_id="p1",
            stamina={"last_recovery": now},
        )
        hero.world_state.active_events.add("festival")
        RankSystem().update_rank_data(hero, now)

        repo.save(hero)
        loaded = repo.load(hero.id)

        assert loaded.active_pet is not None
        assert loaded.active_pet.name == "Ember"
        assert loaded.world_state.active_events == {"festival"}
        assert loaded.rank_data == hero.rank_data
        assert loaded.stamina.last_recovery == now

    def test_save_replaces(self, repo: InMemoryHeroRepository, hero: HeroSnapshot) -> None:
        """Test saving again overwrites the previous version."""
        repo.save(hero)
        hero.progression.xp = 50
        repo.save(hero)

        assert repo.load(hero.id).progression.xp == 50
        assert len(repo) == 1

    def test_missing_hero(self, repo: InMemoryHeroRepository) -> None:
        """Test loading an unknown hero."""
        with pytest.raises(HeroNotFoundError) as exc_info:
            repo.load("nobody")

        assert exc_info.value.details["hero_id"] == "nobody"

    def test_corrupt_record(self, repo: InMemoryHeroRepository) -> None:
        """Test an unreadable record is reported as a persistence error."""
        repo._records["broken"] = "{not json"

        with pytest.raises(PersistenceError):
            repo.load("broken")

    def test_delete_and_list(self, repo: InMemoryHeroRepository, make_hero: Callable[..., HeroSnapshot]) -> None:
        """Test deleting and listing heroes."""
        repo.save(make_hero(id="b"))
        repo.save(make_hero(id="a"))

        assert repo.list_ids() == ["a", "b"]

        repo.delete("a")

        assert repo.list_ids() == ["b"]
        with pytest.raises(HeroNotFoundError):
            repo.delete("a")
