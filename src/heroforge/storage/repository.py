"""Caller-side hero persistence.

The engine never persists anything itself. Callers load a snapshot, run
engine calls against it and save it afterwards through a ``HeroRepository``.

``InMemoryHeroRepository`` keeps each hero as serialized JSON, the same
shape a file or database backend would store, so a loaded snapshot never
aliases the saved one.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from heroforge.core.exceptions import HeroNotFoundError, PersistenceError
from heroforge.core.logging import get_logger
from heroforge.models.hero import HeroSnapshot


logger = get_logger(__name__)


@runtime_checkable
class HeroRepository(Protocol):
    """Storage interface for hero snapshots."""

    def save(self, hero: HeroSnapshot) -> None: ...

    def load(self, hero_id: str) -> HeroSnapshot: ...


class InMemoryHeroRepository:
    """Dictionary-backed repository, mainly for tests and single-process use.

    Example:
        >>> repo = InMemoryHeroRepository()
        >>> repo.save(hero)
        >>> repo.load(hero.id) == hero
        True
    """

    def __init__(self) -> None:
        self._records: dict[str, str] = {}

    def __contains__(self, hero_id: object) -> bool:
        return hero_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def save(self, hero: HeroSnapshot) -> None:
        """Store a copy of the hero, replacing any previous version."""
        self._records[hero.id] = hero.model_dump_json()
        logger.debug("Hero saved", hero_id=hero.id)

    def load(self, hero_id: str) -> HeroSnapshot:
        """Load an independent copy of a stored hero.

        Raises:
            HeroNotFoundError: If no hero with that id was saved.
            PersistenceError: If the stored record no longer validates.
        """
        record = self._records.get(hero_id)
        if record is None:
            raise HeroNotFoundError(f"Hero not found: {hero_id}", hero_id=hero_id)
        try:
            return HeroSnapshot.model_validate_json(record)
        except PydanticValidationError as exc:
            raise PersistenceError(
                f"Stored hero {hero_id} is corrupt: {exc}",
                details={"hero_id": hero_id},
            ) from exc

    def delete(self, hero_id: str) -> None:
        """Remove a stored hero.

        Raises:
            HeroNotFoundError: If no hero with that id was saved.
        """
        if self._records.pop(hero_id, None) is None:
            raise HeroNotFoundError(f"Hero not found: {hero_id}", hero_id=hero_id)

    def list_ids(self) -> list[str]:
        return sorted(self._records)


__all__ = [
    "HeroRepository",
    "InMemoryHeroRepository",
]
