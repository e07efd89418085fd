"""Caller-side persistence interfaces for hero snapshots."""

from __future__ import annotations

from heroforge.storage.repository import HeroRepository, InMemoryHeroRepository


__all__ = [
    "HeroRepository",
    "InMemoryHeroRepository",
]
