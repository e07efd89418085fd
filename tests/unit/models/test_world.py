"""Tests for world state models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from heroforge.models.world import (
    DEFAULT_FACTIONS,
    DecisionImpact,
    DecisionLogEntry,
    FactionState,
    ImmediateImpact,
    LongTermImpact,
    RollResult,
    WorldState,
)


@pytest.fixture
def world() -> WorldState:
    """A freshly initialized world."""
    return WorldState.initialize()


class TestWorldStateInitialize:
    """Tests for the starting world."""

    def test_default_factions(self, world: WorldState) -> None:
        """Test the six default factions and their standings."""
        assert set(world.factions) == set(DEFAULT_FACTIONS)
        assert world.factions["Bandits"].reputation == -10
        assert world.factions["Adventurers"].reputation == 10
        assert world.factions["Bandits"].enemies == ["City Guard", "Merchants"]

    def test_default_npcs(self, world: WorldState) -> None:
        """Test the default NPCs start alive."""
        assert world.npc_status["Merchant Aldric"].relation_to_player == 5
        assert all(npc.alive for npc in world.npc_status.values())

    def test_worlds_are_independent(self) -> None:
        """Test that two initialized worlds share no mutable state."""
        first = WorldState.initialize()
        second = WorldState.initialize()

        first.adjust_reputation("Merchants", 15)

        assert second.factions["Merchants"].reputation == 0
        assert DEFAULT_FACTIONS["Merchants"]["reputation"] == 0


class TestWorldStateMutation:
    """Tests for reputation and NPC adjustments."""

    def test_adjust_reputation(self, world: WorldState) -> None:
        """Test adjusting a known faction."""
        assert world.adjust_reputation("City Guard", -4) is True
        assert world.factions["City Guard"].reputation == -4

    def test_unknown_faction_ignored(self, world: WorldState) -> None:
        """Test that unknown factions are not created."""
        assert world.adjust_reputation("Pirates", 5) is False
        assert "Pirates" not in world.factions

    def test_adjust_npc_relation(self, world: WorldState) -> None:
        """Test adjusting known and unknown NPCs."""
        assert world.adjust_npc_relation("Sage Elara", 3) is True
        assert world.npc_status["Sage Elara"].relation_to_player == 3
        assert world.adjust_npc_relation("Nobody", 3) is False


class TestRequirements:
    """Tests for quest gating checks."""

    def test_faction_minimum(self, world: WorldState) -> None:
        """Test minimum reputation requirements."""
        assert world.meets_requirements(faction_reputation={"Adventurers": 10})
        assert not world.meets_requirements(faction_reputation={"Adventurers": 11})

    def test_unknown_faction_counts_as_zero(self, world: WorldState) -> None:
        """Test unknown factions are treated as neutral standing."""
        assert world.meets_requirements(faction_reputation={"Pirates": 0})
        assert not world.meets_requirements(faction_reputation={"Pirates": 1})

    def test_npc_alive(self, world: WorldState) -> None:
        """Test NPC presence requirements."""
        assert world.meets_requirements(npc_alive=["Guard Captain"])

        world.npc_status["Guard Captain"].alive = False

        assert not world.meets_requirements(npc_alive=["Guard Captain"])
        assert not world.meets_requirements(npc_alive=["Nobody"])

    def test_no_requirements(self, world: WorldState) -> None:
        """Test an empty requirement set always passes."""
        assert world.meets_requirements()


class TestDecisionLogRecords:
    """Tests for the immutable decision log records."""

    def test_roll_total(self) -> None:
        """Test the roll total is roll plus modifiers."""
        result = RollResult(roll=51, modifiers=10, threshold=60, success=True)
        assert result.total == 61

    def test_entry_is_frozen(self, now: datetime) -> None:
        """Test that log entries cannot be rewritten."""
        entry = DecisionLogEntry(
            hero_id="hero-1",
            quest_id="q-1",
            choice_id="c-1",
            choice_text="Open the gate",
            timestamp=now,
            impact=DecisionImpact(),
            roll_result=RollResult(roll=1, threshold=50, success=False),
        )

        assert entry.id.startswith("decision_")
        with pytest.raises(PydanticValidationError):
            entry.choice_text = "Something else"

    def test_impact_deltas_are_read_only(self) -> None:
        """Test impact mappings reject edits and still serialize as dicts."""
        immediate = ImmediateImpact(gold=5, reputation={"Merchants": 5})
        long_term = LongTermImpact()

        with pytest.raises(TypeError):
            immediate.reputation["Merchants"] = 999  # type: ignore[index]
        with pytest.raises(TypeError):
            long_term.npc_relations["Sage Elara"] = 1  # type: ignore[index]

        assert immediate.model_dump()["reputation"] == {"Merchants": 5}
        assert ImmediateImpact.model_validate_json(immediate.model_dump_json()) == immediate


class TestFactionClamping:
    """Tests for defensive faction clamping."""

    def test_negative_influence_clamped(self) -> None:
        """Test out-of-range influence is clamped rather than rejected."""
        assert FactionState(influence=-7).influence == 0
