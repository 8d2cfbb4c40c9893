"""Tests for dice rolling."""

from __future__ import annotations

import pytest

from conftest import ScriptedRoller
from dungeon_echoes.core.exceptions import DiceRollError
from dungeon_echoes.engine.dice import DiceRoller, choose, roll


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_d20_in_range(self) -> None:
        """Test that a d20 stays within its faces."""
        roller = DiceRoller()

        for _ in range(200):
            assert 1 <= roller.roll(20) <= 20

    def test_d1_always_one(self) -> None:
        """Test the single-faced die."""
        roller = DiceRoller()

        assert {roller.roll(1) for _ in range(20)} == {1}

    def test_seed_is_reproducible(self) -> None:
        """Test that the same seed yields the same sequence."""
        roller = DiceRoller(seed=42)
        sequence_a = [roller.roll(20) for _ in range(10)]
        roller.reseed(42)
        sequence_b = [roller.roll(20) for _ in range(10)]
        sequence_c = [DiceRoller(seed=42).roll(20)]

        assert sequence_a == sequence_b
        assert sequence_c[0] == sequence_a[0]

    def test_all_faces_reachable(self) -> None:
        """Test that every face of a d6 shows up eventually."""
        roller = DiceRoller(seed=7)

        faces = {roller.roll(6) for _ in range(300)}

        assert faces == {1, 2, 3, 4, 5, 6}

    @pytest.mark.parametrize("sides", [0, -4, True, 2.5, "6"])
    def test_invalid_sides(self, sides: object) -> None:
        """Test that non-positive or non-integer dice are rejected."""
        with pytest.raises(DiceRollError):
            DiceRoller().roll(sides)  # type: ignore[arg-type]

    def test_module_roll(self) -> None:
        """Test the module-level convenience roller."""
        assert 1 <= roll(8) <= 8


class TestChoose:
    """Tests for uniform choice through a roller."""

    def test_single_option_uses_no_roll(self) -> None:
        """Test that a lone option is returned without rolling."""
        roller = ScriptedRoller()

        assert choose(roller, ["only"]) == "only"
        assert roller.calls == []

    def test_roll_indexes_options(self) -> None:
        """Test that the roll result picks the matching option."""
        roller = ScriptedRoller([3])

        assert choose(roller, ["a", "b", "c"]) == "c"
        assert roller.calls == [3]

    def test_empty_sequence(self) -> None:
        """Test that choosing from nothing is an error."""
        with pytest.raises(DiceRollError):
            choose(ScriptedRoller(), [])
