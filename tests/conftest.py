"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Dungeon Echoes test suite:
a scripted dice roller for exact outcomes, rule settings, the bundled
room table and ready-made players and sessions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from dungeon_echoes.core.config import RulesSettings
    from dungeon_echoes.models.character import Player
    from dungeon_echoes.models.session import GameSession
    from dungeon_echoes.models.world import Room


# =============================================================================
# Dice
# =============================================================================


class ScriptedRoller:
    """Roller returning a fixed sequence of die results.

    Each call records the requested number of sides, so tests can assert
    both the outcome and which dice were rolled.
    """

    def __init__(self, rolls: Iterable[int] = ()) -> None:
        self.rolls = list(rolls)
        self.calls: list[int] = []

    def roll(self, sides: int) -> int:
        if not self.rolls:
            raise AssertionError(f"Unexpected roll of 1d{sides}: script exhausted")
        value = self.rolls.pop(0)
        if not 1 <= value <= sides:
            raise AssertionError(f"Scripted value {value} does not fit 1d{sides}")
        self.calls.append(sides)
        return value

    def push(self, *rolls: int) -> None:
        self.rolls.extend(rolls)

    @property
    def exhausted(self) -> bool:
        return not self.rolls


@pytest.fixture
def scripted_roller() -> ScriptedRoller:
    """Provide an empty scripted roller; tests push the rolls they need."""
    return ScriptedRoller()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the settings cache and narration env before and after each test."""
    from dungeon_echoes.core.config import clear_settings_cache

    monkeypatch.delenv("DUNGEON_ECHOES_NARRATOR_ENABLED", raising=False)
    monkeypatch.delenv("DUNGEON_ECHOES_NARRATOR_API_KEY", raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def rules() -> RulesSettings:
    """Provide default rule settings."""
    from dungeon_echoes.core.config import RulesSettings

    return RulesSettings()


@pytest.fixture
def rooms() -> dict[str, Room]:
    """Provide the bundled room table."""
    from dungeon_echoes.content import get_default_rooms

    return get_default_rooms()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def orc() -> Player:
    """An orc with strength 9 and presence 11."""
    from dungeon_echoes.models.character import create_player_character

    return create_player_character("Grom", "Orco", bonus={"presence": 5}, player_id="p1")


@pytest.fixture
def elf() -> Player:
    """An elf with strength 3 and agility 12."""
    from dungeon_echoes.models.character import create_player_character

    return create_player_character("Lúthien", "Elfo", bonus={"agility": 5}, player_id="p2")


@pytest.fixture
def session(orc: Player, rooms: dict[str, Room], rules: RulesSettings) -> GameSession:
    """A fresh single-player session in the cell."""
    from dungeon_echoes.models.session import create_session

    return create_session([orc], rooms=rooms, rules=rules)


@pytest.fixture
def party_session(
    orc: Player,
    elf: Player,
    rooms: dict[str, Room],
    rules: RulesSettings,
) -> GameSession:
    """A fresh two-player session in the cell."""
    from dungeon_echoes.models.session import create_session

    return create_session([orc, elf], rooms=rooms, rules=rules)


@pytest.fixture
def resolver(
    rooms: dict[str, Room],
    rules: RulesSettings,
    scripted_roller: ScriptedRoller,
):
    """A turn resolver over the bundled rooms driven by the scripted roller."""
    from dungeon_echoes.engine.resolver import TurnResolver

    return TurnResolver(rooms, roller=scripted_roller, rules=rules)


def act(player: Player, text: str) -> dict[str, str]:
    """Build a raw action payload for a player."""
    return {"player_id": player.id, "player_name": player.name, "action_text": text}
