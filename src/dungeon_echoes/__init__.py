"""Ecos de la Mazmorra - deterministic turn engine for a satirical dungeon crawl.

A small multiplayer text adventure where a party escapes a dungeon by
typing free-text actions.

ARCHITECTURE:
- Python owns TRUTH (session snapshot, dice rolls via d20, world flags)
- The narration model only renders finished turns as prose
- The narration model NEVER mutates state or generates random numbers

Example:
    >>> from dungeon_echoes import GameMaster, PlayerAction, create_player_character
    >>>
    >>> hero = create_player_character("Grom", "Orco", bonus={"strength": 5})
    >>> master = GameMaster()
    >>> session = master.new_session([hero])
    >>>
    >>> outcome = master.play_turn(session, [
    ...     PlayerAction(player_id=hero.id, player_name="Grom", action_text="atacar al guardia"),
    ... ])
    >>> print(outcome.narrative)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for characters, rooms and sessions.
    content: Bundled room graph and its loader.
    engine: Dice, classifier, turn resolver and end-of-turn checks.
    dm: Narration prompts, narrator and Game Master orchestrator.
    api: Turn request boundary.
"""

from __future__ import annotations

# Core
from dungeon_echoes.core.config import Settings, get_settings
from dungeon_echoes.core.exceptions import DungeonEchoesError
from dungeon_echoes.core.logging import configure_logging, get_logger

# Models
from dungeon_echoes.models import (
    GameSession,
    GameStatus,
    IntentCategory,
    Player,
    PlayerAction,
    Race,
    Room,
    TurnResult,
    create_player_character,
    create_session,
)

# Engine
from dungeon_echoes.engine import DiceRoller, TurnResolver, classify, process_turn

# Game Master
from dungeon_echoes.dm import GameMaster, Narrator, TurnOutcome

# Boundary
from dungeon_echoes.api import ApiResponse, handle_turn_request


__version__ = "0.1.0"
__author__ = "Ecos de la Mazmorra Team"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "DungeonEchoesError",
    "configure_logging",
    "get_logger",
    # Models
    "Race",
    "GameStatus",
    "IntentCategory",
    "Player",
    "Room",
    "GameSession",
    "PlayerAction",
    "TurnResult",
    "create_player_character",
    "create_session",
    # Engine
    "DiceRoller",
    "TurnResolver",
    "classify",
    "process_turn",
    # Game Master
    "GameMaster",
    "Narrator",
    "TurnOutcome",
    # Boundary
    "ApiResponse",
    "handle_turn_request",
]
