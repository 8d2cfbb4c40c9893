"""Pydantic V2 models for characters, rooms, sessions and turn results.

Static room templates are frozen; the GameSession snapshot is the only
mutable state and is owned by the turn resolver during a turn.
"""

from __future__ import annotations

from dungeon_echoes.models.character import (
    RACES,
    Attributes,
    Player,
    RaceProfile,
    create_player_character,
)
from dungeon_echoes.models.enums import (
    Attribute,
    EventType,
    GameStatus,
    IntentCategory,
    MessageRole,
    Race,
)
from dungeon_echoes.models.events import (
    DiceRollRecord,
    GameEvent,
    PlayerAction,
    TurnResult,
)
from dungeon_echoes.models.session import GameSession, HistoryEntry, create_session
from dungeon_echoes.models.world import (
    Room,
    RoomEntity,
    RoomExit,
    RoomItem,
    exit_is_open,
    is_visible,
    visible_entities,
    visible_items,
)


__all__ = [
    # Enums
    "Race",
    "Attribute",
    "GameStatus",
    "EventType",
    "MessageRole",
    "IntentCategory",
    # Characters
    "Attributes",
    "RaceProfile",
    "RACES",
    "Player",
    "create_player_character",
    # World
    "Room",
    "RoomEntity",
    "RoomItem",
    "RoomExit",
    "is_visible",
    "visible_entities",
    "visible_items",
    "exit_is_open",
    # Session
    "HistoryEntry",
    "GameSession",
    "create_session",
    # Turn contract
    "PlayerAction",
    "GameEvent",
    "DiceRollRecord",
    "TurnResult",
]
