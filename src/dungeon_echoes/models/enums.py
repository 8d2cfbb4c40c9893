"""Enumeration types for Dungeon Echoes.

Race names and message roles use the values the player-facing layer
displays; event types and statuses use the values of the wire contract
consumed by the narration and transport collaborators.
"""

from __future__ import annotations

from enum import StrEnum


class Race(StrEnum):
    """Playable races."""

    HUMANO = "Humano"
    ELFO = "Elfo"
    ENANO = "Enano"
    ORCO = "Orco"


class Attribute(StrEnum):
    """The four character attributes."""

    STRENGTH = "strength"
    AGILITY = "agility"
    INTELLECT = "intellect"
    PRESENCE = "presence"


class GameStatus(StrEnum):
    """Terminal status of a session."""

    PLAYING = "playing"
    VICTORY = "victory"
    DEATH = "death"

    @property
    def is_terminal(self) -> bool:
        """Whether the session has ended."""
        return self is not GameStatus.PLAYING


class EventType(StrEnum):
    """Typed events emitted alongside fact lines."""

    DAMAGE = "damage"
    HEAL = "heal"
    ITEM_GAIN = "item_gain"
    ITEM_LOSS = "item_loss"
    ROOM_CHANGE = "room_change"
    FLAG_SET = "flag_set"
    INFO = "info"
    ABSURD = "absurd"


class MessageRole(StrEnum):
    """Role tag of a chat history entry."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class IntentCategory(StrEnum):
    """Intent categories produced by the action classifier.

    Declared in classification priority order.
    """

    ABSURD = "absurd"
    COMBAT = "combat"
    SOCIAL = "social"
    MOVEMENT = "movement"
    ITEM_PICKUP = "item_pickup"
    OBSERVATION = "observation"


__all__ = [
    "Race",
    "Attribute",
    "GameStatus",
    "EventType",
    "MessageRole",
    "IntentCategory",
]
