"""Turn input and output contracts.

These models are the data contract between the turn resolver and its
external collaborators: the transport layer submits PlayerActions and
receives a TurnResult; the narration layer consumes fact lines, events
and dice roll records.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from dungeon_echoes.models.enums import EventType
from dungeon_echoes.models.session import GameSession


class PlayerAction(BaseModel):
    """One player's free-text action for the current turn."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    player_id: str = Field(validation_alias=AliasChoices("player_id", "playerId"))
    player_name: str = Field(
        default="",
        validation_alias=AliasChoices("player_name", "playerName"),
    )
    action_text: str = Field(
        validation_alias=AliasChoices("action_text", "actionText", "content"),
    )


class GameEvent(BaseModel):
    """A typed, machine-readable consequence of a turn."""

    type: EventType
    target_id: str | None = None
    value: Any = None
    description: str


class DiceRollRecord(BaseModel):
    """A roll shown to players: the modified total against its DC."""

    label: str
    value: int
    dc: int
    success: bool


class TurnResult(BaseModel):
    """Everything a resolved turn produced."""

    fact_lines: list[str] = Field(default_factory=list)
    new_state: GameSession
    events: list[GameEvent] = Field(default_factory=list)
    dice_rolls: list[DiceRollRecord] = Field(default_factory=list)

    @property
    def narrative(self) -> str:
        """Fact lines joined one per line."""
        return "\n".join(self.fact_lines)

    def events_of(self, event_type: EventType) -> list[GameEvent]:
        return [event for event in self.events if event.type == event_type]


__all__ = [
    "PlayerAction",
    "GameEvent",
    "DiceRollRecord",
    "TurnResult",
]
