"""Fact and event collection for a single turn."""

from __future__ import annotations

from typing import Any

from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.models.enums import EventType
from dungeon_echoes.models.events import DiceRollRecord, GameEvent, TurnResult
from dungeon_echoes.models.session import GameSession


logger = get_logger(__name__)


class TurnLog:
    """Accumulates fact lines, typed events and dice rolls for one turn.

    Flags are set through the log so every new world fact also shows up
    as a ``flag_set`` event.
    """

    def __init__(self, state: GameSession) -> None:
        self.state = state
        self.fact_lines: list[str] = []
        self.events: list[GameEvent] = []
        self.dice_rolls: list[DiceRollRecord] = []

    def fact(self, line: str) -> None:
        self.fact_lines.append(line)

    def event(
        self,
        event_type: EventType,
        description: str,
        *,
        target_id: str | None = None,
        value: Any = None,
    ) -> GameEvent:
        event = GameEvent(
            type=event_type,
            description=description,
            target_id=target_id,
            value=value,
        )
        self.events.append(event)
        return event

    def dice_roll(self, label: str, value: int, dc: int) -> bool:
        """Record a roll against a DC and return whether it succeeded."""
        success = value >= dc
        self.dice_rolls.append(DiceRollRecord(label=label, value=value, dc=dc, success=success))
        logger.info("Roll recorded", label=label, value=value, dc=dc, success=success)
        return success

    def set_flag(self, flag: str | None) -> bool:
        if not flag or not self.state.set_flag(flag):
            return False
        self.event(EventType.FLAG_SET, f"Bandera activada: {flag}", target_id=flag, value=True)
        logger.info("World flag set", flag=flag)
        return True

    def build(self) -> TurnResult:
        return TurnResult(
            fact_lines=list(self.fact_lines),
            new_state=self.state,
            events=list(self.events),
            dice_rolls=list(self.dice_rolls),
        )


__all__ = ["TurnLog"]
