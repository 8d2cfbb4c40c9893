"""Game Master orchestration.

The GameMaster ties the deterministic engine to the narration layer for
one session turn:

1. The turn resolver produces the authoritative outcome.
2. The players' messages are appended to the new snapshot's history.
3. The narrator renders the facts (or falls back to them).
4. The narrative is appended as the assistant's reply.

Python owns the truth; the narrator only ever sees a finished turn.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from dungeon_echoes.core.config import RulesSettings, get_settings
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.dm.narrator import Narrator
from dungeon_echoes.engine.resolver import TurnResolver, coerce_actions
from dungeon_echoes.models.character import Player
from dungeon_echoes.models.enums import GameStatus, MessageRole
from dungeon_echoes.models.events import PlayerAction, TurnResult
from dungeon_echoes.models.session import GameSession, create_session
from dungeon_echoes.models.world import Room


logger = get_logger(__name__)

GAME_OVER_MESSAGES = {
    GameStatus.VICTORY: "La partida ha terminado: el grupo ya es libre.",
    GameStatus.DEATH: "La partida ha terminado: solo quedan huesos y ecos.",
}


@dataclass
class TurnOutcome:
    """A resolved and narrated turn.

    Attributes:
        result: Mechanical outcome from the turn resolver.
        narrative: Text shown to the players.
    """

    result: TurnResult
    narrative: str

    @property
    def new_state(self) -> GameSession:
        return self.result.new_state

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible payload broadcast to every participant."""
        return {
            "narrative": self.narrative,
            "fact_lines": list(self.result.fact_lines),
            "new_state": self.result.new_state.to_snapshot(),
            "events": [event.model_dump(mode="json") for event in self.result.events],
            "dice_rolls": [r.model_dump(mode="json") for r in self.result.dice_rolls],
        }


class GameMaster:
    """Runs narrated turns for sessions over one room table."""

    def __init__(
        self,
        rooms: Mapping[str, Room] | None = None,
        *,
        resolver: TurnResolver | None = None,
        narrator: Narrator | None = None,
        rules: RulesSettings | None = None,
    ) -> None:
        self.rules = rules or get_settings().rules
        self.resolver = resolver or TurnResolver(rooms, rules=self.rules)
        self.rooms = self.resolver.rooms
        self.narrator = narrator or Narrator()

    def new_session(self, players: Iterable[Player] = ()) -> GameSession:
        return create_session(players, rooms=self.rooms, rules=self.rules)

    def play_turn(
        self,
        state: GameSession,
        actions: Iterable[PlayerAction | Mapping[str, Any]],
    ) -> TurnOutcome:
        """Resolve, record and narrate one turn.

        Args:
            state: Current session snapshot.
            actions: Ordered batch of player actions.

        Returns:
            The TurnOutcome; its state is the new authoritative snapshot.
        """
        batch = coerce_actions(actions)

        result = self.resolver.resolve(state, batch)
        if state.is_game_over:
            return TurnOutcome(result=result, narrative=GAME_OVER_MESSAGES[state.game_status])
        if not batch:
            return TurnOutcome(result=result, narrative="")

        new_state = result.new_state
        for action in batch:
            # fallen players acted on nothing this turn
            player = state.get_player(action.player_id)
            if player is None or not player.is_alive:
                continue
            new_state.add_message(
                MessageRole.USER,
                action.action_text,
                player_name=action.player_name or player.name,
            )

        room = self.resolver.get_room(new_state.current_room_id)
        narrative = self.narrator.narrate(result, room)
        if narrative:
            new_state.add_message(MessageRole.ASSISTANT, narrative)

        if new_state.is_game_over:
            logger.info(
                "Session finished",
                session_id=new_state.session_id,
                status=new_state.game_status.value,
                turns=new_state.turn_number,
            )
        return TurnOutcome(result=result, narrative=narrative)


__all__ = [
    "TurnOutcome",
    "GameMaster",
    "GAME_OVER_MESSAGES",
]
