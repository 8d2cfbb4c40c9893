"""Game session snapshot.

A GameSession is the complete mutable state of one playthrough: position
in the room graph, world flags, the player roster, session-scoped entity
hit points, the combat flag, terminal status and the chat history. The
turn resolver receives a snapshot and returns a new one; nothing else
mutates it during play.

Example:
    >>> session = create_session([hero])
    >>> session.current_room_id
    'celda'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dungeon_echoes.core.config import RulesSettings, get_settings
from dungeon_echoes.core.exceptions import InvalidGameStateError
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.models.character import Player
from dungeon_echoes.models.enums import GameStatus, MessageRole
from dungeon_echoes.models.world import Room, RoomEntity


logger = get_logger(__name__)


class HistoryEntry(BaseModel):
    """One role-tagged line of the chat history."""

    role: MessageRole
    content: str
    player_name: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class GameSession(BaseModel):
    """The mutable snapshot passed to the turn resolver each turn.

    Attributes:
        session_id: Unique session identifier.
        current_room_id: Room the party is in.
        world_state: Flag name -> True. Flags are only ever added.
        players: Roster in join order.
        entity_hp: Session-scoped hit points keyed by entity id.
        in_combat: Whether enemies retaliate at the end of the turn.
        game_status: playing, victory or death.
        history: Chronological chat history.
        turn_number: Number of resolved turns.
    """

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(default_factory=lambda: uuid4().hex)
    current_room_id: str = Field(min_length=1)
    world_state: dict[str, bool] = Field(default_factory=dict)
    players: list[Player] = Field(default_factory=list)
    entity_hp: dict[str, int] = Field(default_factory=dict)
    in_combat: bool = False
    game_status: GameStatus = GameStatus.PLAYING
    history: list[HistoryEntry] = Field(default_factory=list)
    turn_number: int = Field(default=0, ge=0)

    @computed_field
    @property
    def is_game_over(self) -> bool:
        return self.game_status.is_terminal

    # -------------------------------------------------------------------------
    # Players
    # -------------------------------------------------------------------------

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def living_players(self) -> list[Player]:
        return [p for p in self.players if p.is_alive]

    def all_players_down(self) -> bool:
        return bool(self.players) and not self.living_players()

    def add_player(self, player: Player) -> None:
        """Add a player to the roster, replacing one with the same id."""
        existing = self.get_player(player.id)
        if existing is not None:
            self.players[self.players.index(existing)] = player
            return
        self.players.append(player)
        self.add_message(MessageRole.SYSTEM, f"{player.name} se ha unido a la expedición.")
        logger.info("Player joined", session_id=self.session_id, player_id=player.id)

    # -------------------------------------------------------------------------
    # World flags
    # -------------------------------------------------------------------------

    def has_flag(self, flag: str) -> bool:
        return self.world_state.get(flag, False)

    def set_flag(self, flag: str) -> bool:
        """Set a flag to true.

        Returns:
            True if the flag was not already set.
        """
        if self.has_flag(flag):
            return False
        self.world_state[flag] = True
        return True

    # -------------------------------------------------------------------------
    # Entities
    # -------------------------------------------------------------------------

    def entity_hit_points(self, entity: RoomEntity, default: int) -> int:
        """Current session hit points of an entity, seeding unseen ones."""
        if entity.id not in self.entity_hp:
            self.entity_hp[entity.id] = entity.hp if entity.hp is not None else default
        return self.entity_hp[entity.id]

    def damage_entity(self, entity: RoomEntity, amount: int, default: int) -> int:
        """Subtract damage from an entity and return its remaining hit points."""
        remaining = self.entity_hit_points(entity, default) - amount
        self.entity_hp[entity.id] = remaining
        return remaining

    # -------------------------------------------------------------------------
    # History and snapshots
    # -------------------------------------------------------------------------

    def add_message(
        self,
        role: MessageRole,
        content: str,
        *,
        player_name: str | None = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(role=role, content=content, player_name=player_name)
        self.history.append(entry)
        return entry

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any]) -> "GameSession":
        return cls.model_validate(dict(data))


def create_session(
    players: Iterable[Player] = (),
    *,
    rooms: Mapping[str, Room] | None = None,
    rules: RulesSettings | None = None,
) -> GameSession:
    """Create a fresh session at the start room.

    Entity hit points are copied from the static templates once, here;
    every later read goes through the session's ``entity_hp`` arena.

    Args:
        players: Initial roster.
        rooms: Room table; the bundled content when omitted.
        rules: Rule settings; the configured ones when omitted.

    Returns:
        A new GameSession with empty world state.

    Raises:
        InvalidGameStateError: If the start room is not in the table.
    """
    if rooms is None:
        from dungeon_echoes.content import get_default_rooms

        rooms = get_default_rooms()
    rules = rules or get_settings().rules

    start_room = rooms.get(rules.start_room_id)
    if start_room is None:
        raise InvalidGameStateError(
            f"Start room '{rules.start_room_id}' is not defined",
            current_state=rules.start_room_id,
        )

    entity_hp: dict[str, int] = {}
    for room in rooms.values():
        for entity in room.entities:
            if entity.hp is not None or entity.is_enemy:
                entity_hp[entity.id] = entity.hp if entity.hp is not None else rules.default_entity_hp

    session = GameSession(
        current_room_id=start_room.id,
        players=[p.model_copy(deep=True) for p in players],
        entity_hp=entity_hp,
    )
    session.add_message(MessageRole.ASSISTANT, start_room.description)

    logger.info(
        "Session created",
        session_id=session.session_id,
        players=len(session.players),
        room=start_room.id,
    )
    return session


__all__ = [
    "HistoryEntry",
    "GameSession",
    "create_session",
]
