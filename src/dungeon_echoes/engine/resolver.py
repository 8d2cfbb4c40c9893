"""Deterministic turn resolution.

The TurnResolver takes a session snapshot and an ordered batch of player
actions and returns a new snapshot together with fact lines, typed events
and dice roll records. It performs no I/O and holds no per-session state;
callers must submit at most one batch per session at a time.

Resolution order:
    1. Each action, in the order supplied, is classified and handled.
       Malformed entries and unknown or dead players are skipped.
    2. If the session is in combat, every living enemy retaliates.
    3. Combat end, defeat and victory are checked.

Example:
    >>> resolver = TurnResolver(roller=DiceRoller(seed=1))
    >>> result = resolver.resolve(session, [
    ...     PlayerAction(player_id="p1", player_name="Grom", action_text="atacar al guardia"),
    ... ])
    >>> print(result.narrative)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dungeon_echoes.core.config import RulesSettings, get_settings
from dungeon_echoes.core.exceptions import InvalidGameStateError
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.engine.classifier import EXIT_TOKENS, classify, contains_keyword, normalize
from dungeon_echoes.engine.combat import (
    check_combat_end,
    check_defeat,
    check_victory,
    living_enemies,
    resolve_enemy_turn,
)
from dungeon_echoes.engine.dice import DiceRoller, Roller
from dungeon_echoes.engine.events import TurnLog
from dungeon_echoes.models.character import Player
from dungeon_echoes.models.enums import EventType, IntentCategory
from dungeon_echoes.models.events import PlayerAction, TurnResult
from dungeon_echoes.models.session import GameSession
from dungeon_echoes.models.world import (
    Room,
    RoomEntity,
    RoomExit,
    exit_is_open,
    visible_entities,
    visible_items,
)


logger = get_logger(__name__)

INTIMIDATE_KEYWORDS: tuple[str, ...] = ("intimidar", "intimido", "amenazar", "amenazo", "intimidate")
CONVINCE_KEYWORDS: tuple[str, ...] = ("convencer", "convenzo", "convince")

ActionHandler = Callable[[Player, str, Room, TurnLog], None]


def coerce_actions(actions: Iterable[PlayerAction | Mapping[str, Any]]) -> list[PlayerAction]:
    """Validate each action on its own, dropping entries that cannot be read.

    A malformed entry (missing or null player id, no text) is logged and
    skipped so the rest of the batch still resolves.
    """
    batch: list[PlayerAction] = []
    for index, action in enumerate(actions):
        if isinstance(action, PlayerAction):
            batch.append(action)
            continue
        try:
            batch.append(PlayerAction.model_validate(action))
        except PydanticValidationError as exc:
            logger.warning("Skipping malformed action", index=index, errors=exc.error_count())
    return batch


class TurnResolver:
    """Resolve batches of player actions against a room graph.

    Attributes:
        rooms: Static room table keyed by id.
        roller: Source of every die roll.
        rules: Difficulty classes and other rule constants.
    """

    def __init__(
        self,
        rooms: Mapping[str, Room] | None = None,
        *,
        roller: Roller | None = None,
        rules: RulesSettings | None = None,
    ) -> None:
        if rooms is None:
            from dungeon_echoes.content import get_default_rooms

            rooms = get_default_rooms()
        self.rooms = rooms
        self.roller = roller or DiceRoller()
        self.rules = rules or get_settings().rules
        self._handlers: dict[IntentCategory, ActionHandler] = {
            IntentCategory.ABSURD: self._resolve_absurd,
            IntentCategory.COMBAT: self._resolve_combat,
            IntentCategory.SOCIAL: self._resolve_social,
            IntentCategory.MOVEMENT: self._resolve_movement,
            IntentCategory.ITEM_PICKUP: self._resolve_pickup,
            IntentCategory.OBSERVATION: self._resolve_observation,
        }

    def get_room(self, room_id: str) -> Room:
        """Look up a room template.

        Raises:
            InvalidGameStateError: If the room is not in the table.
        """
        room = self.rooms.get(room_id)
        if room is None:
            raise InvalidGameStateError(
                f"Room '{room_id}' is not defined",
                current_state=room_id,
            )
        return room

    # =========================================================================
    # Turn entry point
    # =========================================================================

    def resolve(
        self,
        state: GameSession,
        actions: Iterable[PlayerAction | Mapping[str, Any]],
    ) -> TurnResult:
        """Resolve one turn.

        The input snapshot is never mutated; a deep copy is returned as
        ``new_state``. A terminal session or an empty batch comes back
        unchanged with no facts, events or rolls.

        Args:
            state: Current session snapshot.
            actions: Ordered batch of player actions.

        Returns:
            The TurnResult of the turn.

        Raises:
            InvalidGameStateError: If the snapshot points at an unknown room.
        """
        new_state = state.model_copy(deep=True)
        log = TurnLog(new_state)

        if new_state.is_game_over:
            logger.info(
                "Turn ignored on finished session",
                session_id=new_state.session_id,
                status=new_state.game_status.value,
            )
            return log.build()

        batch = coerce_actions(actions)
        if not batch:
            return log.build()

        logger.info(
            "Resolving turn",
            session_id=new_state.session_id,
            turn=new_state.turn_number + 1,
            actions=len(batch),
            room=new_state.current_room_id,
        )

        for action in batch:
            player = new_state.get_player(action.player_id)
            if player is None:
                logger.warning("Skipping action from unknown player", player_id=action.player_id)
                continue
            if not player.is_alive:
                logger.debug("Skipping action from fallen player", player_id=player.id)
                continue

            room = self.get_room(new_state.current_room_id)
            text = normalize(action.action_text)
            category = classify(text)
            logger.info("Action classified", player_id=player.id, category=category.value)
            self._handlers[category](player, text, room, log)

        new_state.turn_number += 1
        self._finish_turn(new_state, log)
        return log.build()

    def _finish_turn(self, state: GameSession, log: TurnLog) -> None:
        room = self.get_room(state.current_room_id)
        resolve_enemy_turn(state, room, self.roller, self.rules, log)
        check_combat_end(state, room, self.rules, log)
        check_defeat(state, log)
        check_victory(state, self.rules, log)

    # =========================================================================
    # Category handlers
    # =========================================================================

    def _resolve_absurd(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        log.event(EventType.ABSURD, "Acción físicamente imposible", target_id=player.id)
        log.fact(
            f'{player.name} intenta algo ridículo: "{text}". '
            "REGLA: Fracaso absoluto. Búrlate del jugador de forma cínica."
        )

    def _resolve_combat(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        state = log.state
        enemies = living_enemies(room, state, self.rules)
        if not enemies:
            log.fact(f"{player.name} lanza golpes al aire, no hay enemigos.")
            return

        target = enemies[0]
        dc = self.rules.attack_dc
        total = self.roller.roll(20) + player.attributes.strength
        hit = log.dice_roll(f"Ataque de {player.name}", total, dc)
        state.in_combat = True

        if not hit:
            log.fact(
                f"{player.name} intenta atacar a {target.name} pero FALLA "
                f"estrepitosamente ({total} vs DC {dc})."
            )
            return

        damage = max(
            self.rules.min_damage,
            player.attributes.strength // 2 + self.roller.roll(self.rules.damage_die),
        )
        remaining = state.damage_entity(target, damage, self.rules.default_entity_hp)
        log.event(
            EventType.DAMAGE,
            f"{player.name} hiere a {target.name}",
            target_id=target.id,
            value=damage,
        )
        log.fact(
            f"{player.name} ataca a {target.name} y ACIERTA ({total} vs DC {dc}). "
            f"Daño: {damage}. HP: {max(remaining, 0)}."
        )

        if remaining <= 0:
            self._kill_entity(target, room, log)

    def _kill_entity(self, entity: RoomEntity, room: Room, log: TurnLog) -> None:
        log.set_flag(entity.death_flag)
        if not entity.drops_flag:
            log.fact(f"{entity.name} ha muerto.")
            return

        log.set_flag(entity.drops_flag)
        dropped = next((item for item in room.items if item.required_flag == entity.drops_flag), None)
        if dropped is not None:
            log.fact(f"{entity.name} ha muerto y ha soltado: {dropped.name}.")
        else:
            log.fact(f"{entity.name} ha muerto y algo cae al suelo.")

    def _resolve_social(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        state = log.state
        target = next(
            (
                entity
                for entity in visible_entities(room, state.world_state)
                if entity.persuadable and not state.has_flag(entity.death_flag)
            ),
            None,
        )
        if target is None:
            log.fact(f"{player.name} habla solo, no hay nadie que escuche.")
            return

        intimidating = contains_keyword(text, INTIMIDATE_KEYWORDS)
        if intimidating:
            dc = self.rules.intimidate_dc
        elif contains_keyword(text, CONVINCE_KEYWORDS):
            dc = self.rules.convince_dc
        else:
            dc = self.rules.talk_dc

        total = self.roller.roll(20) + player.attributes.presence
        success = log.dice_roll(f"Elocuencia de {player.name}", total, dc)

        if not success:
            state.in_combat = True
            log.fact(
                f"{player.name} intenta hablar, pero {target.name} se ríe de su debilidad "
                f"({total} vs DC {dc}). {target.name} se pone agresivo."
            )
            return

        if intimidating:
            log.set_flag(target.intimidated_flag)
            log.fact(f"{player.name} intimida a {target.name}, que retrocede asustado ({total} vs DC {dc}).")
        else:
            log.set_flag(target.persuaded_flag)
            log.fact(
                f"{player.name} convence a {target.name} de que hay un error ({total} vs DC {dc}). "
                f"{target.name} cede."
            )

    def _resolve_movement(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        state = log.state
        room_exit = self._match_exit(room, text)
        if room_exit is None:
            log.fact(f"{player.name} busca una salida pero no sabe a dónde ir.")
            return

        if not exit_is_open(room_exit, state.world_state):
            log.fact(f"{player.name} intenta ir hacia {room_exit.direction}, pero no puede.")
            log.fact(room_exit.locked_message)
            return

        state.current_room_id = room_exit.target_room_id
        log.event(
            EventType.ROOM_CHANGE,
            f"Moviendo a {room_exit.target_room_id}",
            target_id=player.id,
            value=room_exit.target_room_id,
        )
        log.fact(f"{player.name} se mueve hacia {room_exit.direction}.")
        logger.info("Party moved", source=room.id, target=room_exit.target_room_id)

    @staticmethod
    def _match_exit(room: Room, text: str) -> RoomExit | None:
        for room_exit in room.exits:
            if contains_keyword(text, room_exit.tokens):
                return room_exit
        if room.exits and contains_keyword(text, EXIT_TOKENS):
            return room.exits[0]
        return None

    def _resolve_pickup(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        state = log.state
        item = next(
            (
                candidate
                for candidate in visible_items(room, state.world_state)
                if contains_keyword(text, (candidate.name.lower(), candidate.id.lower()))
            ),
            None,
        )
        if item is None:
            log.fact(f"{player.name} intenta agarrar algo que no está o es inalcanzable.")
            return
        if not item.is_takeable:
            log.fact(f"{player.name} forcejea con {item.name}, pero no se puede llevar.")
            return

        player.inventory.append(item.name)
        log.set_flag(item.taken_flag)
        log.set_flag(item.grants_flag)
        log.event(
            EventType.ITEM_GAIN,
            f"Obtuvo {item.name}",
            target_id=player.id,
            value=item.name,
        )
        log.fact(f"{player.name} recoge: {item.name}.")

    def _resolve_observation(self, player: Player, text: str, room: Room, log: TurnLog) -> None:
        log.fact(
            f'{player.name} observa: "{text}". Sin impacto mecánico. '
            f"Describe la atmósfera de {room.name} de forma cínica."
        )


def process_turn(
    state: GameSession,
    actions: Iterable[PlayerAction | Mapping[str, Any]],
    *,
    roller: Roller | None = None,
) -> TurnResult:
    """Resolve one turn with the bundled rooms and configured rules."""
    return TurnResolver(roller=roller).resolve(state, actions)


__all__ = [
    "TurnResolver",
    "coerce_actions",
    "process_turn",
    "INTIMIDATE_KEYWORDS",
    "CONVINCE_KEYWORDS",
]
