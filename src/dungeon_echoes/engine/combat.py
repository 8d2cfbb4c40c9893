"""Enemy retaliation and end-of-turn checks.

These functions run after every player action of a turn has been
resolved. Each check is idempotent: running it again on the state it
produced changes nothing, and none of them touch a terminal session.
"""

from __future__ import annotations

from dungeon_echoes.core.config import RulesSettings
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.engine.dice import Roller, choose
from dungeon_echoes.engine.events import TurnLog
from dungeon_echoes.models.enums import EventType, GameStatus
from dungeon_echoes.models.session import GameSession
from dungeon_echoes.models.world import Room, RoomEntity, is_visible


logger = get_logger(__name__)


def living_enemies(room: Room, state: GameSession, rules: RulesSettings) -> list[RoomEntity]:
    """Visible enemies of a room with no death flag and positive session hp."""
    return [
        entity
        for entity in room.entities
        if entity.is_enemy
        and is_visible(entity, state.world_state)
        and not state.has_flag(entity.death_flag)
        and state.entity_hit_points(entity, rules.default_entity_hp) > 0
    ]


def resolve_enemy_turn(
    state: GameSession,
    room: Room,
    roller: Roller,
    rules: RulesSettings,
    log: TurnLog,
) -> None:
    """Let every living enemy of the room strike a random living player.

    Runs only while the session is in combat and still playing. A natural
    d20 at or above the hit threshold deals ``1d(enemy damage)``.
    """
    if not state.in_combat or state.game_status.is_terminal:
        return

    for enemy in living_enemies(room, state, rules):
        targets = state.living_players()
        if not targets:
            break

        target = choose(roller, targets)
        attack = roller.roll(20)
        if attack < rules.enemy_hit_threshold:
            log.fact(f"{enemy.name} lanza un golpe torpe que {target.name} esquiva.")
            logger.info("Enemy missed", enemy=enemy.id, target=target.id, roll=attack)
            continue

        damage = target.apply_damage(roller.roll(enemy.damage or rules.default_enemy_damage))
        log.fact(f"{enemy.name} ataca a {target.name} y DAÑA ({damage} de daño). HP: {target.hp}.")
        log.event(
            EventType.DAMAGE,
            f"{enemy.name} hiere a {target.name}",
            target_id=target.id,
            value=damage,
        )
        logger.info("Enemy hit", enemy=enemy.id, target=target.id, damage=damage, hp=target.hp)

        if not target.is_alive:
            log.fact(f"¡{target.name} ha caído ante la fuerza de {enemy.name}!")

    check_defeat(state, log)


def check_defeat(state: GameSession, log: TurnLog | None = None) -> bool:
    """End the session in death once every player is down.

    Returns:
        True if this call changed the status.
    """
    if state.game_status.is_terminal or not state.all_players_down():
        return False

    state.game_status = GameStatus.DEATH
    state.in_combat = False
    if log is not None:
        log.fact("Todo el grupo ha caído. La mazmorra se cobra otra expedición.")
        log.event(EventType.INFO, "Fin de la partida: muerte", value=GameStatus.DEATH.value)
    logger.info("Session lost", session_id=state.session_id)
    return True


def check_combat_end(
    state: GameSession,
    room: Room,
    rules: RulesSettings,
    log: TurnLog | None = None,
) -> bool:
    """Clear the combat flag when no living enemy remains in the room.

    Returns:
        True if this call ended combat.
    """
    if not state.in_combat or living_enemies(room, state, rules):
        return False

    state.in_combat = False
    if log is not None:
        log.fact("El combate ha terminado. No quedan enemigos en pie.")
        log.event(EventType.INFO, "Fin del combate")
    logger.info("Combat ended", room=room.id)
    return True


def check_victory(
    state: GameSession,
    rules: RulesSettings,
    log: TurnLog | None = None,
) -> bool:
    """End the session in victory once the party stands in the victory room.

    Returns:
        True if this call changed the status.
    """
    if state.game_status.is_terminal or state.current_room_id != rules.victory_room_id:
        return False

    state.game_status = GameStatus.VICTORY
    state.in_combat = False
    if log is not None:
        log.fact("¡El grupo ha escapado de la mazmorra!")
        log.event(EventType.INFO, "Fin de la partida: victoria", value=GameStatus.VICTORY.value)
    logger.info("Session won", session_id=state.session_id)
    return True


__all__ = [
    "living_enemies",
    "resolve_enemy_turn",
    "check_defeat",
    "check_combat_end",
    "check_victory",
]
