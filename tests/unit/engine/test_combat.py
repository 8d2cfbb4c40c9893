"""Tests for enemy retaliation and end-of-turn checks."""

from __future__ import annotations

from conftest import ScriptedRoller
from dungeon_echoes.engine.combat import (
    check_combat_end,
    check_defeat,
    check_victory,
    living_enemies,
    resolve_enemy_turn,
)
from dungeon_echoes.engine.events import TurnLog
from dungeon_echoes.models.enums import EventType, GameStatus
from dungeon_echoes.models.session import GameSession


class TestLivingEnemies:
    """Tests for enemy selection."""

    def test_guard_alive(self, session: GameSession, rooms, rules) -> None:
        enemies = living_enemies(rooms["celda"], session, rules)

        assert [e.id for e in enemies] == ["guardia"]

    def test_dead_guard_excluded(self, session: GameSession, rooms, rules) -> None:
        session.world_state["guardia_muerto"] = True

        assert living_enemies(rooms["celda"], session, rules) == []

    def test_zero_hp_excluded(self, session: GameSession, rooms, rules) -> None:
        """Test that hit points alone also rule an enemy out."""
        session.entity_hp["guardia"] = 0

        assert living_enemies(rooms["celda"], session, rules) == []


class TestResolveEnemyTurn:
    """Tests for enemy retaliation."""

    def test_no_combat_no_rolls(self, session: GameSession, rooms, rules) -> None:
        roller = ScriptedRoller()
        log = TurnLog(session)

        resolve_enemy_turn(session, rooms["celda"], roller, rules, log)

        assert roller.calls == []
        assert log.fact_lines == []

    def test_hit(self, session: GameSession, rooms, rules) -> None:
        """Test a natural 8 hits for 1d6."""
        session.in_combat = True
        roller = ScriptedRoller([8, 5])
        log = TurnLog(session)

        resolve_enemy_turn(session, rooms["celda"], roller, rules, log)

        assert session.players[0].hp == 95
        assert roller.calls == [20, 6]
        damage = log.events[0]
        assert (damage.type, damage.target_id, damage.value) == (EventType.DAMAGE, "p1", 5)
        assert log.fact_lines == ["Guardia Orco ataca a Grom y DAÑA (5 de daño). HP: 95."]

    def test_miss(self, session: GameSession, rooms, rules) -> None:
        session.in_combat = True
        roller = ScriptedRoller([7])
        log = TurnLog(session)

        resolve_enemy_turn(session, rooms["celda"], roller, rules, log)

        assert session.players[0].hp == 100
        assert log.events == []
        assert "esquiva" in log.fact_lines[0]

    def test_target_chosen_among_living(self, party_session: GameSession, rooms, rules) -> None:
        """Test that a random roll picks the target among living players."""
        party_session.in_combat = True
        roller = ScriptedRoller([2, 20, 6])
        log = TurnLog(party_session)

        resolve_enemy_turn(party_session, rooms["celda"], roller, rules, log)

        orc, elf = party_session.players
        assert orc.hp == 100
        assert elf.hp == 94
        assert roller.calls == [2, 20, 6]

    def test_fallen_players_not_targeted(self, party_session: GameSession, rooms, rules) -> None:
        """Test that a single living player is targeted without a choice roll."""
        party_session.in_combat = True
        party_session.players[0].hp = 0
        roller = ScriptedRoller([1])
        log = TurnLog(party_session)

        resolve_enemy_turn(party_session, rooms["celda"], roller, rules, log)

        assert roller.calls == [20]

    def test_lethal_hit_ends_game(self, session: GameSession, rooms, rules) -> None:
        session.in_combat = True
        session.players[0].hp = 4
        roller = ScriptedRoller([20, 6])
        log = TurnLog(session)

        resolve_enemy_turn(session, rooms["celda"], roller, rules, log)

        assert session.players[0].hp == 0
        assert session.game_status == GameStatus.DEATH
        assert session.in_combat is False
        assert "¡Grom ha caído ante la fuerza de Guardia Orco!" in log.fact_lines
        # damage event reports the hit points actually lost
        assert log.events[0].value == 4

    def test_terminal_session_ignored(self, session: GameSession, rooms, rules) -> None:
        session.in_combat = True
        session.game_status = GameStatus.VICTORY
        roller = ScriptedRoller()

        resolve_enemy_turn(session, rooms["celda"], roller, rules, TurnLog(session))

        assert roller.calls == []


class TestEndOfTurnChecks:
    """Tests for defeat, combat end and victory checks."""

    def test_defeat(self, session: GameSession) -> None:
        session.players[0].hp = 0
        log = TurnLog(session)

        assert check_defeat(session, log) is True
        assert session.game_status == GameStatus.DEATH
        assert log.events[-1].value == "death"
        assert check_defeat(session, log) is False

    def test_no_defeat_without_players(self, rooms, rules) -> None:
        """Test that an empty roster is not a defeat."""
        from dungeon_echoes.models.session import create_session

        empty = create_session([], rooms=rooms, rules=rules)

        assert check_defeat(empty) is False
        assert empty.game_status == GameStatus.PLAYING

    def test_combat_end(self, session: GameSession, rooms, rules) -> None:
        session.in_combat = True
        session.world_state["guardia_muerto"] = True
        log = TurnLog(session)

        assert check_combat_end(session, rooms["celda"], rules, log) is True
        assert session.in_combat is False
        assert check_combat_end(session, rooms["celda"], rules, log) is False
        assert len(log.fact_lines) == 1

    def test_combat_continues(self, session: GameSession, rooms, rules) -> None:
        session.in_combat = True

        assert check_combat_end(session, rooms["celda"], rules) is False
        assert session.in_combat is True

    def test_victory(self, session: GameSession, rules) -> None:
        session.current_room_id = "salida"
        log = TurnLog(session)

        assert check_victory(session, rules, log) is True
        assert session.game_status == GameStatus.VICTORY
        assert check_victory(session, rules, log) is False
        assert log.fact_lines == ["¡El grupo ha escapado de la mazmorra!"]

    def test_no_victory_after_death(self, session: GameSession, rules) -> None:
        session.current_room_id = "salida"
        session.game_status = GameStatus.DEATH

        assert check_victory(session, rules) is False
        assert session.game_status == GameStatus.DEATH
