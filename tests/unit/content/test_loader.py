"""Tests for the room loader and bundled content."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dungeon_echoes.content import ROOM_DEFINITIONS, get_default_rooms, load_rooms, load_rooms_file
from dungeon_echoes.core.exceptions import ContentError


class TestLoadRooms:
    """Tests for building rooms from raw tables."""

    def test_defaults_for_missing_fields(self) -> None:
        rooms = load_rooms({"sotano": {}})

        room = rooms["sotano"]
        assert room.id == "sotano"
        assert room.name == "sotano"
        assert room.description == ""
        assert room.entities == room.items == room.exits == ()

    def test_invalid_children_skipped(self) -> None:
        """Test that a broken entity, item or exit does not sink the room."""
        rooms = load_rooms(
            {
                "celda": {
                    "name": "Celda",
                    "description": "Fría.",
                    "entities": [{"id": "rata"}, {"name": "sin id"}, "basura"],
                    "items": [{"id": "hueso", "is_takeable": "quizás"}],
                    "exits": [{"direction": "Norte"}, {"direction": "Sur", "target_room_id": "celda"}],
                },
            }
        )

        room = rooms["celda"]
        assert [e.id for e in room.entities] == ["rata"]
        assert room.entities[0].name == "rata"
        assert room.items == ()
        assert [x.direction for x in room.exits] == ["Sur"]

    def test_malformed_entries_skipped(self) -> None:
        rooms = load_rooms({"ok": {"name": "Ok"}, "bad": "not a room"})

        assert list(rooms) == ["ok"]

    def test_empty_table(self) -> None:
        with pytest.raises(ContentError):
            load_rooms({})

    def test_unknown_exit_target_kept(self) -> None:
        """Test that dangling exits load and only warn."""
        rooms = load_rooms({"a": {"exits": [{"direction": "Norte", "target_room_id": "b"}]}})

        assert rooms["a"].exits[0].target_room_id == "b"


class TestLoadRoomsFile:
    """Tests for JSON room files."""

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rooms.json"
        path.write_text(json.dumps(ROOM_DEFINITIONS), encoding="utf-8")

        rooms = load_rooms_file(path)

        assert set(rooms) == {"celda", "pasillo", "salida"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ContentError):
            load_rooms_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "rooms.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ContentError):
            load_rooms_file(path)

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "rooms.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ContentError):
            load_rooms_file(path)


class TestBundledRooms:
    """Tests for the bundled escape scenario."""

    def test_cached(self) -> None:
        assert get_default_rooms() is get_default_rooms()

    def test_graph(self) -> None:
        rooms = get_default_rooms()

        assert [(x.direction, x.target_room_id) for x in rooms["celda"].exits] == [("Norte", "pasillo")]
        assert [x.target_room_id for x in rooms["pasillo"].exits] == ["salida", "celda"]
        assert rooms["salida"].exits == ()

    def test_guard(self) -> None:
        guard = get_default_rooms()["celda"].get_entity("guardia")

        assert guard.is_enemy
        assert guard.hp == 20
        assert guard.drops_flag == "llave_caida"
        assert guard.death_flag == "guardia_muerto"

    def test_exits_point_at_known_rooms(self) -> None:
        rooms = get_default_rooms()

        for room in rooms.values():
            for room_exit in room.exits:
                assert room_exit.target_room_id in rooms
