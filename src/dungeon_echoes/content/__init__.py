"""Static room content and its loader."""

from __future__ import annotations

from dungeon_echoes.content.loader import (
    build_room,
    get_default_rooms,
    load_rooms,
    load_rooms_file,
)
from dungeon_echoes.content.rooms import ROOM_DEFINITIONS


__all__ = [
    "ROOM_DEFINITIONS",
    "build_room",
    "load_rooms",
    "load_rooms_file",
    "get_default_rooms",
]
