"""Loader turning raw room tables into frozen Room templates.

The loader is forgiving: a room missing its id, name or description gets
a default, and a nested entity, item or exit that cannot be built is
skipped with a warning. Only a table that yields no room at all is an
error.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dungeon_echoes.core.exceptions import ContentError
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.models.world import Room, RoomEntity, RoomExit, RoomItem


logger = get_logger(__name__)

_T = TypeVar("_T", bound=BaseModel)


def _build_children(
    model: type[_T],
    raw_children: Any,
    *,
    room_id: str,
    kind: str,
) -> tuple[_T, ...]:
    if raw_children is None:
        return ()
    if not isinstance(raw_children, list | tuple):
        logger.warning("Ignoring non-list content", room_id=room_id, kind=kind)
        return ()

    built: list[_T] = []
    for index, raw in enumerate(raw_children):
        if not isinstance(raw, Mapping):
            logger.warning("Skipping malformed content", room_id=room_id, kind=kind, index=index)
            continue
        data = dict(raw)
        if kind != "exit" and data.get("id") and not data.get("name"):
            data["name"] = data["id"]
        try:
            built.append(model.model_validate(data))
        except PydanticValidationError as exc:
            logger.warning(
                "Skipping invalid content",
                room_id=room_id,
                kind=kind,
                index=index,
                errors=exc.error_count(),
            )
    return tuple(built)


def build_room(key: str, raw: Mapping[str, Any]) -> Room | None:
    """Build one room, defaulting missing fields.

    Args:
        key: Table key, used as id when the entry has none.
        raw: Raw room mapping.

    Returns:
        The Room, or None when the entry cannot be used at all.
    """
    room_id = str(raw.get("id") or key or "").strip()
    if not room_id:
        logger.warning("Skipping room without id")
        return None

    name = raw.get("name") or room_id
    description = raw.get("description") or ""
    if not raw.get("name") or not raw.get("description"):
        logger.warning("Room missing name or description, using defaults", room_id=room_id)

    try:
        return Room(
            id=room_id,
            name=str(name),
            description=str(description),
            goal=raw.get("goal"),
            entities=_build_children(RoomEntity, raw.get("entities"), room_id=room_id, kind="entity"),
            items=_build_children(RoomItem, raw.get("items"), room_id=room_id, kind="item"),
            exits=_build_children(RoomExit, raw.get("exits"), room_id=room_id, kind="exit"),
        )
    except PydanticValidationError as exc:
        logger.warning("Skipping invalid room", room_id=room_id, errors=exc.error_count())
        return None


def load_rooms(raw_table: Mapping[str, Any]) -> dict[str, Room]:
    """Build a room table from raw definitions.

    Args:
        raw_table: Mapping of room key to raw room mapping.

    Returns:
        Rooms keyed by id.

    Raises:
        ContentError: If no usable room is found.
    """
    rooms: dict[str, Room] = {}
    for key, raw in raw_table.items():
        if not isinstance(raw, Mapping):
            logger.warning("Skipping malformed room entry", key=key)
            continue
        room = build_room(str(key), raw)
        if room is not None:
            rooms[room.id] = room

    if not rooms:
        raise ContentError("Room table contains no usable rooms")

    for room in rooms.values():
        for room_exit in room.exits:
            if room_exit.target_room_id not in rooms:
                logger.warning(
                    "Exit points at unknown room",
                    room_id=room.id,
                    target=room_exit.target_room_id,
                )

    logger.info("Rooms loaded", count=len(rooms))
    return rooms


def load_rooms_file(path: str | Path) -> dict[str, Room]:
    """Load a room table from a JSON file.

    Raises:
        ContentError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        raw_table = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ContentError(f"Cannot read room file: {exc}", details={"path": str(path)}) from exc
    if not isinstance(raw_table, Mapping):
        raise ContentError("Room file must contain a JSON object", details={"path": str(path)})
    return load_rooms(raw_table)


@lru_cache(maxsize=1)
def get_default_rooms() -> dict[str, Room]:
    """The bundled room table, built once."""
    from dungeon_echoes.content.rooms import ROOM_DEFINITIONS

    return load_rooms(ROOM_DEFINITIONS)


__all__ = [
    "build_room",
    "load_rooms",
    "load_rooms_file",
    "get_default_rooms",
]
