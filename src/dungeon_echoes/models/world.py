"""Static room graph templates.

Rooms, entities, items and exits are immutable templates shared by every
session. Anything that changes during play (entity hit points, flags) lives
in the session snapshot, never here.

Visibility is a pure function of a template and the session's world
flags: an element with ``required_flag`` only shows once that flag is set,
and an element with ``missing_flag`` disappears once that flag is set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from dungeon_echoes.core.constants import death_flag, taken_flag
from dungeon_echoes.models.enums import Race


class _Gated(Protocol):
    required_flag: str | None
    missing_flag: str | None


class _Template(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class RoomEntity(_Template):
    """A creature or fixture present in a room.

    Attributes:
        id: Identifier, also the stem of the entity's death flag.
        name: Display name.
        description: Narrative description.
        race: Optional race, used as narration flavour.
        hp: Starting hit points copied into each session.
        max_hp: Maximum hit points.
        damage: Size of the die the entity hits with.
        is_enemy: Whether the entity fights back.
        persuadable: Whether talk and intimidation target this entity.
        required_flag: Entity only shown once this flag is set.
        missing_flag: Entity hidden once this flag is set.
        drops_flag: Flag set when the entity dies (e.g. a dropped key).
        intimidated_flag: Flag set by a successful intimidation.
        persuaded_flag: Flag set by a successful talk or convince attempt.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    race: Race | None = None
    hp: int | None = None
    max_hp: int | None = None
    damage: int | None = Field(default=None, ge=1)
    is_enemy: bool = False
    persuadable: bool = False
    required_flag: str | None = None
    missing_flag: str | None = None
    drops_flag: str | None = None
    intimidated_flag: str | None = None
    persuaded_flag: str | None = None

    @property
    def death_flag(self) -> str:
        return death_flag(self.id)


class RoomItem(_Template):
    """An object that may be picked up.

    Attributes:
        id: Identifier, also the stem of the item's taken flag.
        name: Display name appended to inventories.
        description: Narrative description.
        is_takeable: Whether pickup attempts can succeed.
        required_flag: Item only shown once this flag is set.
        missing_flag: Item hidden once this flag is set.
        grants_flag: Extra flag set on pickup (e.g. a key opening a door).
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    is_takeable: bool = True
    required_flag: str | None = None
    missing_flag: str | None = None
    grants_flag: str | None = None

    @property
    def taken_flag(self) -> str:
        return taken_flag(self.id)


class RoomExit(_Template):
    """A directed edge of the room graph."""

    direction: str = Field(min_length=1)
    target_room_id: str = Field(min_length=1)
    condition: str | None = None
    locked_message: str = "El camino está bloqueado."
    aliases: tuple[str, ...] = ()

    @property
    def tokens(self) -> tuple[str, ...]:
        """Lowercased words that select this exit."""
        return (self.direction.lower(), *(alias.lower() for alias in self.aliases))


class Room(_Template):
    """A room template keyed by id."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    goal: str | None = None
    entities: tuple[RoomEntity, ...] = ()
    items: tuple[RoomItem, ...] = ()
    exits: tuple[RoomExit, ...] = ()

    def get_entity(self, entity_id: str) -> RoomEntity | None:
        return next((e for e in self.entities if e.id == entity_id), None)


# =============================================================================
# Visibility
# =============================================================================


def is_visible(template: _Gated, world_state: Mapping[str, bool]) -> bool:
    """Evaluate an element's visibility predicates against world flags."""
    if template.required_flag and not world_state.get(template.required_flag, False):
        return False
    if template.missing_flag and world_state.get(template.missing_flag, False):
        return False
    return True


def visible_entities(room: Room, world_state: Mapping[str, bool]) -> list[RoomEntity]:
    return [entity for entity in room.entities if is_visible(entity, world_state)]


def visible_items(room: Room, world_state: Mapping[str, bool]) -> list[RoomItem]:
    return [item for item in room.items if is_visible(item, world_state)]


def exit_is_open(room_exit: RoomExit, world_state: Mapping[str, bool]) -> bool:
    """Whether the exit's traversal condition (if any) is satisfied."""
    return not room_exit.condition or world_state.get(room_exit.condition, False)


__all__ = [
    "RoomEntity",
    "RoomItem",
    "RoomExit",
    "Room",
    "is_visible",
    "visible_entities",
    "visible_items",
    "exit_is_open",
]
