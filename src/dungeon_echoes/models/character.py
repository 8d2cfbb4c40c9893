"""Pydantic V2 schemas for player characters and races.

Race profiles are reference data: base attributes seed character
creation, while description, traits and prejudices are flavour handed to
the narration layer.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dungeon_echoes.core.constants import CREATION_POINT_BUDGET, DEFAULT_MAX_HP
from dungeon_echoes.core.exceptions import ValidationError
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.models.enums import Attribute, Race


logger = get_logger(__name__)


class Attributes(BaseModel):
    """The four integer stats of a character."""

    model_config = ConfigDict(extra="forbid")

    strength: int = Field(default=5, ge=0, description="Raw physical power")
    agility: int = Field(default=5, ge=0, description="Speed and reflexes")
    intellect: int = Field(default=5, ge=0, description="Wits and learning")
    presence: int = Field(default=5, ge=0, description="Force of personality")

    def get(self, attribute: Attribute) -> int:
        return getattr(self, attribute.value)

    @property
    def total(self) -> int:
        return self.strength + self.agility + self.intellect + self.presence


class RaceProfile(BaseModel):
    """Static description of a playable race."""

    model_config = ConfigDict(frozen=True)

    name: Race
    description: str
    traits: tuple[str, ...] = ()
    base_attributes: Attributes
    prejudices: dict[str, str] = Field(default_factory=dict)


RACES: dict[Race, RaceProfile] = {
    Race.HUMANO: RaceProfile(
        name=Race.HUMANO,
        description=(
            "Equilibrados y ambiciosos. Poseen una aptitud natural para la magia "
            "pero son vulnerables a la manipulación mental."
        ),
        traits=("Aptitud Mágica", "Vulnerable Mentalmente"),
        base_attributes=Attributes(strength=5, agility=5, intellect=5, presence=5),
        prejudices={
            "Elfo": "Fascinación por su nobleza",
            "Enano": "Tolerancia",
            "Orco": "Odio profundo",
            "Goblin": "Odio profundo",
        },
    ),
    Race.ELFO: RaceProfile(
        name=Race.ELFO,
        description=(
            "Seres gráciles y casi inmortales. Valoran la sabiduría por encima de "
            "todo; la estupidez es su mayor tabú."
        ),
        traits=("Resistencia Mágica", "Gracia Natural", "Prestigio Frágil"),
        base_attributes=Attributes(strength=3, agility=7, intellect=7, presence=3),
        prejudices={
            "Humano": "Tolerancia condescendiente",
            "Enano": "Insoportables",
            "Orco": "Aversión total",
            "Demonio": "Aborrecimiento",
        },
    ),
    Race.ENANO: RaceProfile(
        name=Race.ENANO,
        description=(
            "Fuertes, astutos y amantes de la buena cerveza. Incapaces de usar "
            "magia, pero extremadamente resistentes a ella."
        ),
        traits=("Inmune al Control Mental", "Resistencia Mágica Superior", "Almas Libres"),
        base_attributes=Attributes(strength=8, agility=3, intellect=2, presence=7),
        prejudices={
            "Humano": "Tolerancia comercial",
            "Elfo": "Prepotentes de orejas largas",
            "Orco": "Enemigos ancestrales",
        },
    ),
    Race.ORCO: RaceProfile(
        name=Race.ORCO,
        description=(
            "Parias impulsivos buscadores de reconocimiento. Poseen gran potencial "
            "pero caen fácilmente ante sus instintos."
        ),
        traits=("Impulsividad Salvaje", "Gran Potencial Mágico", "Debilidad Mental"),
        base_attributes=Attributes(strength=9, agility=4, intellect=1, presence=6),
        prejudices={
            "Humano": "Envidia",
            "Elfo": "Detestables",
            "Enano": "Tolerancia",
            "Orco": "Desprecio por los intelectuales",
        },
    ),
}


class Player(BaseModel):
    """A player character taking part in a session.

    Hit points are kept inside ``[0, max_hp]``; the turn resolver only
    touches them through :meth:`apply_damage` and :meth:`apply_healing`.
    The inventory is an ordered list of item names and may hold duplicates.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    race: Race = Race.HUMANO
    attributes: Attributes = Field(default_factory=Attributes)
    hp: int = DEFAULT_MAX_HP
    max_hp: int = Field(default=DEFAULT_MAX_HP, ge=1)
    inventory: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def clamp_hp(self) -> "Player":
        self.hp = max(0, min(self.hp, self.max_hp))
        return self

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def apply_damage(self, amount: int) -> int:
        """Apply damage and return the hit points actually lost."""
        if amount <= 0:
            return 0
        before = self.hp
        self.hp = max(0, self.hp - amount)
        return before - self.hp

    def apply_healing(self, amount: int) -> int:
        """Apply healing and return the hit points actually restored."""
        if amount <= 0:
            return 0
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before


def create_player_character(
    name: str,
    race: Race | str = Race.HUMANO,
    *,
    bonus: Mapping[str, int] | None = None,
    player_id: str | None = None,
) -> Player:
    """Create a new character from a race and a point distribution.

    The race's base attributes are raised by ``bonus``, which must spend
    the whole creation budget and may not lower any attribute.

    Args:
        name: Character name.
        race: Race enum member or its display name.
        bonus: Points added per attribute name (strength, agility...).
        player_id: Identifier to use; a random short id when omitted.

    Returns:
        A Player at full health with an empty inventory.

    Raises:
        ValidationError: On an empty name, unknown race or invalid bonus.

    Example:
        >>> hero = create_player_character("Grom", "Orco", bonus={"strength": 5})
        >>> hero.attributes.strength
        14
    """
    if not name or not name.strip():
        raise ValidationError("Character name cannot be empty", field_name="name")

    try:
        race = Race(race)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown race: {race}",
            field_name="race",
            invalid_value=race,
        ) from exc

    bonus = dict(bonus or {})
    valid_names = {attribute.value for attribute in Attribute}
    unknown = set(bonus) - valid_names
    if unknown:
        raise ValidationError(
            f"Unknown attributes in bonus: {sorted(unknown)}",
            field_name="bonus",
            invalid_value=sorted(unknown),
        )
    if any(points < 0 for points in bonus.values()):
        raise ValidationError(
            "Attribute bonuses cannot be negative",
            field_name="bonus",
            invalid_value=bonus,
        )
    spent = sum(bonus.values())
    if spent != CREATION_POINT_BUDGET:
        raise ValidationError(
            f"Exactly {CREATION_POINT_BUDGET} points must be distributed, got {spent}",
            field_name="bonus",
            invalid_value=spent,
        )

    base = RACES[race].base_attributes.model_dump()
    attributes = Attributes(**{key: value + bonus.get(key, 0) for key, value in base.items()})

    player = Player(
        id=player_id or secrets.token_hex(3),
        name=name.strip(),
        race=race,
        attributes=attributes,
        hp=DEFAULT_MAX_HP,
        max_hp=DEFAULT_MAX_HP,
    )
    logger.info("Character created", player_id=player.id, race=race.value)
    return player


__all__ = [
    "Attributes",
    "RaceProfile",
    "RACES",
    "Player",
    "create_player_character",
]
