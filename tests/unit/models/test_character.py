"""Tests for characters, races and character creation."""

from __future__ import annotations

import pytest

from dungeon_echoes.core.exceptions import ValidationError
from dungeon_echoes.models.character import RACES, Attributes, Player, create_player_character
from dungeon_echoes.models.enums import Attribute, Race


class TestRaces:
    """Tests for race reference data."""

    def test_all_races_defined(self) -> None:
        assert set(RACES) == set(Race)

    @pytest.mark.parametrize(
        ("race", "expected"),
        [
            (Race.HUMANO, (5, 5, 5, 5)),
            (Race.ELFO, (3, 7, 7, 3)),
            (Race.ENANO, (8, 3, 2, 7)),
            (Race.ORCO, (9, 4, 1, 6)),
        ],
    )
    def test_base_attributes(self, race: Race, expected: tuple[int, ...]) -> None:
        base = RACES[race].base_attributes

        assert (base.strength, base.agility, base.intellect, base.presence) == expected

    def test_profiles_are_frozen(self) -> None:
        with pytest.raises(Exception):
            RACES[Race.ORCO].description = "Otra cosa"  # type: ignore[misc]


class TestPlayer:
    """Tests for the Player model."""

    def test_hp_clamped_on_creation(self) -> None:
        player = Player(id="x", name="X", hp=150, max_hp=100)

        assert player.hp == 100

    def test_apply_damage(self) -> None:
        player = Player(id="x", name="X")

        assert player.apply_damage(30) == 30
        assert player.hp == 70
        assert player.is_alive

    def test_damage_floors_at_zero(self) -> None:
        player = Player(id="x", name="X", hp=5)

        assert player.apply_damage(12) == 5
        assert player.hp == 0
        assert not player.is_alive

    def test_negative_damage_ignored(self) -> None:
        player = Player(id="x", name="X")

        assert player.apply_damage(-3) == 0
        assert player.hp == 100

    def test_healing_capped(self) -> None:
        player = Player(id="x", name="X", hp=90)

        assert player.apply_healing(25) == 10
        assert player.hp == 100

    def test_attribute_lookup(self) -> None:
        attributes = Attributes(strength=9, presence=2)

        assert attributes.get(Attribute.STRENGTH) == 9
        assert attributes.get(Attribute.PRESENCE) == 2
        assert attributes.total == 9 + 5 + 5 + 2


class TestCreatePlayerCharacter:
    """Tests for character creation."""

    def test_bonus_added_to_race_base(self) -> None:
        hero = create_player_character("Grom", "Orco", bonus={"strength": 5})

        assert hero.race == Race.ORCO
        assert hero.attributes.strength == 14
        assert hero.attributes.total == 20 + 5
        assert hero.hp == hero.max_hp == 100
        assert hero.inventory == []

    def test_split_bonus(self) -> None:
        hero = create_player_character(
            "Thrain", Race.ENANO, bonus={"agility": 2, "intellect": 3}, player_id="d1"
        )

        assert hero.id == "d1"
        assert hero.attributes.agility == 5
        assert hero.attributes.intellect == 5

    def test_generated_ids_differ(self) -> None:
        a = create_player_character("A", bonus={"strength": 5})
        b = create_player_character("B", bonus={"strength": 5})

        assert a.id and b.id
        assert a.id != b.id

    def test_name_stripped(self) -> None:
        assert create_player_character("  Aria ", bonus={"presence": 5}).name == "Aria"

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"name": " ", "bonus": {"strength": 5}}, "name"),
            ({"name": "X", "race": "Goblin", "bonus": {"strength": 5}}, "race"),
            ({"name": "X", "bonus": {"luck": 5}}, "bonus"),
            ({"name": "X", "bonus": {"strength": 7, "agility": -2}}, "bonus"),
            ({"name": "X", "bonus": {"strength": 4}}, "bonus"),
            ({"name": "X", "bonus": {"strength": 6}}, "bonus"),
            ({"name": "X"}, "bonus"),
        ],
    )
    def test_invalid_input(self, kwargs: dict, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            create_player_character(**kwargs)

        assert exc_info.value.details["field_name"] == field
