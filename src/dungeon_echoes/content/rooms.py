"""Bundled room definitions for "Ecos de la Mazmorra".

A raw keyed table in the shape accepted by :func:`load_rooms`. The party
wakes in a cell watched by an orc guard, crosses the hallway, and escapes
through the main gate into the victory room.
"""

from __future__ import annotations

from typing import Any


ROOM_DEFINITIONS: dict[str, dict[str, Any]] = {
    "celda": {
        "id": "celda",
        "name": "La Celda de los Lamentos",
        "description": (
            "Te despiertas en una celda húmeda. El olor a moho es insoportable. "
            "Un candelabro de hierro cuelga peligrosamente del techo. A través de "
            "los barrotes, ves a un guardia que parece estar quedándose dormido."
        ),
        "goal": "Escapar de la celda (abrir la puerta o conseguir la llave).",
        "entities": [
            {
                "id": "guardia",
                "name": "Guardia Orco",
                "description": (
                    "Un orco corpulento con una armadura de cuero remendada y una "
                    "espada corta en el cinto. Apesta a grog barato."
                ),
                "race": "Orco",
                "hp": 20,
                "max_hp": 20,
                "damage": 6,
                "is_enemy": True,
                "persuadable": True,
                "missing_flag": "guardia_muerto",
                "drops_flag": "llave_caida",
                "intimidated_flag": "guardia_distraido",
                "persuaded_flag": "puerta_celda_abierta",
            },
            {
                "id": "cadaver_guardia",
                "name": "Cadáver del Guardia",
                "description": "El orco yace en un charco de grog y sangre. Ya no apesta menos.",
                "race": "Orco",
                "required_flag": "guardia_muerto",
            },
        ],
        "items": [
            {
                "id": "llave",
                "name": "Llave de la Celda",
                "description": "Una llave maestra de hierro, grasienta y pesada.",
                "required_flag": "llave_caida",
                "missing_flag": "llave_tomado",
                "grants_flag": "puerta_celda_abierta",
            },
            {
                "id": "candelabro",
                "name": "Candelabro de Hierro",
                "description": "Oxidado, pesado y sorprendentemente contundente.",
                "required_flag": "guardia_distraido",
                "missing_flag": "candelabro_tomado",
            },
        ],
        "exits": [
            {
                "direction": "Norte",
                "target_room_id": "pasillo",
                "condition": "puerta_celda_abierta",
                "locked_message": "La puerta de la celda está cerrada con un candado oxidado.",
                "aliases": ["north", "puerta"],
            },
        ],
    },
    "pasillo": {
        "id": "pasillo",
        "name": "Pasillo de la Vigilancia",
        "description": (
            "Un pasillo angosto custodiado por un pesado portón de hierro al final. "
            "Este es el portón principal de la cárcel."
        ),
        "goal": "Cruzar el portón principal para salir al exterior.",
        "entities": [],
        "items": [],
        "exits": [
            {
                "direction": "Exterior",
                "target_room_id": "salida",
                "condition": "llave_tomado",
                "locked_message": (
                    "El portón principal no cede. La cerradura espera una llave maestra."
                ),
                "aliases": ["porton", "portón", "outside"],
            },
            {
                "direction": "Sur",
                "target_room_id": "celda",
                "aliases": ["south", "celda"],
            },
        ],
    },
    "salida": {
        "id": "salida",
        "name": "La Salida de la Libertad",
        "description": (
            "El aire del exterior golpea tu rostro. Has escapado de la cárcel. "
            "Los Ecos de la Mazmorra se pierden a tus espaldas."
        ),
        "entities": [],
        "items": [],
        "exits": [],
    },
}


__all__ = ["ROOM_DEFINITIONS"]
