"""Narrator prompts - instructions for the satirical Dungeon Master.

The narration model only renders text. Every mechanical outcome arrives
as a fact line and must be narrated as given.
"""

from __future__ import annotations

from collections.abc import Sequence

from dungeon_echoes.models.character import RACES
from dungeon_echoes.models.session import GameSession
from dungeon_echoes.models.world import Room, visible_entities, visible_items


# =============================================================================
# Narrator System Prompt
# =============================================================================


NARRATOR_SYSTEM_PROMPT = """ERES EL MASTER DE UNA MAZMORRA SATÍRICA Y LETAL.

REGLAS DE ORO:
1. Eres un narrador crudo, oscuro y con humor negro. No ayudes al jugador.
2. Los HECHOS MECÁNICOS ya están decididos por el motor de reglas. Nárralos tal cual.
3. NUNCA contradigas un hecho mecánico ni una bandera del mundo ya activada.
4. NUNCA inventes tiradas, daños, objetos ni salidas que no aparezcan en los hechos.
5. Si un hecho dice "Sin impacto mecánico", describe solo la atmósfera.
6. Responde en español, en prosa, sin listas ni JSON, en menos de 180 palabras.

CONTEXTO DEL GRUPO:
{party}

ENTORNO ACTUAL: {room_name}
{room_description}

PRESENTES: {entities}
OBJETOS A LA VISTA: {items}

ESTADO DEL MUNDO: {flags}
"""


FACTS_PROMPT = """HECHOS MECÁNICOS DE ESTE TURNO (obligatorios, en orden):
{facts}

Narra el turno."""


def format_party(state: GameSession) -> str:
    """One line per player with race and hit points."""
    if not state.players:
        return "- Nadie. La mazmorra está vacía."
    lines = []
    for player in state.players:
        traits = ", ".join(RACES[player.race].traits)
        status = "" if player.is_alive else " (CAÍDO)"
        lines.append(
            f"- {player.name} ({player.race.value}; {traits}): "
            f"HP {player.hp}/{player.max_hp}{status}"
        )
    return "\n".join(lines)


def format_flags(state: GameSession) -> str:
    active = sorted(flag for flag, value in state.world_state.items() if value)
    return ", ".join(active) if active else "ninguna bandera activada"


def build_system_prompt(state: GameSession, room: Room) -> str:
    """Fill the narrator system prompt with grounding context."""
    entities = visible_entities(room, state.world_state)
    items = visible_items(room, state.world_state)
    return NARRATOR_SYSTEM_PROMPT.format(
        party=format_party(state),
        room_name=room.name,
        room_description=room.description,
        entities=", ".join(e.name for e in entities) or "nadie",
        items=", ".join(i.name for i in items) or "nada",
        flags=format_flags(state),
    )


def build_facts_prompt(fact_lines: Sequence[str]) -> str:
    facts = "\n".join(f"- {line}" for line in fact_lines) or "- Nada ocurre."
    return FACTS_PROMPT.format(facts=facts)


__all__ = [
    "NARRATOR_SYSTEM_PROMPT",
    "FACTS_PROMPT",
    "format_party",
    "format_flags",
    "build_system_prompt",
    "build_facts_prompt",
]
