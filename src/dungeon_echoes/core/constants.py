"""Application-wide constants for Dungeon Echoes."""

from __future__ import annotations

# =============================================================================
# World Flag Naming
# =============================================================================

DEATH_FLAG_SUFFIX = "_muerto"
"""Suffix of the flag set when an entity dies (``guardia_muerto``)."""

TAKEN_FLAG_SUFFIX = "_tomado"
"""Suffix of the flag set when an item is picked up (``llave_tomado``)."""


def death_flag(entity_id: str) -> str:
    """Name of the world flag marking an entity as dead."""
    return f"{entity_id}{DEATH_FLAG_SUFFIX}"


def taken_flag(item_id: str) -> str:
    """Name of the world flag marking an item as picked up."""
    return f"{item_id}{TAKEN_FLAG_SUFFIX}"


# =============================================================================
# Characters
# =============================================================================

CREATION_POINT_BUDGET = 5
"""Attribute points a new character distributes on top of race bases."""

DEFAULT_MAX_HP = 100
"""Hit points of a freshly created character."""

# =============================================================================
# In-fiction Boundary Messages
# =============================================================================

ABYSS_MESSAGE = "El abismo consume tus palabras... (Error del Master)"
"""Shown when a turn cannot be processed at all."""

MALFORMED_MESSAGE = "Tus palabras se deshacen en el aire húmedo de la mazmorra. (Petición inválida)"
"""Shown when a turn request cannot be understood."""

SILENT_MASTER_MESSAGE = "El Master guarda silencio: le falta algo para narrar. (Configuración incompleta)"
"""Shown when required configuration is missing."""


__all__ = [
    "DEATH_FLAG_SUFFIX",
    "TAKEN_FLAG_SUFFIX",
    "death_flag",
    "taken_flag",
    "CREATION_POINT_BUDGET",
    "DEFAULT_MAX_HP",
    "ABYSS_MESSAGE",
    "MALFORMED_MESSAGE",
    "SILENT_MASTER_MESSAGE",
]
