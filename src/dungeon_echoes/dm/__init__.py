"""Narration layer: prompts, the narrator and the Game Master orchestrator.

The narration model renders resolved turns as prose. It never rolls dice
and never mutates the session snapshot.
"""

from __future__ import annotations

from dungeon_echoes.dm.narrator import Narrator
from dungeon_echoes.dm.orchestrator import GAME_OVER_MESSAGES, GameMaster, TurnOutcome
from dungeon_echoes.dm.prompts import (
    NARRATOR_SYSTEM_PROMPT,
    build_facts_prompt,
    build_system_prompt,
)


__all__ = [
    "Narrator",
    "GameMaster",
    "TurnOutcome",
    "GAME_OVER_MESSAGES",
    "NARRATOR_SYSTEM_PROMPT",
    "build_system_prompt",
    "build_facts_prompt",
]
