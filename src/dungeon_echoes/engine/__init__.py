"""Deterministic rules engine for Dungeon Echoes.

Submodules:
    dice: Single-die rolls backed by the d20 library
    classifier: Ordered keyword table mapping actions to intents
    events: Per-turn collection of fact lines, events and rolls
    combat: Enemy retaliation and end-of-turn checks
    resolver: Turn resolution entry point

Example:
    >>> from dungeon_echoes.engine import TurnResolver, DiceRoller
    >>> resolver = TurnResolver(roller=DiceRoller(seed=3))
    >>> result = resolver.resolve(session, actions)
"""

from __future__ import annotations

from dungeon_echoes.engine.classifier import (
    INTENT_RULES,
    IntentRule,
    classify,
    contains_keyword,
    normalize,
)
from dungeon_echoes.engine.combat import (
    check_combat_end,
    check_defeat,
    check_victory,
    living_enemies,
    resolve_enemy_turn,
)
from dungeon_echoes.engine.dice import DiceRoller, Roller, choose, roll
from dungeon_echoes.engine.events import TurnLog
from dungeon_echoes.engine.resolver import TurnResolver, process_turn


__all__ = [
    # Dice
    "Roller",
    "DiceRoller",
    "choose",
    "roll",
    # Classification
    "IntentRule",
    "INTENT_RULES",
    "classify",
    "contains_keyword",
    "normalize",
    # Events
    "TurnLog",
    # Combat
    "living_enemies",
    "resolve_enemy_turn",
    "check_defeat",
    "check_combat_end",
    "check_victory",
    # Resolver
    "TurnResolver",
    "process_turn",
]
