"""Core plumbing shared by every layer of Dungeon Echoes.

Exports:
    Exceptions:
        DungeonEchoesError: Root of the hierarchy the boundary maps to status codes.
        GameEngineError: Failures inside the rules engine (bad snapshot, bad die).
        NarrationError: The prose model could not answer.
        ConfigurationError: Missing or invalid settings (reported as 503).
        ValidationError: Rejected character or request data (reported as 400).

    Configuration:
        Settings, RulesSettings, NarratorSettings: pydantic-settings models.
        get_settings / clear_settings_cache: Cached loader.

    Logging:
        configure_logging / configure_from_settings: structlog setup.
        get_logger, turn_context: Loggers and per-turn context.
"""

from __future__ import annotations

from dungeon_echoes.core.config import (
    NarratorSettings,
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dungeon_echoes.core.exceptions import (
    ConfigurationError,
    ContentError,
    DiceRollError,
    DungeonEchoesError,
    GameEngineError,
    InvalidGameStateError,
    NarrationError,
    ValidationError,
)
from dungeon_echoes.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    turn_context,
)


__all__ = [
    # Exceptions
    "DungeonEchoesError",
    "GameEngineError",
    "InvalidGameStateError",
    "DiceRollError",
    "ContentError",
    "NarrationError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "RulesSettings",
    "NarratorSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "turn_context",
]
