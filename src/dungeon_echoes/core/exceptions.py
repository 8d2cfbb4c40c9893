"""Custom exception hierarchy for Dungeon Echoes.

All exceptions inherit from DungeonEchoesError so the boundary layer can
turn any failure into an in-fiction message plus an error status. Gameplay
conditions (no target, locked exit, missing item) are never exceptions;
they are resolved into fact lines by the engine.

Each class carries the HTTP status the boundary answers with.

Example:
    >>> from dungeon_echoes.core.exceptions import ContentError
    >>> raise ContentError("Room table is empty", room_id="celda")
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Merge keyword context into ``details``, skipping unset values."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class DungeonEchoesError(Exception):
    """Base exception for all Dungeon Echoes errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context.
        status_code: Status reported at the request boundary.
    """

    status_code: int = 500

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details."""
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Engine
# =============================================================================


class GameEngineError(DungeonEchoesError):
    """Base exception for all turn engine errors."""


class InvalidGameStateError(GameEngineError):
    """A session snapshot is inconsistent with the room graph.

    Example: the snapshot points at a room id the content table lacks.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, current_state=current_state))


class DiceRollError(GameEngineError):
    """A die cannot be rolled (non-positive number of sides, empty choice)."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, expression=expression))


class ContentError(GameEngineError):
    """Static room content cannot be loaded at all."""

    def __init__(
        self,
        message: str,
        *,
        room_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, room_id=room_id))


# =============================================================================
# Narration
# =============================================================================


class NarrationError(DungeonEchoesError):
    """The narration model could not produce prose.

    The narrator catches this and falls back to the raw fact lines, so it
    only reaches the boundary when raised outside a turn.
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize narration error with model context.

        Args:
            message: Human-readable error description.
            model: Name of the model involved.
            provider: Base URL or name of the provider.
            details: Additional error context.
        """
        super().__init__(
            message,
            details=_with_context(details, model=model, provider=provider),
        )


# =============================================================================
# Configuration & Validation
# =============================================================================


class ConfigurationError(DungeonEchoesError):
    """Application configuration is invalid or incomplete."""

    status_code = 503

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(DungeonEchoesError):
    """Character creation input or a turn request was rejected."""

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


__all__ = [
    "DungeonEchoesError",
    "GameEngineError",
    "InvalidGameStateError",
    "DiceRollError",
    "ContentError",
    "NarrationError",
    "ConfigurationError",
    "ValidationError",
]
