"""Request boundary for turn submissions.

The transport layer hands one JSON-like payload per logical turn to
:func:`handle_turn_request` and broadcasts the body it gets back. Every
failure becomes an in-fiction message plus a non-2xx status code; nothing
is dropped silently.

Payload shape::

    {
        "state": {...GameSession snapshot...},
        "actions": [{"player_id": "...", "player_name": "...", "action_text": "..."}]
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from dungeon_echoes.core.constants import (
    ABYSS_MESSAGE,
    MALFORMED_MESSAGE,
    SILENT_MASTER_MESSAGE,
)
from dungeon_echoes.core.exceptions import DungeonEchoesError
from dungeon_echoes.core.logging import get_logger, turn_context
from dungeon_echoes.dm.orchestrator import GameMaster
from dungeon_echoes.models.session import GameSession


logger = get_logger(__name__)

BOUNDARY_MESSAGES: dict[int, str] = {
    400: MALFORMED_MESSAGE,
    503: SILENT_MASTER_MESSAGE,
}


class TurnRequest(BaseModel):
    """A validated turn submission."""

    state: GameSession
    # entries are validated one by one when the turn resolves
    actions: list[dict[str, Any]] = Field(default_factory=list)


@dataclass
class ApiResponse:
    """Status code and JSON-compatible body."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _error(status_code: int, message: str, exc: Exception) -> ApiResponse:
    return ApiResponse(status_code=status_code, body={"narrative": message, "error": str(exc)})


def handle_turn_request(
    payload: Mapping[str, Any],
    master: GameMaster | None = None,
) -> ApiResponse:
    """Validate a turn submission, play it, and build the response.

    Args:
        payload: Decoded JSON request body.
        master: Game master to use; a default one when omitted.

    Returns:
        200 with the turn payload; 400 for a malformed request; 503 for
        missing configuration; 500 for any other engine failure.
    """
    try:
        request = TurnRequest.model_validate(payload)
    except PydanticValidationError as exc:
        logger.warning("Malformed turn request", errors=exc.error_count())
        return _error(400, MALFORMED_MESSAGE, exc)

    try:
        with turn_context(session_id=request.state.session_id):
            master = master or GameMaster()
            outcome = master.play_turn(request.state, request.actions)
    except DungeonEchoesError as exc:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Turn request failed",
            session_id=request.state.session_id,
            status_code=exc.status_code,
            error=exc.message,
            details=exc.details,
        )
        return _error(exc.status_code, BOUNDARY_MESSAGES.get(exc.status_code, ABYSS_MESSAGE), exc)
    except Exception as exc:
        logger.exception("Unexpected turn failure", session_id=request.state.session_id)
        return _error(500, ABYSS_MESSAGE, exc)

    return ApiResponse(status_code=200, body=outcome.to_payload())


__all__ = [
    "TurnRequest",
    "ApiResponse",
    "handle_turn_request",
]
