"""Prose narration of resolved turns.

The Narrator asks an OpenAI-compatible chat model to stylize a turn's
fact lines. It never changes the session: its only output is text. When
narration is disabled, fails, or comes back empty, the raw fact lines are
returned instead so the mechanical outcome always reaches the players.
"""

from __future__ import annotations

from typing import Any

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dungeon_echoes.core.config import NarratorSettings, get_settings
from dungeon_echoes.core.exceptions import ConfigurationError, NarrationError
from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.dm.prompts import build_facts_prompt, build_system_prompt
from dungeon_echoes.models.enums import MessageRole
from dungeon_echoes.models.events import TurnResult
from dungeon_echoes.models.world import Room


logger = get_logger(__name__)


class _TransientNarrationError(NarrationError):
    """Connection or rate-limit failure worth retrying."""


class Narrator:
    """Stylizes fact lines through a chat model, with a plain-text fallback.

    Attributes:
        settings: Narrator settings (model, endpoint, retries).
    """

    def __init__(
        self,
        settings: NarratorSettings | None = None,
        *,
        client: Any = None,
    ) -> None:
        """Initialize the narrator.

        Args:
            settings: Narrator settings; the configured ones when omitted.
            client: Pre-built OpenAI-compatible client (mainly for tests).
        """
        self.settings = settings or get_settings().narrator
        self._client = client

        logger.info(
            "Narrator initialized",
            enabled=self.settings.enabled,
            model=self.settings.model,
        )

    @property
    def enabled(self) -> bool:
        return self.settings.enabled or self._client is not None

    def _get_client(self) -> Any:
        """Get or create the OpenAI client."""
        if self._client is None:
            from openai import OpenAI

            api_key = self.settings.api_key
            if api_key is None:
                raise ConfigurationError(
                    "Narration API key is not configured",
                    config_key="narrator.api_key",
                )
            self._client = OpenAI(
                api_key=api_key.get_secret_value(),
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                max_retries=0,
            )
        return self._client

    def build_messages(self, result: TurnResult, room: Room) -> list[dict[str, str]]:
        """Assemble system prompt, recent history and the turn's facts."""
        state = result.new_state
        messages = [{"role": "system", "content": build_system_prompt(state, room)}]

        limit = self.settings.history_limit
        recent = state.history[-limit:] if limit else []
        for entry in recent:
            if entry.role == MessageRole.SYSTEM:
                continue
            content = entry.content
            if entry.role == MessageRole.USER and entry.player_name:
                content = f"{entry.player_name}: {content}"
            messages.append({"role": entry.role.value, "content": content})

        messages.append({"role": "user", "content": build_facts_prompt(result.fact_lines)})
        return messages

    def _complete(self, messages: list[dict[str, str]]) -> str:
        """Call the chat model with retries on transient failures.

        Raises:
            NarrationError: If the call fails after all retries.
        """
        from openai import APIConnectionError, APIStatusError, RateLimitError

        client = self._get_client()

        @retry(
            retry=retry_if_exception_type(_TransientNarrationError),
            stop=stop_after_attempt(self.settings.max_retries + 1),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            reraise=True,
        )
        def _call() -> str:
            try:
                response = client.chat.completions.create(
                    model=self.settings.model,
                    messages=messages,
                    temperature=self.settings.temperature,
                    max_tokens=600,
                )
                return response.choices[0].message.content or ""
            except (RateLimitError, APIConnectionError) as exc:
                logger.warning("Transient narration failure, retrying", error=str(exc))
                raise _TransientNarrationError(
                    f"Narration provider unavailable: {exc}",
                    model=self.settings.model,
                    provider=self.settings.base_url,
                ) from exc
            except APIStatusError as exc:
                raise NarrationError(
                    f"Narration API error: {exc}",
                    model=self.settings.model,
                    provider=self.settings.base_url,
                    details={"status_code": exc.status_code},
                ) from exc
            except Exception as exc:
                raise NarrationError(
                    f"Narration failed: {exc}",
                    model=self.settings.model,
                    provider=self.settings.base_url,
                ) from exc

        return _call()

    def narrate(self, result: TurnResult, room: Room) -> str:
        """Render a turn as prose, falling back to the raw fact lines.

        Args:
            result: The resolved turn.
            room: Room the party is in after the turn.

        Returns:
            Narrative text; never empty when the turn produced facts.
        """
        fallback = result.narrative
        if not self.enabled or not result.fact_lines:
            return fallback

        try:
            text = self._complete(self.build_messages(result, room)).strip()
        except NarrationError as exc:
            logger.warning("Narration failed, using fact lines", error=exc.message)
            return fallback

        if not text:
            logger.warning("Narration came back empty, using fact lines")
            return fallback
        return text


__all__ = ["Narrator"]
