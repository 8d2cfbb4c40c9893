"""Configuration management for Dungeon Echoes.

Settings are loaded with pydantic-settings from environment variables and
an optional .env file. Rule constants (difficulty classes, damage dice,
the victory room) live here so a table can be rebalanced without touching
the engine.

Example:
    >>> from dungeon_echoes.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.attack_dc
    12

Environment Variables:
    DUNGEON_ECHOES_LOG_LEVEL: Logging level
    DUNGEON_ECHOES_RULES_ATTACK_DC: Difficulty class for player attacks
    DUNGEON_ECHOES_NARRATOR_ENABLED: Whether prose narration is requested
    DUNGEON_ECHOES_NARRATOR_API_KEY: API key for the narration model
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dungeon_echoes.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Dice thresholds and content anchors used by the turn resolver.

    Attributes:
        attack_dc: DC a player's 1d20 + strength must meet to hit.
        intimidate_dc: DC for intimidation attempts.
        talk_dc: DC for plain talk, persuasion and deception.
        convince_dc: DC for attempts to convince.
        damage_die: Die added to half strength on a hit.
        min_damage: Floor applied to player damage.
        enemy_hit_threshold: Natural d20 an enemy needs to land a blow.
        default_enemy_damage: Damage die for enemies without one.
        default_entity_hp: Hit points for entities without a value.
        start_room_id: Room every new session starts in.
        victory_room_id: Reaching this room wins the game.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_ECHOES_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    attack_dc: int = Field(default=12, ge=1, le=40)
    intimidate_dc: int = Field(default=12, ge=1, le=40)
    talk_dc: int = Field(default=15, ge=1, le=40)
    convince_dc: int = Field(default=18, ge=1, le=40)
    damage_die: int = Field(default=6, ge=1)
    min_damage: int = Field(default=2, ge=0)
    enemy_hit_threshold: int = Field(default=8, ge=1, le=20)
    default_enemy_damage: int = Field(default=6, ge=1)
    default_entity_hp: int = Field(default=30, ge=1)
    start_room_id: str = Field(default="celda", min_length=1)
    victory_room_id: str = Field(default="salida", min_length=1)


class NarratorSettings(BaseSettings):
    """Configuration for the prose narration model.

    Attributes:
        enabled: Request prose from the model; when off, fact lines are shown.
        api_key: API key for the OpenAI-compatible endpoint.
        base_url: Endpoint base URL (Groq, OpenRouter, OpenAI...).
        model: Model identifier.
        temperature: Sampling temperature.
        max_retries: Retry attempts on transient failures.
        timeout_seconds: Request timeout.
        history_limit: Chat history entries sent as style context.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_ECHOES_NARRATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Request prose narration")
    api_key: SecretStr | None = Field(default=None, description="Narration API key")
    base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible endpoint",
    )
    model: str = Field(default="llama-3.3-70b-versatile", description="Narration model")
    temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    max_retries: int = Field(default=2, ge=0, le=10)
    timeout_seconds: float = Field(default=30.0, gt=0, le=300)
    history_limit: int = Field(default=12, ge=0, le=200)

    @model_validator(mode="after")
    def validate_api_key(self) -> "NarratorSettings":
        """Ensure an API key is present when narration is enabled.

        Raises:
            ConfigurationError: If narration is enabled without a key.
        """
        if self.enabled and not self.api_key:
            raise ConfigurationError(
                "Narration is enabled but DUNGEON_ECHOES_NARRATOR_API_KEY is not configured",
                config_key="narrator.api_key",
            )
        return self


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines.
        rules: Rule constants for the turn resolver.
        narrator: Narration model settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_ECHOES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Ecos de la Mazmorra")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_json: bool = Field(default=False)

    rules: RulesSettings = Field(default_factory=RulesSettings)
    narrator: NarratorSettings = Field(default_factory=NarratorSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "NarratorSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
