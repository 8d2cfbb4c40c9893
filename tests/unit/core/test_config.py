"""Tests for configuration management."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from dungeon_echoes.core.config import (
    NarratorSettings,
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dungeon_echoes.core.exceptions import ConfigurationError


class TestRulesSettings:
    """Tests for rule constants."""

    def test_defaults(self) -> None:
        """Test default difficulty classes and anchors."""
        rules = RulesSettings()

        assert rules.attack_dc == 12
        assert rules.intimidate_dc == 12
        assert rules.talk_dc == 15
        assert rules.convince_dc == 18
        assert rules.damage_die == 6
        assert rules.min_damage == 2
        assert rules.enemy_hit_threshold == 8
        assert rules.start_room_id == "celda"
        assert rules.victory_room_id == "salida"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that rule constants are read from the environment."""
        monkeypatch.setenv("DUNGEON_ECHOES_RULES_ATTACK_DC", "15")
        monkeypatch.setenv("DUNGEON_ECHOES_RULES_VICTORY_ROOM_ID", "pasillo")

        rules = RulesSettings()

        assert rules.attack_dc == 15
        assert rules.victory_room_id == "pasillo"

    def test_out_of_range_dc_rejected(self) -> None:
        """Test that a DC outside the allowed range is rejected."""
        with pytest.raises(ValueError):
            RulesSettings(attack_dc=0)


class TestNarratorSettings:
    """Tests for narration settings."""

    def test_disabled_by_default(self) -> None:
        """Test that narration is off and keyless by default."""
        settings = NarratorSettings()

        assert settings.enabled is False
        assert settings.api_key is None
        assert settings.base_url.startswith("https://")

    def test_enabled_without_key_fails(self) -> None:
        """Test that enabling narration requires an API key."""
        with pytest.raises(ConfigurationError) as exc_info:
            NarratorSettings(enabled=True)

        assert exc_info.value.details["config_key"] == "narrator.api_key"

    def test_enabled_with_key(self) -> None:
        """Test that the key is kept secret."""
        settings = NarratorSettings(enabled=True, api_key="gsk-test")

        assert isinstance(settings.api_key, SecretStr)
        assert settings.api_key.get_secret_value() == "gsk-test"
        assert "gsk-test" not in repr(settings)


class TestSettings:
    """Tests for the application settings singleton."""

    def test_defaults(self) -> None:
        """Test default application settings."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.debug is False
        assert isinstance(settings.rules, RulesSettings)
        assert isinstance(settings.narrator, NarratorSettings)

    def test_get_settings_is_cached(self) -> None:
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that clearing the cache reloads the environment."""
        first = get_settings()
        monkeypatch.setenv("DUNGEON_ECHOES_LOG_LEVEL", "DEBUG")
        clear_settings_cache()

        second = get_settings()

        assert second is not first
        assert second.log_level == "DEBUG"

    def test_missing_narration_key_surfaces_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that get_settings raises ConfigurationError unchanged."""
        monkeypatch.setenv("DUNGEON_ECHOES_NARRATOR_ENABLED", "true")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_invalid_value_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that other load failures become ConfigurationError."""
        monkeypatch.setenv("DUNGEON_ECHOES_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "original_error" in exc_info.value.details
