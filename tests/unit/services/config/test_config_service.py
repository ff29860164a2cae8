# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB) - ConfigService Unit Tests                               #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unit tests for ConfigService.

This test suite covers:
- Defaults, file values and environment overrides
- Caching and cache invalidation
- Validation errors
"""

import json

import pytest

from services.config.config_service import (
    BotSettings,
    ConfigService,
    get_config_service,
    reset_config_service,
)
from services.exceptions import ConfigLoadError, MissingConfigError


@pytest.fixture(autouse=True)
def fresh_config_service():
    reset_config_service()
    yield
    reset_config_service()


class TestConfigServiceLoading:
    """Tests for configuration loading and caching."""

    def test_defaults_without_file_or_env(self, temp_config_dir):
        settings = ConfigService(config_dir=str(temp_config_dir), env={}).get_settings()

        assert settings.timezone == "Europe/London"
        assert settings.command_prefix == "!"
        assert settings.captain_title == "Captain Bash"
        assert settings.clan_gathering_points == 3
        assert settings.daily_participation_enabled is True
        assert settings.daily_participation_points == 1
        assert settings.guard_release_seconds == 2.0
        assert settings.leaderboard_size == 10
        assert settings.bot_token is None

    def test_file_values(self, temp_config_dir):
        (temp_config_dir / "bot_config.json").write_text(json.dumps({
            "captain_title": "Chief",
            "clan_gathering_points": 5,
        }))

        settings = ConfigService(config_dir=str(temp_config_dir), env={}).get_settings()

        assert settings.captain_title == "Chief"
        assert settings.clan_gathering_points == 5

    def test_environment_overrides_file(self, temp_config_dir):
        (temp_config_dir / "bot_config.json").write_text(json.dumps({"timezone": "Europe/Berlin"}))
        env = {
            "SUPABASE_URL": "https://demo.supabase.co",
            "SUPABASE_ANON_KEY": "anon-key",
            "DISCORD_TOKEN": " token-from-env ",
            "TZ": "UTC",
            "BPB_DAILY_PARTICIPATION": "false",
        }

        settings = ConfigService(config_dir=str(temp_config_dir), env=env).get_settings()

        assert settings.supabase_url == "https://demo.supabase.co"
        assert settings.supabase_key == "anon-key"
        assert settings.bot_token == "token-from-env"
        assert settings.timezone == "UTC"
        assert settings.daily_participation_enabled is False

    def test_primary_env_name_wins(self, temp_config_dir):
        env = {"DISCORD_BOT_TOKEN": "primary", "DISCORD_TOKEN": "fallback", "SUPABASE_KEY": "k"}

        settings = ConfigService(config_dir=str(temp_config_dir), env=env).get_settings()

        assert settings.bot_token == "primary"
        assert settings.supabase_key == "k"

    def test_config_is_cached_until_reload(self, temp_config_dir):
        config_file = temp_config_dir / "bot_config.json"
        config_file.write_text(json.dumps({"leaderboard_size": 5}))
        service = ConfigService(config_dir=str(temp_config_dir), env={})
        assert service.get_config()["leaderboard_size"] == 5

        config_file.write_text(json.dumps({"leaderboard_size": 20}))

        assert service.get_config()["leaderboard_size"] == 5
        assert service.get_config(force_reload=True)["leaderboard_size"] == 20

    def test_invalidate_cache(self, temp_config_dir):
        config_file = temp_config_dir / "bot_config.json"
        config_file.write_text(json.dumps({"leaderboard_size": 5}))
        service = ConfigService(config_dir=str(temp_config_dir), env={})
        service.get_config()

        config_file.write_text(json.dumps({"leaderboard_size": 20}))
        service.invalidate_cache()

        assert service.get_settings().leaderboard_size == 20

    def test_singleton(self, temp_config_dir, monkeypatch):
        monkeypatch.setenv("BPB_CONFIG_DIR", str(temp_config_dir))

        assert get_config_service() is get_config_service()
        assert get_config_service().config_file == temp_config_dir / "bot_config.json"


class TestConfigValidation:
    """Tests for invalid configuration."""

    def test_invalid_json(self, temp_config_dir):
        (temp_config_dir / "bot_config.json").write_text("{not json")

        with pytest.raises(ConfigLoadError):
            ConfigService(config_dir=str(temp_config_dir), env={}).get_config()

    def test_non_object_json(self, temp_config_dir):
        (temp_config_dir / "bot_config.json").write_text(json.dumps(["a", "b"]))

        with pytest.raises(ConfigLoadError):
            ConfigService(config_dir=str(temp_config_dir), env={}).get_config()

    def test_invalid_value(self, temp_config_dir):
        (temp_config_dir / "bot_config.json").write_text(json.dumps({"clan_gathering_points": "three"}))

        with pytest.raises(ConfigLoadError):
            ConfigService(config_dir=str(temp_config_dir), env={}).get_settings()

    def test_require_supabase(self):
        settings = BotSettings.from_dict({"supabase_url": "https://demo.supabase.co"})

        with pytest.raises(MissingConfigError) as exc_info:
            settings.require_supabase()

        assert exc_info.value.details["missing"] == ["SUPABASE_ANON_KEY"]
