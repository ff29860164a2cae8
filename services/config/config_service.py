# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unified Configuration Service - Single source of truth for all configuration

Values are layered in this order, later layers winning:
- built-in defaults
- ``config/bot_config.json`` (directory overridable with ``BPB_CONFIG_DIR``)
- environment variables (a ``.env`` file is loaded during bootstrap)
"""

import os
import json
import logging
from typing import Dict, Any, Optional, Mapping
from pathlib import Path
from threading import Lock
from dataclasses import dataclass

from services.exceptions import ConfigLoadError, MissingConfigError

logger = logging.getLogger('bpb.config_service')

DEFAULT_CONFIG: Dict[str, Any] = {
    'bot_token': None,
    'supabase_url': None,
    'supabase_key': None,
    'timezone': 'Europe/London',
    'command_prefix': '!',
    'captain_title': 'Captain Bash',
    'clan_gathering_points': 3,
    'daily_participation_enabled': True,
    'daily_participation_points': 1,
    'guard_release_seconds': 2.0,
    'leaderboard_size': 10,
    'debug_mode': False,
}

# config key -> environment variables, first non-empty wins
ENV_OVERRIDES: Dict[str, tuple] = {
    'bot_token': ('DISCORD_BOT_TOKEN', 'DISCORD_TOKEN'),
    'supabase_url': ('SUPABASE_URL',),
    'supabase_key': ('SUPABASE_ANON_KEY', 'SUPABASE_KEY'),
    'timezone': ('TZ',),
    'daily_participation_enabled': ('BPB_DAILY_PARTICIPATION',),
    'debug_mode': ('BPB_DEBUG',),
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class BotSettings:
    """Typed, immutable view over the merged configuration."""
    bot_token: Optional[str]
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    timezone: str
    command_prefix: str
    captain_title: str
    clan_gathering_points: int
    daily_participation_enabled: bool
    daily_participation_points: int
    guard_release_seconds: float
    leaderboard_size: int
    debug_mode: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'BotSettings':
        """Create BotSettings from a merged configuration mapping."""
        merged = dict(DEFAULT_CONFIG)
        merged.update({k: v for k, v in data.items() if v is not None})
        try:
            return cls(
                bot_token=merged.get('bot_token'),
                supabase_url=merged.get('supabase_url'),
                supabase_key=merged.get('supabase_key'),
                timezone=str(merged['timezone']),
                command_prefix=str(merged['command_prefix']),
                captain_title=str(merged['captain_title']),
                clan_gathering_points=int(merged['clan_gathering_points']),
                daily_participation_enabled=_as_bool(merged['daily_participation_enabled']),
                daily_participation_points=int(merged['daily_participation_points']),
                guard_release_seconds=float(merged['guard_release_seconds']),
                leaderboard_size=int(merged['leaderboard_size']),
                debug_mode=_as_bool(merged['debug_mode']),
            )
        except (TypeError, ValueError) as e:
            raise ConfigLoadError(f"Invalid configuration value: {e}") from e

    def require_supabase(self) -> None:
        """Raise MissingConfigError unless the datastore credentials are present."""
        missing = [name for name, value in (('SUPABASE_URL', self.supabase_url),
                                            ('SUPABASE_ANON_KEY', self.supabase_key)) if not value]
        if missing:
            raise MissingConfigError(
                f"Missing datastore configuration: {', '.join(missing)}",
                details={'missing': missing},
            )


class ConfigService:
    """Configuration service - single source of truth for BPB configuration.

    The service is implemented as a singleton - use :func:`get_config_service` to get the
    instance instead of creating it directly.

    Example:
        >>> from services.config.config_service import get_config_service
        >>> settings = get_config_service().get_settings()
        >>> print(settings.captain_title)
    """

    _instance = None
    _lock = Lock()

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(ConfigService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_dir: Optional[str] = None, env: Optional[Mapping[str, str]] = None):
        if self._initialized:
            return

        base_dir = config_dir or os.environ.get('BPB_CONFIG_DIR')
        if base_dir:
            self.config_dir = Path(base_dir)
        else:
            self.config_dir = Path(__file__).resolve().parents[2] / 'config'

        self.config_file = self.config_dir / 'bot_config.json'
        self._env = env
        self._cache: Optional[Dict[str, Any]] = None
        self._cache_lock = Lock()
        self._initialized = True

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}, using defaults and environment")
            return {}
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            raise ConfigLoadError(f"Error reading {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigLoadError(f"{self.config_file} must contain a JSON object")
        return data

    def _load_env(self) -> Dict[str, Any]:
        env = os.environ if self._env is None else self._env
        values: Dict[str, Any] = {}
        for key, names in ENV_OVERRIDES.items():
            for name in names:
                value = env.get(name)
                if value not in (None, ''):
                    values[key] = value.strip()
                    break
        return values

    def get_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """Return the merged configuration dictionary."""
        with self._cache_lock:
            if self._cache is None or force_reload:
                config = dict(DEFAULT_CONFIG)
                config.update(self._load_file())
                config.update(self._load_env())
                self._cache = config
                logger.info("Configuration loaded (file: %s)", self.config_file)
            return dict(self._cache)

    def get_settings(self, force_reload: bool = False) -> BotSettings:
        """Return the typed settings view."""
        return BotSettings.from_dict(self.get_config(force_reload=force_reload))

    def invalidate_cache(self) -> None:
        with self._cache_lock:
            self._cache = None


def get_config_service() -> ConfigService:
    """Get the singleton config service instance."""
    return ConfigService()


def reset_config_service() -> None:
    """Drop the singleton so the next call re-reads directories and environment."""
    ConfigService._instance = None


def load_config() -> Dict[str, Any]:
    """Convenience accessor for the merged configuration."""
    return get_config_service().get_config()
