# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Runtime bootstrap helpers for the Discord bot."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

import pytz
from dotenv import load_dotenv

from services.config.config_service import BotSettings, get_config_service
from utils.logging_utils import set_log_timezone, setup_logger


def configure_environment(
    env: Optional[MutableMapping[str, str]] = None,
    *,
    dotenv_path: Optional[Path] = None,
) -> bool:
    """Load ``.env`` and ensure required environment defaults are present.

    Parameters
    ----------
    env:
        Optional mapping to mutate.  Defaults to :data:`os.environ` when not
        provided; a ``.env`` file is only loaded in that case.
    dotenv_path:
        Explicit ``.env`` location.  ``python-dotenv`` searches upwards from
        the working directory when omitted.

    Returns
    -------
    bool
        Whether a ``.env`` file was found and loaded.
    """

    loaded = False
    target_env: MutableMapping[str, str]
    if env is None:
        loaded = load_dotenv(dotenv_path=dotenv_path, override=False)
        target_env = os.environ
    else:
        target_env = env

    target_env.setdefault("TZ", "Europe/London")
    target_env.setdefault("BPB_DEBUG", "false")
    return loaded


def load_main_configuration(force_reload: bool = False) -> BotSettings:
    """Load the merged configuration as typed settings."""

    return get_config_service().get_settings(force_reload=force_reload)


def initialize_logging(name: str, level: int = logging.INFO) -> logging.Logger:
    """Create the primary logger for the bot."""

    logger = setup_logger(name, level=level)
    return logger


def resolve_timezone(
    config: Optional[Mapping[str, object]],
    *,
    default: str = "Europe/London",
    logger: Optional[logging.Logger] = None,
) -> pytz.BaseTzInfo:
    """Resolve the timezone defined in the configuration.

    Falls back to UTC when the configured timezone is unknown.  The resolved
    zone also becomes the timezone of log timestamps.
    """

    active_logger = logger or logging.getLogger("bpb.bootstrap")
    timezone_str = default
    if config is not None:
        timezone_str = str(config.get("timezone", default))

    try:
        tz = pytz.timezone(timezone_str)
        active_logger.info("Using timezone '%s'", timezone_str)
    except pytz.exceptions.UnknownTimeZoneError:
        active_logger.warning(
            "Unknown timezone '%s'. Falling back to UTC for this session.", timezone_str
        )
        tz = pytz.timezone("UTC")

    set_log_timezone(tz.zone)
    return tz


def ensure_log_files(logger: logging.Logger, logs_dir: Path) -> None:
    """Attach file handlers to the provided logger if missing."""

    logs_dir.mkdir(parents=True, exist_ok=True)

    discord_log_path = logs_dir / "discord.log"
    bot_error_log_path = logs_dir / "bot_error.log"

    if not any(
        isinstance(handler, logging.FileHandler)
        and getattr(handler, "baseFilename", "") == str(discord_log_path)
        for handler in logger.handlers
    ):
        info_handler = logging.FileHandler(discord_log_path, encoding="utf-8")
        info_handler.setLevel(logging.INFO)
        info_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(info_handler)

    if not any(
        isinstance(handler, logging.FileHandler)
        and getattr(handler, "baseFilename", "") == str(bot_error_log_path)
        for handler in logger.handlers
    ):
        error_handler = logging.FileHandler(bot_error_log_path, encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(error_handler)

    logger.info(
        "Bot file loggers initialized: discord.log (INFO+), bot_error.log (ERROR+)"
    )
