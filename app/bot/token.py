# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Token retrieval helpers for the Discord bot."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .runtime import BotRuntime

TOKEN_ENV_VARS = ("DISCORD_BOT_TOKEN", "DISCORD_TOKEN")


def get_bot_token(runtime: BotRuntime, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Resolve the Discord bot token from the environment or the loaded settings."""

    logger = runtime.logger
    source = os.environ if env is None else env

    for name in TOKEN_ENV_VARS:
        token_from_env = source.get(name)
        if token_from_env and token_from_env.strip():
            logger.info("✅ Using bot token from environment variable %s", name)
            return token_from_env.strip()

    logger.warning("⚠️  Environment variable DISCORD_BOT_TOKEN not found, falling back to config file")

    token = runtime.settings.bot_token
    if token and str(token).strip():
        logger.info("Using bot token from bot_config.json")
        return str(token).strip()

    logger.error("No bot token configured")
    return None
