# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Event wiring for the Discord bot."""

from __future__ import annotations

import traceback
from typing import Any

import discord

from .runtime import BotRuntime
from .startup import StartupManager


def register_event_handlers(bot: discord.Bot, runtime: BotRuntime) -> StartupManager:
    """Attach the core event handlers to the bot instance."""

    startup_manager = StartupManager(bot, runtime)
    logger = runtime.logger

    @bot.event
    async def on_ready():
        logger.info("-" * 50)
        user = getattr(bot, "user", None)
        if user is not None:
            logger.info("Logged in as %s (ID: %s)", user.name, user.id)
        else:
            logger.info("Logged in (user unavailable during startup)")
        logger.info("discord.py Version: %s", discord.__version__)
        logger.info("-" * 50)

        await startup_manager.handle_ready()

    @bot.event
    async def on_error(event: str, *args: Any, **kwargs: Any) -> None:
        logger.error("Error in event %s: %s", event, traceback.format_exc())

    return startup_manager


async def shutdown(runtime: BotRuntime) -> None:
    """Stop accepting messages and let in-flight awards finish."""

    logger = runtime.logger
    dispatcher = runtime.dependencies.dispatcher
    logger.info("Stopping event dispatcher...")
    await dispatcher.stop()
