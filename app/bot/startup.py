# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup orchestration for the Discord bot."""

from __future__ import annotations

from typing import Optional, Sequence

import discord

from .runtime import BotRuntime
from .startup_context import StartupContext, StartupStep
from .startup_steps import STARTUP_STEPS, run_startup_sequence


class StartupManager:
    """Run the startup steps once, on the first ``on_ready``.

    Discord fires ``on_ready`` again after every reconnect; later calls only
    log that the bot is ready.
    """

    def __init__(self, bot: discord.Bot, runtime: BotRuntime,
                 steps: Optional[Sequence[StartupStep]] = None):
        self._context = StartupContext(bot=bot, runtime=runtime)
        self._steps = STARTUP_STEPS if steps is None else steps
        self._initial_startup_done = False

    @property
    def initial_startup_done(self) -> bool:
        return self._initial_startup_done

    async def handle_ready(self) -> None:
        logger = self._context.logger

        if self._initial_startup_done:
            logger.info("BashPointsBot is ready (reconnected).")
            return

        logger.info("First initialization after start...")

        await run_startup_sequence(self._context, self._steps)

        self._initial_startup_done = True
        logger.info("Initialization complete.")
        logger.info("BashPointsBot is ready.")
