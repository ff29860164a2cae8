# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup routines that start message intake."""

from __future__ import annotations

import inspect

from cogs.points_listener import PointsListenerCog

from ..startup_context import StartupContext, as_step


@as_step
async def start_dispatcher_step(context: StartupContext) -> None:
    context.dependencies.dispatcher.start()


@as_step
async def register_listener_step(context: StartupContext) -> None:
    bot = context.bot
    logger = context.logger

    if bot.get_cog("PointsListenerCog") is not None:
        logger.info("PointsListenerCog already registered, skipping")
        return

    result = bot.add_cog(PointsListenerCog(bot, context.dependencies.dispatcher))
    if inspect.isawaitable(result):
        # discord.py 2.x
        await result
    logger.info("Registered PointsListenerCog")
