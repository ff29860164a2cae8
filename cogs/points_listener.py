# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Passive listener that feeds every guild message into the event dispatcher."""

import discord
from discord.ext import commands

from services.discord.event_dispatcher import EventDispatcher, InboundMessage
from services.exceptions import EventDispatchError
from utils.logging_utils import get_module_logger

logger = get_module_logger('points_listener')


class PointsListenerCog(commands.Cog):
    """Hands messages to the dispatcher and returns immediately."""

    def __init__(self, bot, dispatcher: EventDispatcher):
        self.bot = bot
        self.dispatcher = dispatcher
        logger.info("PointsListener initialized")

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        # Loop protection
        if message.author.bot:
            return

        try:
            self.dispatcher.submit(InboundMessage.from_discord(message))
        except EventDispatchError as e:
            logger.error(f"Dropped message {message.id} from {message.author.name}: {e.message}")
