# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Entry point for the BashPointsBot Discord bot."""

from __future__ import annotations

import asyncio
import logging
import sys

import discord

from app.bootstrap import configure_environment, load_main_configuration
from app.bot import BotRuntime, build_runtime, create_bot, get_bot_token, register_event_handlers, shutdown
from services.exceptions import ConfigLoadError, StoreUnavailableError


def _prepare_event_loop() -> asyncio.AbstractEventLoop:
    """Create a dedicated asyncio loop for the bot runtime."""

    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    return loop


async def _serve(bot, runtime: BotRuntime, token: str) -> None:
    try:
        await bot.start(token)
    finally:
        await shutdown(runtime)
        if not bot.is_closed():
            await bot.close()


def main() -> int:
    """Main entry point for the Discord bot."""

    logger = logging.getLogger("bpb.bot")
    configure_environment()

    try:
        settings = load_main_configuration()
        runtime = build_runtime(settings)
    except ConfigLoadError as e:
        # MissingConfigError lands here too
        logger.error("FATAL: %s", e.message)
        return 1
    except StoreUnavailableError as e:
        logger.error("FATAL: Could not create datastore client: %s", e.message)
        return 1

    token = get_bot_token(runtime)
    if not token:
        runtime.logger.error("FATAL: Bot token not found.")
        runtime.logger.error("Set DISCORD_BOT_TOKEN in the environment or .env file.")
        return 1

    loop = _prepare_event_loop()
    bot = create_bot(runtime)
    register_event_handlers(bot, runtime)

    runtime.logger.info("Starting bot with token ending in: ...%s", token[-4:])
    try:
        loop.run_until_complete(_serve(bot, runtime, token))
    except KeyboardInterrupt:
        runtime.logger.info("Received keyboard interrupt - shutting down gracefully")
        loop.run_until_complete(shutdown(runtime))
        if not bot.is_closed():
            loop.run_until_complete(bot.close())
    except discord.LoginFailure:
        runtime.logger.error("FATAL: Invalid Discord Bot Token provided.")
        return 1
    except discord.PrivilegedIntentsRequired:
        runtime.logger.error(
            "FATAL: The Message Content intent is not enabled in the Discord Developer Portal!"
        )
        return 1
    finally:
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()

        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))

        loop.close()
        asyncio.set_event_loop(None)

    runtime.logger.info("Bot has stopped gracefully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
