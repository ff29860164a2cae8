#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Message Handler Service

Handles one inbound message end to end:
- messages starting with the command prefix are commands and nothing else
- other messages are checked for an implicit clan gathering date
- other messages from registered members earn the daily participation award
"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict

import discord

from services.exceptions import PersistenceError
from services.rewards.classifier import ClassifiedMessage, GroupAwardCandidate, MessageKind, classify_message
from services.rewards.ledger_writer import AwardLedgerWriter
from services.rewards.models import AwardStatus
from utils.logging_utils import get_module_logger
from utils.time_utils import to_local_date

from . import reply_formatter
from .event_dispatcher import InboundMessage

logger = get_module_logger('message_handler_service')

# Implicit detection stays quiet for authors who are not allowed to award
_SILENT_IMPLICIT_STATUSES = frozenset({
    AwardStatus.NOT_REGISTERED,
    AwardStatus.FORBIDDEN,
    AwardStatus.IN_FLIGHT,
})

CommandHandler = Callable[[InboundMessage], Awaitable[None]]


class MessageHandlerService:
    """Routes messages to commands, clan gathering awards and daily awards."""

    def __init__(self, store, ledger_writer: AwardLedgerWriter, settings):
        self._store = store
        self._writer = ledger_writer
        self.prefix = settings.command_prefix
        self.timezone = settings.timezone
        self.captain_title = settings.captain_title
        self.leaderboard_size = settings.leaderboard_size
        self.daily_participation_enabled = settings.daily_participation_enabled

        self._commands: Dict[str, CommandHandler] = {
            "checkdb": self._check_db,
            "mypoints": self._my_points,
            "listusers": self._list_users,
            "debugschema": self._debug_schema,
            "help": self._help,
        }

    async def handle(self, message: InboundMessage) -> None:
        if message.is_bot:
            return

        classified = classify_message(message.content, prefix=self.prefix)

        if classified.is_command:
            await self._handle_command(message, classified)
            return

        if classified.kind is MessageKind.GROUP_AWARD:
            await self._handle_implicit_clan_gathering(message, classified.candidate)

        if self.daily_participation_enabled:
            await self._handle_daily_participation(message)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def _handle_command(self, message: InboundMessage, classified: ClassifiedMessage) -> None:
        if classified.kind is MessageKind.FORMAT_ERROR:
            await self._reply(message, reply_formatter.DATE_FORMAT_HELP)
            return

        if classified.kind is MessageKind.GROUP_AWARD:
            await self._clan_gathering(message, classified.candidate, implicit=False)
            return

        handler = self._commands.get(classified.command)
        if handler is None:
            logger.debug(f"Ignoring unknown command {self.prefix}{classified.command}")
            return
        await handler(message)

    async def _check_db(self, message: InboundMessage) -> None:
        try:
            count = await self._store.count_members()
        except PersistenceError as e:
            await self._reply(message, reply_formatter.format_store_error(e))
            return
        await self._reply(message, f"✅ Database connected! Total members: {count}")

    async def _my_points(self, message: InboundMessage) -> None:
        try:
            member = await self._store.find_member_by_handle(message.author_handle)
        except PersistenceError as e:
            await self._reply(message, f"❌ Error: {e.message}")
            return

        if member is None:
            await self._reply(
                message,
                f"❌ Your Discord username ({message.author_handle}) is not registered in the database.",
            )
            return
        await self._reply(message, reply_formatter.format_member_points(member))

    async def _list_users(self, message: InboundMessage) -> None:
        try:
            members = await self._store.top_members(self.leaderboard_size)
        except PersistenceError as e:
            await self._reply(message, f"❌ Error: {e.message}")
            return
        await self._reply(message, reply_formatter.format_leaderboard(members))

    async def _debug_schema(self, message: InboundMessage) -> None:
        try:
            sample = await self._store.sample_member_row()
        except PersistenceError as e:
            await self._reply(message, reply_formatter.format_schema_debug(None, e))
            return
        await self._reply(message, reply_formatter.format_schema_debug(sample))

    async def _help(self, message: InboundMessage) -> None:
        await self._reply(message, reply_formatter.format_help(self.prefix, self.leaderboard_size))

    # ------------------------------------------------------------------
    # Awards
    # ------------------------------------------------------------------
    async def _handle_implicit_clan_gathering(self, message: InboundMessage,
                                              candidate: GroupAwardCandidate) -> None:
        logger.info(f"Date detected: {candidate.raw_text} from user: {message.author_handle}")
        await self._clan_gathering(message, candidate, implicit=True)

    async def _clan_gathering(self, message: InboundMessage, candidate: GroupAwardCandidate,
                              *, implicit: bool) -> None:
        today = to_local_date(message.received_at, self.timezone)
        result = await self._writer.award_clan_gathering(message.author_handle, candidate, today=today)

        # no issuer means the lookup failed before authorisation
        if implicit and (result.status in _SILENT_IMPLICIT_STATUSES or result.issuer is None):
            logger.debug(f"Implicit clan gathering from {message.author_handle} ignored: {result.status.value}")
            return

        text = reply_formatter.format_clan_gathering_result(
            result, candidate, today, captain_title=self.captain_title, tz=self.timezone
        )
        if text:
            await self._reply(message, text)

    async def _handle_daily_participation(self, message: InboundMessage) -> None:
        result = await self._writer.award_daily_participation(message.author_handle, message.received_at)
        logger.debug(f"Daily participation for {message.author_handle}: {result.status.value}")

        text = reply_formatter.format_daily_participation_result(result)
        if text:
            await self._reply(message, text)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _reply(self, message: InboundMessage, text: str) -> None:
        try:
            await message.reply(text)
        except (discord.Forbidden, discord.HTTPException, discord.NotFound) as e:
            logger.error(f"Could not reply to {message.author_handle}: {e}")
