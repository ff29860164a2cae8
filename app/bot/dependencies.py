# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Service graph used by the Discord bot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from services.config.config_service import BotSettings
from services.discord.event_dispatcher import EventDispatcher
from services.discord.message_handler_service import MessageHandlerService
from services.rewards.balance_updater import BalanceUpdater
from services.rewards.idempotency_guard import RewardKeyGuard
from services.rewards.ledger_writer import AwardLedgerWriter
from services.storage.supabase_store import SupabasePointsStore


@dataclass(frozen=True)
class BotDependencies:
    """Container for the services wired together at startup."""

    store: Any
    guard: RewardKeyGuard
    balance_updater: BalanceUpdater
    ledger_writer: AwardLedgerWriter
    message_handler: MessageHandlerService
    dispatcher: EventDispatcher


def load_dependencies(settings: BotSettings, logger: logging.Logger,
                      store: Optional[Any] = None) -> BotDependencies:
    """Build the datastore adapter and the award services on top of it.

    Raises :class:`~services.exceptions.MissingConfigError` when the
    datastore credentials are absent and no *store* is injected.
    """

    if store is None:
        store = SupabasePointsStore.from_settings(settings)

    guard = RewardKeyGuard(release_delay=settings.guard_release_seconds)
    balance_updater = BalanceUpdater(store)
    ledger_writer = AwardLedgerWriter.from_settings(settings, store, guard, balance_updater)
    message_handler = MessageHandlerService(store, ledger_writer, settings)
    dispatcher = EventDispatcher(message_handler.handle)

    logger.debug("Award services loaded (daily participation %s)",
                 "enabled" if settings.daily_participation_enabled else "disabled")

    return BotDependencies(
        store=store,
        guard=guard,
        balance_updater=balance_updater,
        ledger_writer=ledger_writer,
        message_handler=message_handler,
        dispatcher=dispatcher,
    )
