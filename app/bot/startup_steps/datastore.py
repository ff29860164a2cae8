# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup routine that checks the datastore is reachable."""

from __future__ import annotations

from services.exceptions import PersistenceError

from ..startup_context import StartupContext, as_step


@as_step
async def verify_datastore_step(context: StartupContext) -> None:
    logger = context.logger
    store = context.dependencies.store
    try:
        count = await store.count_members()
    except PersistenceError as e:
        # Keep running; each award reports its own datastore error
        logger.error("Datastore check failed: %s (code %s, hint %s)", e.message, e.error_code, e.hint)
        return
    logger.info("Datastore reachable, %d members registered", count)
