# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Helpers for orchestrating the Discord bot startup sequence."""

from __future__ import annotations

from typing import Sequence

from ..startup_context import StartupContext, StartupStep


async def run_startup_sequence(context: StartupContext, steps: Sequence[StartupStep]) -> None:
    """Run the startup steps in order; a failing step aborts the sequence."""

    logger = context.logger
    for step in steps:
        step_name = getattr(step, "step_name", getattr(step, "__name__", "unknown"))
        logger.info("→ Running startup step: %s", step_name)
        await step(context)
        logger.info("✓ Completed startup step: %s", step_name)
