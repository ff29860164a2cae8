# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Shared context and helpers for Discord bot startup orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Awaitable, Callable, Protocol

import discord

from .dependencies import BotDependencies
from .runtime import BotRuntime


@dataclass
class StartupContext:
    """View over the runtime data shared across startup steps."""

    bot: discord.Bot
    runtime: BotRuntime

    @property
    def logger(self):
        return self.runtime.logger

    @property
    def dependencies(self) -> BotDependencies:
        return self.runtime.dependencies


class StartupStep(Protocol):
    async def __call__(self, context: StartupContext) -> None:
        ...


StepCallable = Callable[[StartupContext], Awaitable[None]]


def as_step(func: StepCallable) -> StartupStep:
    """Wrap a coroutine as a named startup step."""

    step_name = getattr(func, "__name__", func.__class__.__name__)

    @wraps(func)
    async def _runner(context: StartupContext) -> None:
        context.logger.debug("Executing startup step: %s", step_name)
        await func(context)

    setattr(_runner, "step_name", step_name)
    return _runner
