# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Composable startup routines executed when the Discord bot becomes ready."""

from __future__ import annotations

from typing import Sequence

from ..startup_context import StartupStep
from .datastore import verify_datastore_step
from .listener import register_listener_step, start_dispatcher_step
from .sequence import run_startup_sequence

STARTUP_STEPS: Sequence[StartupStep] = (
    verify_datastore_step,
    start_dispatcher_step,          # must run before the listener can submit messages
    register_listener_step,
)

__all__ = [
    "STARTUP_STEPS",
    "run_startup_sequence",
    "verify_datastore_step",
    "start_dispatcher_step",
    "register_listener_step",
]
