# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Utilities for constructing and running the Discord bot runtime."""

from .runtime import BotRuntime, build_runtime  # noqa: F401
from .factory import create_bot  # noqa: F401
from .events import register_event_handlers, shutdown  # noqa: F401
from .token import get_bot_token  # noqa: F401
