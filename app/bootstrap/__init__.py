# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Bootstrap utilities for preparing the Discord bot runtime.

Environment, configuration and logging setup live here rather than in
:mod:`bot` so importing the entrypoint has no side effects and the
primitives can be unit-tested in isolation.
"""

from .runtime import (
    configure_environment,
    ensure_log_files,
    initialize_logging,
    load_main_configuration,
    resolve_timezone,
)

__all__ = [
    "configure_environment",
    "ensure_log_files",
    "initialize_logging",
    "load_main_configuration",
    "resolve_timezone",
]
