# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Runtime state helpers for the Discord bot."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import pytz

from app.bootstrap import ensure_log_files, initialize_logging, resolve_timezone
from services.config.config_service import BotSettings

from .dependencies import BotDependencies, load_dependencies


@dataclass(frozen=True)
class BotRuntime:
    """Aggregated state required by the bot entrypoint and event handlers."""

    settings: BotSettings
    logger: logging.Logger
    timezone: pytz.BaseTzInfo
    logs_dir: Path
    dependencies: BotDependencies


def build_runtime(
    settings: BotSettings,
    *,
    logs_dir: Optional[Path] = None,
    dependencies: Optional[BotDependencies] = None,
) -> BotRuntime:
    """Construct the runtime container for the bot."""

    level = logging.DEBUG if settings.debug_mode else logging.INFO
    logger = initialize_logging("bpb.bot", level=level)
    timezone = resolve_timezone(asdict(settings), logger=logger)

    # File handlers sit on the package logger so every bpb.* module reaches them
    logs_dir = logs_dir or Path(__file__).resolve().parents[2] / "logs"
    ensure_log_files(logging.getLogger("bpb"), logs_dir)

    logger.info("Final effective timezone for logging and operations: %s", timezone)

    if dependencies is None:
        dependencies = load_dependencies(settings, logger)

    return BotRuntime(
        settings=settings,
        logger=logger,
        timezone=timezone,
        logs_dir=logs_dir,
        dependencies=dependencies,
    )
