# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Config Services Package - Unified configuration service
"""

from .config_service import BotSettings, ConfigService, get_config_service, load_config

__all__ = [
    'BotSettings', 'ConfigService', 'get_config_service', 'load_config'
]
