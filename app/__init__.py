# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Application bootstrap and Discord runtime wiring."""
