# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Datastore adapters."""

from .supabase_store import SupabasePointsStore

__all__ = ["SupabasePointsStore"]
