# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Reward key construction.

The key is stored in the ``description`` column of the ``points`` table, which
carries a unique constraint. Changing a format here changes which events are
considered duplicates of each other.
"""

from __future__ import annotations

from datetime import date

from .classifier import GroupAwardCandidate

CLAN_GATHERING_PREFIX = "CG-BC"
DAILY_PARTICIPATION_PREFIX = "DP'"


def build_clan_gathering_key(clan_id: int, candidate: GroupAwardCandidate, today: date) -> str:
    """``CG-BC<clan>-<day><Mon><yy>``, e.g. ``CG-BC7-13Nov25``."""
    year = candidate.effective_year(today) % 100
    return f"{CLAN_GATHERING_PREFIX}{clan_id}-{candidate.day_text}{candidate.month}{year:02d}"


def build_daily_participation_key(member_id: int, received_on: date) -> str:
    """``DP'<YYYY-MM-DD>-M<member>``, one key per member per calendar day."""
    return f"{DAILY_PARTICIPATION_PREFIX}{received_on.isoformat()}-M{member_id}"
