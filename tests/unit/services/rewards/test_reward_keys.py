# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #

from datetime import date

from services.rewards.classifier import GroupAwardCandidate
from services.rewards.reward_keys import build_clan_gathering_key, build_daily_participation_key


def _candidate(day_text="13", month="Nov", year=None):
    return GroupAwardCandidate(raw_text=f"{day_text} {month}", day_text=day_text, month=month, year=year)


def test_clan_gathering_key_uses_current_year_by_default():
    assert build_clan_gathering_key(7, _candidate(), date(2025, 11, 20)) == "CG-BC7-13Nov25"


def test_clan_gathering_key_uses_explicit_year():
    assert build_clan_gathering_key(7, _candidate(year=2026), date(2025, 11, 20)) == "CG-BC7-13Nov26"


def test_clan_gathering_key_keeps_day_as_typed():
    assert build_clan_gathering_key(7, _candidate(day_text="05"), date(2025, 11, 20)) == "CG-BC7-05Nov25"


def test_clan_gathering_key_differs_per_clan():
    today = date(2025, 11, 20)

    assert build_clan_gathering_key(7, _candidate(), today) != build_clan_gathering_key(8, _candidate(), today)


def test_daily_participation_key_is_per_member_and_day():
    assert build_daily_participation_key(3, date(2025, 11, 20)) == "DP'2025-11-20-M3"
    assert build_daily_participation_key(3, date(2025, 11, 21)) != build_daily_participation_key(3, date(2025, 11, 20))
    assert build_daily_participation_key(4, date(2025, 11, 20)) != build_daily_participation_key(3, date(2025, 11, 20))
