# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #

from datetime import date

from services.discord import reply_formatter
from services.rewards.classifier import GroupAwardCandidate
from services.rewards.models import AwardResult, AwardStatus, Member

TODAY = date(2025, 11, 20)
NOV_13 = GroupAwardCandidate(raw_text="13 Nov", day_text="13", month="Nov")


def _format(result):
    return reply_formatter.format_clan_gathering_result(result, NOV_13, TODAY, tz="UTC")


def test_awarded_with_failures():
    text = _format(AwardResult(
        AwardStatus.AWARDED, points=3, clan_name="Bashers", awarded_count=2, failed_count=1,
    ))

    assert "**3 points**" in text
    assert "✅ Awarded: 2 members" in text
    assert "❌ Failed: 1 members" in text


def test_awarded_without_failures_omits_failed_line():
    text = _format(AwardResult(AwardStatus.AWARDED, points=3, clan_name="Bashers", awarded_count=3))

    assert "Failed" not in text


def test_already_awarded_shows_previous_time():
    text = _format(AwardResult(
        AwardStatus.ALREADY_AWARDED, clan_name="Bashers", previous_award_at="2025-11-13T20:15:00+00:00",
    ))

    assert text.endswith("(awarded 13 Nov 2025 20:15 UTC)")


def test_forbidden_reasons():
    assert _format(AwardResult(AwardStatus.FORBIDDEN, reason="no_clan")) == "❌ You are not assigned to any clan."
    assert "Captain Bash" in _format(AwardResult(AwardStatus.FORBIDDEN, reason="title"))


def test_in_flight_has_no_reply():
    assert _format(AwardResult(AwardStatus.IN_FLIGHT)) is None


def test_persistence_error():
    text = _format(AwardResult(AwardStatus.PERSISTENCE_ERROR, error_message="boom"))

    assert text == (
        "❌ Error processing clan gathering: boom\n"
        "**Code:** N/A\n"
        "**Details:** N/A\n"
        "**Hint:** N/A"
    )


def test_persistence_error_shows_diagnostics():
    text = _format(AwardResult(
        AwardStatus.PERSISTENCE_ERROR,
        error_message="relation \"points\" does not exist",
        error_details={"code": "42P01", "details": "schema public", "hint": "Create the points table"},
    ))

    assert "**Code:** 42P01" in text
    assert "**Details:** schema public" in text
    assert "**Hint:** Create the points table" in text


def test_daily_reply_only_on_success():
    member = Member(id=2, name="Bob")

    assert reply_formatter.format_daily_participation_result(
        AwardResult(AwardStatus.AWARDED, points=2, issuer=member)
    ) == "🌞 **Bob** earned **2** bash points for today's participation!"
    assert reply_formatter.format_daily_participation_result(
        AwardResult(AwardStatus.ALREADY_AWARDED, issuer=member)
    ) is None


def test_empty_leaderboard():
    assert reply_formatter.format_leaderboard([]) == "📋 No members found in database."


def test_member_points_use_handle_when_name_missing():
    text = reply_formatter.format_member_points(Member(id=9, discord_username="zed", bash_points=None))

    assert text == "📊 **zed** has **0** bash points!"
