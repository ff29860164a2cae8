# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB) - Message Classifier Unit Tests                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unit tests for message classification:
- implicit clan gathering dates
- explicit clan gathering commands and their format errors
- other commands
"""

from datetime import date

import pytest

from services.rewards.classifier import (
    GroupAwardCandidate,
    MessageKind,
    classify_message,
    find_group_award_date,
    normalize_month,
    parse_command_token,
)


class TestImplicitDates:
    """Plain messages carrying a date."""

    @pytest.mark.parametrize("content, day, month, year", [
        ("13 Nov", "13", "Nov", None),
        ("13 Nov 2025", "13", "Nov", 2025),
        (":date: 13 Nov 2025", "13", "Nov", 2025),
        ("date: 5 november", "5", "Nov", None),
        ("great session on 13nov, 2025!", "13", "Nov", 2025),
        ("see you 3 Sept", "3", "Sep", None),
        ("10 MAY", "10", "May", None),
        ("gathering 07 june", "07", "Jun", None),
    ])
    def test_date_is_detected(self, content, day, month, year):
        classified = classify_message(content)

        assert classified.kind is MessageKind.GROUP_AWARD
        assert classified.command is None
        assert classified.is_command is False
        assert classified.candidate.day_text == day
        assert classified.candidate.month == month
        assert classified.candidate.year == year

    @pytest.mark.parametrize("content", [
        "hello everyone",
        "",
        "I have 2 decks",
        "5 marathons done",
        "32 Nov",
        "0 Jan",
        "123 Nov",
    ])
    def test_no_event(self, content):
        classified = classify_message(content)

        assert classified.kind is MessageKind.NO_EVENT
        assert classified.candidate is None

    def test_first_valid_date_wins(self):
        candidate = find_group_award_date("40 Dec was wrong, I meant 14 Dec")

        assert candidate.day_text == "14"
        assert candidate.month == "Dec"

    def test_raw_text_keeps_what_was_typed(self):
        candidate = find_group_award_date("party :date: 13 Nov 2025 !")

        assert candidate.raw_text == ":date: 13 Nov 2025"


class TestCommands:
    """Messages starting with the command prefix."""

    @pytest.mark.parametrize("content, command", [
        ("!cg 13 Nov", "cg"),
        ("!CG 13 Nov 2025", "cg"),
        ("!clangathering date: 1 Jan 2026", "clangathering"),
    ])
    def test_explicit_clan_gathering(self, content, command):
        classified = classify_message(content)

        assert classified.kind is MessageKind.GROUP_AWARD
        assert classified.command == command
        assert classified.is_command is True
        assert classified.candidate is not None

    @pytest.mark.parametrize("content", ["!cg", "!cg tomorrow", "!clangathering 45 Nov"])
    def test_clan_gathering_without_date_is_format_error(self, content):
        classified = classify_message(content)

        assert classified.kind is MessageKind.FORMAT_ERROR
        assert classified.is_command is True
        assert classified.candidate is None

    def test_other_command_with_date_is_not_an_award(self):
        classified = classify_message("!mypoints 13 Nov")

        assert classified.kind is MessageKind.COMMAND
        assert classified.command == "mypoints"
        assert classified.candidate is None

    def test_unknown_command_is_still_a_command(self):
        classified = classify_message("!whatever")

        assert classified.kind is MessageKind.COMMAND
        assert classified.command == "whatever"

    def test_custom_prefix(self):
        assert classify_message("?cg 13 Nov", prefix="?").kind is MessageKind.GROUP_AWARD
        assert classify_message("!cg 13 Nov", prefix="?").command is None

    def test_parse_command_token(self):
        assert parse_command_token("!CheckDB now") == "checkdb"
        assert parse_command_token("checkdb") is None
        assert parse_command_token("") is None


class TestCandidate:
    """Helpers on the extracted date."""

    def test_normalize_month(self):
        assert normalize_month("NOVEMBER") == "Nov"
        assert normalize_month("sept") == "Sep"

    def test_year_defaults_to_today(self):
        candidate = GroupAwardCandidate(raw_text="13 Nov", day_text="13", month="Nov")

        assert candidate.effective_year(date(2025, 11, 20)) == 2025
        assert candidate.display_date(date(2025, 11, 20)) == "13 Nov 2025"

    def test_explicit_year_wins(self):
        candidate = GroupAwardCandidate(raw_text="13 Nov 2024", day_text="13", month="Nov", year=2024)

        assert candidate.display_date(date(2025, 1, 2)) == "13 Nov 2024"
