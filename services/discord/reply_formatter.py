#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reply Formatter

Builds the plain-text replies the bot posts for award outcomes and commands.
Datastore diagnostics are passed through verbatim; the bot runs in a small
trusted community where the operator reads them straight from Discord.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from services.exceptions import PersistenceError
from services.rewards.classifier import GroupAwardCandidate
from services.rewards.models import AwardResult, AwardStatus, Member
from utils.time_utils import format_datetime_with_timezone

DATE_FORMAT_HELP = (
    "❌ **Requested Date Format:**\n"
    "Please include a date in your message in one of these formats:\n"
    "• `13 Nov`\n"
    "• `13 Nov 2025`\n"
    "• `:date: 13 Nov 2025`\n"
    "• `date: 13 Nov`"
)

HELP_TEXT = """
**Available Commands:**
• `{p}checkdb` - Check database connection
• `{p}mypoints` - Check your bash points
• `{p}listusers` - Show top {top} members
• `{p}cg` or `{p}clangathering` - Award clan gathering points (Captain only)
• `{p}debugschema` - Debug schema and table info
• `{p}help` - Show this message

**Clan Gathering:**
Captains can award points by using `{p}cg` followed by a date, or just typing the date.
Example: `{p}cg 13 Nov` or just `13 Nov 2025`
"""


def format_help(prefix: str = "!", leaderboard_size: int = 10) -> str:
    return HELP_TEXT.format(p=prefix, top=leaderboard_size)


def format_store_error(error: PersistenceError, label: str = "Database error") -> str:
    details = error.details.get("details") if error.details else None
    return (
        f"❌ {label}: {error.message}\n"
        f"**Code:** {error.error_code}\n"
        f"**Details:** {details or 'N/A'}\n"
        f"**Hint:** {error.hint or 'N/A'}"
    )


def format_clan_gathering_result(result: AwardResult, candidate: GroupAwardCandidate, today: date,
                                 *, captain_title: str = "Captain Bash", tz: Optional[str] = None) -> Optional[str]:
    """Reply text for a clan gathering outcome, or None when nothing should be posted."""

    when = candidate.display_date(today)
    status = result.status

    if status is AwardStatus.AWARDED:
        lines = [
            f"🎉 Your clan members awarded **{result.points} points** for **{when}**'s clan gathering. "
            f"Keep rocking **{result.clan_name}**! 🚀",
            "",
            f"✅ Awarded: {result.awarded_count} members",
        ]
        if result.failed_count:
            lines.append(f"❌ Failed: {result.failed_count} members")
        return "\n".join(lines)

    if status is AwardStatus.ALREADY_AWARDED:
        text = f"❌ Points for **{when}** have already been awarded to **{result.clan_name}**."
        if result.previous_award_at:
            text += f" (awarded {format_datetime_with_timezone(result.previous_award_at, tz)})"
        return text

    if status is AwardStatus.NOT_REGISTERED:
        return "❌ You are not registered in the database."

    if status is AwardStatus.FORBIDDEN:
        if result.reason == "no_clan":
            return "❌ You are not assigned to any clan."
        return f"❌ Only members with \"{captain_title}\" title can award clan gathering points."

    if status is AwardStatus.NO_RECIPIENTS:
        return "❌ No clan members found."

    if status is AwardStatus.PERSISTENCE_ERROR:
        diagnostics = result.error_details or {}
        return (
            f"❌ Error processing clan gathering: {result.error_message}\n"
            f"**Code:** {diagnostics.get('code') or 'N/A'}\n"
            f"**Details:** {diagnostics.get('details') or 'N/A'}\n"
            f"**Hint:** {diagnostics.get('hint') or 'N/A'}"
        )

    # IN_FLIGHT: a duplicate of a request that is still being handled
    return None


def format_daily_participation_result(result: AwardResult) -> Optional[str]:
    if result.status is AwardStatus.AWARDED and result.issuer is not None:
        return (
            f"🌞 **{result.issuer.display_name}** earned **{result.points}** bash "
            f"point{'s' if result.points != 1 else ''} for today's participation!"
        )
    return None


def format_member_points(member: Member) -> str:
    return f"📊 **{member.display_name}** has **{member.balance}** bash points!"


def format_leaderboard(members: Sequence[Member]) -> str:
    if not members:
        return "📋 No members found in database."
    rows = [f"{index}. **{member.display_name}**: {member.balance} points"
            for index, member in enumerate(members, start=1)]
    return "📋 **Top Members:**\n" + "\n".join(rows)


def format_schema_debug(sample: Optional[Dict[str, Any]], error: Optional[PersistenceError] = None) -> str:
    lines: List[str] = ["**Schema Debug Results:**", "", "**Members table:**"]
    if error is not None:
        details = error.details.get("details") if error.details else None
        lines.append(f"❌ Error: {error.message}\n   Code: {error.error_code}\n   Details: {details or 'N/A'}")
        return "\n".join(lines)

    lines.append(f"✅ Found {1 if sample else 0} rows")
    if sample:
        lines.append(f"   **Columns:** {', '.join(sample.keys())}")
        lines.append(f"   **Sample data:** {json.dumps(sample, default=str)[:200]}")
    return "\n".join(lines)
