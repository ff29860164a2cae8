# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Classification of inbound message text into reward-triggering events.

A message that starts with the command prefix is always a command, even when
it also carries a date; only prefix-less messages are looked at for implicit
clan gathering dates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

CLAN_GATHERING_COMMANDS = frozenset({"cg", "clangathering"})

_MONTH_PATTERN = (
    r"(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# "13 Nov", "13 Nov 2025", ":date: 13 Nov 2025", "date: 13 november"
DATE_PATTERN = re.compile(
    r"(?::?date:?\s*)?(?<!\d)(\d{1,2})\s*" + _MONTH_PATTERN + r"(?![a-z])(?:\s*,?\s*(\d{4})(?!\d))?",
    re.IGNORECASE,
)


class MessageKind(str, Enum):
    NO_EVENT = "no_event"
    COMMAND = "command"
    GROUP_AWARD = "group_award"
    FORMAT_ERROR = "format_error"


@dataclass(frozen=True)
class GroupAwardCandidate:
    """A clan gathering date extracted from message text."""

    raw_text: str
    day_text: str
    month: str
    year: Optional[int] = None

    def effective_year(self, today: date) -> int:
        return self.year if self.year is not None else today.year

    def display_date(self, today: date) -> str:
        return f"{self.day_text} {self.month} {self.effective_year(today)}"


@dataclass(frozen=True)
class ClassifiedMessage:
    kind: MessageKind
    command: Optional[str] = None
    candidate: Optional[GroupAwardCandidate] = None

    @property
    def is_command(self) -> bool:
        """True when the message was consumed by command handling."""
        return self.command is not None


def normalize_month(month_text: str) -> str:
    """``nov`` / ``NOVEMBER`` -> ``Nov``."""
    return month_text[:3].capitalize()


def find_group_award_date(content: str) -> Optional[GroupAwardCandidate]:
    """Return the first valid date in *content*, or None."""
    for match in DATE_PATTERN.finditer(content or ""):
        day_text, month_text, year_text = match.group(1), match.group(2), match.group(3)
        if not 1 <= int(day_text) <= 31:
            continue
        return GroupAwardCandidate(
            raw_text=match.group(0).strip(),
            day_text=day_text,
            month=normalize_month(month_text),
            year=int(year_text) if year_text else None,
        )
    return None


def parse_command_token(content: str, prefix: str = "!") -> Optional[str]:
    """Lower-cased command name without prefix, or None for plain messages."""
    if not content or not content.startswith(prefix):
        return None
    token = content.split(maxsplit=1)[0]
    return token[len(prefix):].lower()


def classify_message(content: str, *, prefix: str = "!") -> ClassifiedMessage:
    command = parse_command_token(content, prefix)

    if command is not None:
        if command in CLAN_GATHERING_COMMANDS:
            candidate = find_group_award_date(content)
            if candidate is None:
                return ClassifiedMessage(MessageKind.FORMAT_ERROR, command=command)
            return ClassifiedMessage(MessageKind.GROUP_AWARD, command=command, candidate=candidate)
        return ClassifiedMessage(MessageKind.COMMAND, command=command)

    candidate = find_group_award_date(content)
    if candidate is not None:
        return ClassifiedMessage(MessageKind.GROUP_AWARD, candidate=candidate)
    return ClassifiedMessage(MessageKind.NO_EVENT)
