# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Data models shared by the reward services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Member:
    """A row of the ``members`` table."""

    id: int
    name: Optional[str] = None
    discord_username: Optional[str] = None
    title: Optional[str] = None
    clan_id: Optional[int] = None
    bash_points: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Member":
        return cls(
            id=row["id"],
            name=row.get("name"),
            discord_username=row.get("discord_username"),
            title=row.get("title"),
            clan_id=row.get("clan_id"),
            bash_points=row.get("bash_points"),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.discord_username or f"Member {self.id}"

    @property
    def balance(self) -> int:
        """Balance with a missing value counted as zero."""
        return int(self.bash_points or 0)

    def has_title(self, title: str) -> bool:
        return bool(self.title) and self.title.strip().lower() == title.strip().lower()


@dataclass(frozen=True)
class LedgerEntry:
    """A row of the ``points`` table; ``description`` holds the reward key."""

    member_id: int
    organiser_id: int
    points: int
    updated_at: str
    description: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LedgerEntry":
        return cls(
            id=row.get("id"),
            member_id=row.get("member_id"),
            organiser_id=row.get("organiser_id"),
            points=row.get("points") or 0,
            updated_at=row.get("updated_at") or "",
            description=row.get("description") or "",
        )

    @property
    def reward_key(self) -> str:
        return self.description

    def to_row(self) -> dict:
        return {
            "member_id": self.member_id,
            "organiser_id": self.organiser_id,
            "points": self.points,
            "updated_at": self.updated_at,
            "description": self.description,
        }


class AwardStatus(str, Enum):
    """Terminal outcome of one award attempt."""

    AWARDED = "awarded"
    NOT_REGISTERED = "not_registered"
    FORBIDDEN = "forbidden"
    ALREADY_AWARDED = "already_awarded"
    NO_RECIPIENTS = "no_recipients"
    PERSISTENCE_ERROR = "persistence_error"
    IN_FLIGHT = "in_flight"
    BALANCE_STALE = "balance_stale"


class BalanceUpdate(str, Enum):
    """Outcome of a single-subject optimistic balance update."""

    APPLIED = "applied"
    STALE = "stale"


@dataclass(frozen=True)
class BalanceApplyResult:
    """Per-member accumulator for best-effort group balance updates."""

    success_count: int = 0
    fail_count: int = 0
    failed_member_ids: Tuple[int, ...] = ()

    @property
    def partial_failure(self) -> bool:
        return self.fail_count > 0


@dataclass(frozen=True)
class AwardResult:
    """Result object returned by the award ledger writer."""

    status: AwardStatus
    reward_key: Optional[str] = None
    points: int = 0
    issuer: Optional[Member] = None
    clan_name: Optional[str] = None
    awarded_count: int = 0
    failed_count: int = 0
    previous_award_at: Optional[str] = None
    error_message: Optional[str] = None
    error_details: dict = field(default_factory=dict)
    reason: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is AwardStatus.AWARDED
