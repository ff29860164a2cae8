# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB) - Pytest Configuration & Fixtures                        #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Global pytest configuration and fixtures for all test suites.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Test environment setup
os.environ["TESTING"] = "true"

from services.config.config_service import BotSettings  # noqa: E402
from services.exceptions import DuplicateRewardKeyError, PersistenceError  # noqa: E402
from services.rewards.models import LedgerEntry, Member  # noqa: E402


class FakePointsStore:
    """In-memory stand-in for SupabasePointsStore.

    Every operation yields to the event loop once, so concurrently scheduled
    handlers interleave between datastore calls just like they do against the
    real service. The ledger enforces uniqueness of the reward key.
    """

    def __init__(self, members=(), clans=None):
        self.members: Dict[int, dict] = {}
        for member in members:
            self.add_member(member)
        self.clans: Dict[int, str] = dict(clans or {})
        self.ledger: List[LedgerEntry] = []
        self.calls: List[str] = []
        self.failures: Dict[str, PersistenceError] = {}
        self.failing_balance_ids = set()

    def add_member(self, member: Member) -> None:
        self.members[member.id] = {
            "id": member.id,
            "name": member.name,
            "discord_username": member.discord_username,
            "title": member.title,
            "clan_id": member.clan_id,
            "bash_points": member.bash_points,
        }

    def balance_of(self, member_id: int) -> Optional[int]:
        return self.members[member_id]["bash_points"]

    def ledger_keys(self) -> List[str]:
        return [entry.description for entry in self.ledger]

    async def _op(self, name: str) -> None:
        self.calls.append(name)
        await asyncio.sleep(0)
        if name in self.failures:
            raise self.failures[name]

    async def find_member_by_handle(self, handle):
        await self._op("find_member_by_handle")
        for row in self.members.values():
            if (row["discord_username"] or "").lower() == handle.lower():
                return Member.from_row(row)
        return None

    async def get_member(self, member_id):
        await self._op("get_member")
        row = self.members.get(member_id)
        return Member.from_row(row) if row else None

    async def count_members(self):
        await self._op("count_members")
        return len(self.members)

    async def list_clan_members(self, clan_id):
        await self._op("list_clan_members")
        return [Member.from_row(row) for row in self.members.values() if row["clan_id"] == clan_id]

    async def top_members(self, limit=10):
        await self._op("top_members")
        rows = sorted(self.members.values(), key=lambda row: row["bash_points"] or 0, reverse=True)
        return [Member.from_row(row) for row in rows[:limit]]

    async def sample_member_row(self):
        await self._op("sample_member_row")
        return dict(next(iter(self.members.values()))) if self.members else None

    async def set_member_balance(self, member_id, new_balance):
        await self._op("set_member_balance")
        if member_id in self.failing_balance_ids:
            raise PersistenceError("update failed", error_code="XX000")
        if member_id not in self.members:
            return False
        self.members[member_id]["bash_points"] = new_balance
        return True

    async def compare_and_set_balance(self, member_id, expected, new_balance):
        await self._op("compare_and_set_balance")
        row = self.members.get(member_id)
        if row is None or row["bash_points"] != expected:
            return False
        row["bash_points"] = new_balance
        return True

    async def get_clan_name(self, clan_id):
        await self._op("get_clan_name")
        return self.clans.get(clan_id)

    async def find_ledger_entry(self, reward_key):
        await self._op("find_ledger_entry")
        for entry in self.ledger:
            if entry.description == reward_key:
                return entry
        return None

    async def insert_ledger_entry(self, entry):
        await self._op("insert_ledger_entry")
        if entry.description in self.ledger_keys():
            raise DuplicateRewardKeyError(
                'duplicate key value violates unique constraint "points_description_key"',
                error_code="23505",
                details={"operation": "insert_ledger_entry", "code": "23505"},
            )
        self.ledger.append(entry)
        return entry


CAPTAIN = Member(id=1, name="Jack", discord_username="captain_jack", title="Captain Bash", clan_id=7, bash_points=10)
BOB = Member(id=2, name="Bob", discord_username="bob", title=None, clan_id=7, bash_points=5)
CAROL = Member(id=3, name="Carol", discord_username="carol", title="Member", clan_id=7, bash_points=None)
DAVE = Member(id=4, name="Dave", discord_username="dave", title=None, clan_id=8, bash_points=0)
SOLO = Member(id=5, name="Solo", discord_username="solo", title="captain bash", clan_id=None, bash_points=2)


@pytest.fixture
def fake_store():
    """Store with clan 7 (captain, bob, carol), clan 8 (dave) and a clanless captain."""
    return FakePointsStore(
        members=[CAPTAIN, BOB, CAROL, DAVE, SOLO],
        clans={7: "Bashers", 8: "Night Owls"},
    )


@pytest.fixture
def settings():
    """Settings with the production defaults and no external credentials."""
    return BotSettings.from_dict({"timezone": "Europe/London"})


@pytest.fixture
def mock_reply():
    """Reply coroutine as handed out by discord.Message.reply."""
    return AsyncMock()


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary directory for test configuration files."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir
