# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Points Store (Supabase/Postgres Adapter)

Expected tables:
1) public.members
   - id bigint primary key
   - name text
   - discord_username text
   - title text null
   - clan_id bigint null references clans(id)
   - bash_points int null

2) public.clans
   - id bigint primary key
   - clan_name text

3) public.points
   - id bigint generated primary key
   - member_id bigint references members(id)
   - organiser_id bigint references members(id)
   - points int
   - updated_at timestamptz
   - description text UNIQUE            -- the reward key

The supabase-py client is synchronous; every call is pushed to a worker thread
so a slow request only holds up the message that issued it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from services.exceptions import DuplicateRewardKeyError, PersistenceError, StoreUnavailableError
from services.rewards.models import LedgerEntry, Member
from utils.logging_utils import get_module_logger

logger = get_module_logger('storage.supabase')

UNIQUE_VIOLATION = "23505"

MEMBERS_TABLE = "members"
CLANS_TABLE = "clans"
POINTS_TABLE = "points"

MEMBER_COLUMNS = "id, name, discord_username, title, clan_id, bash_points"
LEDGER_COLUMNS = "id, member_id, organiser_id, points, updated_at, description"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so a handle such as ``bash_fan`` matches literally."""
    return value.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")


def translate_api_error(operation: str, error: APIError) -> PersistenceError:
    """Map a PostgREST error onto the BPB storage exceptions."""
    code = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error)
    details = {
        "operation": operation,
        "code": code,
        "details": getattr(error, "details", None),
    }
    hint = getattr(error, "hint", None)
    if code == UNIQUE_VIOLATION:
        return DuplicateRewardKeyError(message, error_code=code, details=details, hint=hint)
    return PersistenceError(message, error_code=code or "PersistenceError", details=details, hint=hint)


class SupabasePointsStore:
    """Datastore operations used by the reward services and commands."""

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> "SupabasePointsStore":
        settings.require_supabase()
        try:
            client = create_client(settings.supabase_url, settings.supabase_key)
        except Exception as e:  # create_client raises SupabaseException for a malformed URL/key
            raise StoreUnavailableError(f"Could not create Supabase client: {e}") from e
        logger.info("Supabase client created for %s", settings.supabase_url)
        return cls(client)

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------
    def _table(self, name: str):
        return self._client.table(name)

    async def _execute(self, operation: str, build: Callable[[], Any]):
        def _run():
            return build().execute()

        try:
            return await asyncio.to_thread(_run)
        except APIError as e:
            raise translate_api_error(operation, e) from e
        except httpx.HTTPError as e:
            raise PersistenceError(
                f"Connection failed: {e}",
                error_code="ConnectionError",
                details={"operation": operation},
            ) from e

    @staticmethod
    def _rows(response) -> List[Dict[str, Any]]:
        data = getattr(response, "data", None) or []
        return [row for row in data if isinstance(row, dict)]

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    async def find_member_by_handle(self, handle: str) -> Optional[Member]:
        response = await self._execute(
            "find_member_by_handle",
            lambda: self._table(MEMBERS_TABLE)
            .select(MEMBER_COLUMNS)
            .ilike("discord_username", escape_like(handle))
            .limit(1),
        )
        rows = self._rows(response)
        return Member.from_row(rows[0]) if rows else None

    async def get_member(self, member_id: int) -> Optional[Member]:
        response = await self._execute(
            "get_member",
            lambda: self._table(MEMBERS_TABLE).select(MEMBER_COLUMNS).eq("id", member_id).limit(1),
        )
        rows = self._rows(response)
        return Member.from_row(rows[0]) if rows else None

    async def count_members(self) -> int:
        response = await self._execute(
            "count_members",
            lambda: self._table(MEMBERS_TABLE).select("id", count="exact", head=True),
        )
        return int(getattr(response, "count", None) or 0)

    async def list_clan_members(self, clan_id: int) -> List[Member]:
        response = await self._execute(
            "list_clan_members",
            lambda: self._table(MEMBERS_TABLE).select(MEMBER_COLUMNS).eq("clan_id", clan_id),
        )
        return [Member.from_row(row) for row in self._rows(response)]

    async def top_members(self, limit: int = 10) -> List[Member]:
        response = await self._execute(
            "top_members",
            lambda: self._table(MEMBERS_TABLE)
            .select(MEMBER_COLUMNS)
            .order("bash_points", desc=True)
            .limit(limit),
        )
        return [Member.from_row(row) for row in self._rows(response)]

    async def sample_member_row(self) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            "sample_member_row",
            lambda: self._table(MEMBERS_TABLE).select("*").limit(1),
        )
        rows = self._rows(response)
        return rows[0] if rows else None

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------
    async def set_member_balance(self, member_id: int, new_balance: int) -> bool:
        response = await self._execute(
            "set_member_balance",
            lambda: self._table(MEMBERS_TABLE).update({"bash_points": new_balance}).eq("id", member_id),
        )
        return bool(self._rows(response))

    async def compare_and_set_balance(self, member_id: int, expected: Optional[int], new_balance: int) -> bool:
        """Update only while the stored balance still equals *expected*."""

        def _build():
            query = self._table(MEMBERS_TABLE).update({"bash_points": new_balance}).eq("id", member_id)
            if expected is None:
                return query.is_("bash_points", "null")
            return query.eq("bash_points", expected)

        response = await self._execute("compare_and_set_balance", _build)
        return bool(self._rows(response))

    # ------------------------------------------------------------------
    # Clans
    # ------------------------------------------------------------------
    async def get_clan_name(self, clan_id: int) -> Optional[str]:
        response = await self._execute(
            "get_clan_name",
            lambda: self._table(CLANS_TABLE).select("clan_name").eq("id", clan_id).limit(1),
        )
        rows = self._rows(response)
        return rows[0].get("clan_name") if rows else None

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------
    async def find_ledger_entry(self, reward_key: str) -> Optional[LedgerEntry]:
        response = await self._execute(
            "find_ledger_entry",
            lambda: self._table(POINTS_TABLE).select(LEDGER_COLUMNS).eq("description", reward_key).limit(1),
        )
        rows = self._rows(response)
        return LedgerEntry.from_row(rows[0]) if rows else None

    async def insert_ledger_entry(self, entry: LedgerEntry) -> LedgerEntry:
        """Insert a ledger row; raises DuplicateRewardKeyError if the key exists."""
        response = await self._execute(
            "insert_ledger_entry",
            lambda: self._table(POINTS_TABLE).insert(entry.to_row()),
        )
        rows = self._rows(response)
        return LedgerEntry.from_row(rows[0]) if rows else entry
