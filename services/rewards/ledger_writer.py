# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Award Ledger Writer - issues clan gathering and daily participation awards

Order of operations for every award:
1. resolve and authorise the issuer
2. build the reward key and claim it in the process-local guard
3. look the key up in the ledger
4. resolve the recipients
5. insert the ledger row (unique on the reward key)
6. update balances

The ledger insert is the point where an award becomes real. Balances are
only touched after it succeeded, so a partially failed balance update never
makes the same event awardable again.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from services.exceptions import DuplicateRewardKeyError, PersistenceError
from utils.logging_utils import get_module_logger
from utils.time_utils import get_current_time, to_local_date, utc_now_iso

from .balance_updater import BalanceUpdater
from .classifier import GroupAwardCandidate
from .idempotency_guard import RewardKeyGuard
from .models import AwardResult, AwardStatus, BalanceUpdate, LedgerEntry, Member
from .reward_keys import build_clan_gathering_key, build_daily_participation_key

logger = get_module_logger('rewards.ledger_writer')


class AwardLedgerWriter:
    """Writes award ledger entries exactly once per reward key."""

    def __init__(
        self,
        store,
        guard: RewardKeyGuard,
        balance_updater: BalanceUpdater,
        *,
        captain_title: str = "Captain Bash",
        clan_gathering_points: int = 3,
        daily_participation_points: int = 1,
        timezone: str = "UTC",
    ):
        self._store = store
        self._guard = guard
        self._balances = balance_updater
        self.captain_title = captain_title
        self.clan_gathering_points = clan_gathering_points
        self.daily_participation_points = daily_participation_points
        self.timezone = timezone

    @classmethod
    def from_settings(cls, settings, store, guard: RewardKeyGuard,
                      balance_updater: Optional[BalanceUpdater] = None) -> "AwardLedgerWriter":
        return cls(
            store,
            guard,
            balance_updater or BalanceUpdater(store),
            captain_title=settings.captain_title,
            clan_gathering_points=settings.clan_gathering_points,
            daily_participation_points=settings.daily_participation_points,
            timezone=settings.timezone,
        )

    # ------------------------------------------------------------------
    # Clan gathering
    # ------------------------------------------------------------------
    async def award_clan_gathering(
        self,
        issuer_handle: str,
        candidate: GroupAwardCandidate,
        *,
        today: Optional[date] = None,
    ) -> AwardResult:
        """Award every member of the issuer's clan for the gathering on *candidate*'s date."""

        today = today or get_current_time(self.timezone).date()

        try:
            issuer = await self._store.find_member_by_handle(issuer_handle)
        except PersistenceError as e:
            return self._persistence_failure(e)

        if issuer is None:
            return AwardResult(AwardStatus.NOT_REGISTERED)
        if not issuer.has_title(self.captain_title):
            return AwardResult(AwardStatus.FORBIDDEN, issuer=issuer, reason="title")
        if issuer.clan_id is None:
            return AwardResult(AwardStatus.FORBIDDEN, issuer=issuer, reason="no_clan")

        reward_key = build_clan_gathering_key(issuer.clan_id, candidate, today)
        if not self._guard.try_enter(reward_key):
            return AwardResult(AwardStatus.IN_FLIGHT, reward_key=reward_key, issuer=issuer)

        try:
            return await self._issue_clan_gathering(issuer, reward_key)
        except PersistenceError as e:
            return self._persistence_failure(e, reward_key=reward_key, issuer=issuer)
        finally:
            self._guard.schedule_release(reward_key)

    async def _issue_clan_gathering(self, issuer: Member, reward_key: str) -> AwardResult:
        existing = await self._store.find_ledger_entry(reward_key)
        if existing is not None:
            return AwardResult(
                AwardStatus.ALREADY_AWARDED,
                reward_key=reward_key,
                issuer=issuer,
                clan_name=await self._clan_name(issuer.clan_id),
                previous_award_at=existing.updated_at,
            )

        members = await self._store.list_clan_members(issuer.clan_id)
        if not members:
            return AwardResult(AwardStatus.NO_RECIPIENTS, reward_key=reward_key, issuer=issuer)

        clan_name = await self._clan_name(issuer.clan_id)
        points = self.clan_gathering_points
        entry = LedgerEntry(
            member_id=issuer.id,
            organiser_id=issuer.id,
            points=points,
            updated_at=utc_now_iso(),
            description=reward_key,
        )

        try:
            await self._store.insert_ledger_entry(entry)
        except DuplicateRewardKeyError:
            logger.info(f"Ledger entry {reward_key} was written concurrently; not awarding again")
            return AwardResult(
                AwardStatus.ALREADY_AWARDED, reward_key=reward_key, issuer=issuer, clan_name=clan_name
            )

        applied = await self._balances.apply([member.id for member in members], points)
        logger.info(
            f"Clan gathering {reward_key} by {issuer.display_name}: "
            f"{applied.success_count} awarded, {applied.fail_count} failed"
        )
        return AwardResult(
            AwardStatus.AWARDED,
            reward_key=reward_key,
            points=points,
            issuer=issuer,
            clan_name=clan_name,
            awarded_count=applied.success_count,
            failed_count=applied.fail_count,
        )

    async def _clan_name(self, clan_id: int) -> str:
        try:
            name = await self._store.get_clan_name(clan_id)
        except PersistenceError as e:
            logger.warning(f"Could not load name of clan {clan_id}: {e.message}")
            name = None
        return name or f"Clan {clan_id}"

    # ------------------------------------------------------------------
    # Daily participation
    # ------------------------------------------------------------------
    async def award_daily_participation(self, member_handle: str, received_at: datetime) -> AwardResult:
        """Award the author of a message once per calendar day."""

        try:
            member = await self._store.find_member_by_handle(member_handle)
        except PersistenceError as e:
            return self._persistence_failure(e)

        if member is None:
            return AwardResult(AwardStatus.NOT_REGISTERED)

        reward_key = build_daily_participation_key(member.id, to_local_date(received_at, self.timezone))
        if not self._guard.try_enter(reward_key):
            return AwardResult(AwardStatus.IN_FLIGHT, reward_key=reward_key, issuer=member)

        try:
            return await self._issue_daily_participation(member, reward_key)
        except PersistenceError as e:
            return self._persistence_failure(e, reward_key=reward_key, issuer=member)
        finally:
            self._guard.schedule_release(reward_key)

    async def _issue_daily_participation(self, member: Member, reward_key: str) -> AwardResult:
        existing = await self._store.find_ledger_entry(reward_key)
        if existing is not None:
            return AwardResult(
                AwardStatus.ALREADY_AWARDED,
                reward_key=reward_key,
                issuer=member,
                previous_award_at=existing.updated_at,
            )

        points = self.daily_participation_points
        entry = LedgerEntry(
            member_id=member.id,
            organiser_id=member.id,
            points=points,
            updated_at=utc_now_iso(),
            description=reward_key,
        )

        try:
            await self._store.insert_ledger_entry(entry)
        except DuplicateRewardKeyError:
            logger.info(f"Ledger entry {reward_key} was written concurrently; not awarding again")
            return AwardResult(AwardStatus.ALREADY_AWARDED, reward_key=reward_key, issuer=member)

        outcome = await self._balances.apply_optimistic(member.id, member.bash_points, points)
        if outcome is BalanceUpdate.STALE:
            return AwardResult(AwardStatus.BALANCE_STALE, reward_key=reward_key, points=points, issuer=member)

        logger.info(f"Daily participation {reward_key}: +{points} for {member.display_name}")
        return AwardResult(
            AwardStatus.AWARDED,
            reward_key=reward_key,
            points=points,
            issuer=member,
            awarded_count=1,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _persistence_failure(error: PersistenceError, *, reward_key: Optional[str] = None,
                             issuer: Optional[Member] = None) -> AwardResult:
        logger.error(f"Datastore error while awarding {reward_key or 'points'}: {error.message}", exc_info=True)
        details = dict(error.details)
        if not details.get("code"):
            details["code"] = error.error_code
        if error.hint:
            details["hint"] = error.hint
        return AwardResult(
            AwardStatus.PERSISTENCE_ERROR,
            reward_key=reward_key,
            issuer=issuer,
            error_message=error.message,
            error_details=details,
        )
