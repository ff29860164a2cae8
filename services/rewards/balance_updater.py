# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Balance updates for award recipients.

Group awards are best effort: every member is updated on its own and a failed
member is counted, not retried. Single-subject awards use a compare-and-set
on the previously observed balance and give up when another writer got there
first.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from services.exceptions import PersistenceError
from utils.logging_utils import get_module_logger

from .models import BalanceApplyResult, BalanceUpdate

logger = get_module_logger('rewards.balance_updater')


class BalanceUpdater:
    """Applies point deltas to member balances."""

    def __init__(self, store):
        self._store = store

    async def apply(self, member_ids: Iterable[int], delta: int) -> BalanceApplyResult:
        """Add *delta* to each member, reading the current balance right before writing."""
        success_count = 0
        failed: List[int] = []

        for member_id in member_ids:
            try:
                member = await self._store.get_member(member_id)
                if member is None:
                    logger.error(f"Member {member_id} disappeared before points could be added")
                    failed.append(member_id)
                    continue

                updated = await self._store.set_member_balance(member_id, member.balance + delta)
                if updated:
                    success_count += 1
                else:
                    logger.error(f"Balance update for member {member_id} matched no rows")
                    failed.append(member_id)
            except PersistenceError as e:
                logger.error(f"Error updating points for member {member_id}: {e.message}", exc_info=True)
                failed.append(member_id)

        return BalanceApplyResult(
            success_count=success_count,
            fail_count=len(failed),
            failed_member_ids=tuple(failed),
        )

    async def apply_optimistic(self, member_id: int, expected_prior: Optional[int], delta: int) -> BalanceUpdate:
        """Add *delta* only if the balance is still *expected_prior*.

        A missing (null) balance is treated as zero for the new value but must
        still be null in the store for the update to match.
        """
        new_balance = int(expected_prior or 0) + delta
        updated = await self._store.compare_and_set_balance(member_id, expected_prior, new_balance)
        if not updated:
            logger.warning(
                f"Balance of member {member_id} changed since it was read (expected {expected_prior}); "
                f"skipping +{delta}"
            )
            return BalanceUpdate.STALE
        return BalanceUpdate.APPLIED
