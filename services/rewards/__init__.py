# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Public entry points for the reward services."""

from .balance_updater import BalanceUpdater
from .classifier import ClassifiedMessage, GroupAwardCandidate, MessageKind, classify_message
from .idempotency_guard import RewardKeyGuard
from .ledger_writer import AwardLedgerWriter
from .models import AwardResult, AwardStatus, BalanceApplyResult, BalanceUpdate, LedgerEntry, Member

__all__ = [
    "AwardLedgerWriter",
    "AwardResult",
    "AwardStatus",
    "BalanceApplyResult",
    "BalanceUpdate",
    "BalanceUpdater",
    "ClassifiedMessage",
    "GroupAwardCandidate",
    "LedgerEntry",
    "Member",
    "MessageKind",
    "RewardKeyGuard",
    "classify_message",
]
