# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Reward Key Guard - process-local in-flight markers for reward keys

Collapses near-simultaneous attempts at the same reward key (double clicks,
gateway redelivery) into one. The marker outlives the operation by a short
delay so a duplicate arriving right after completion is rejected too.

This is advisory only: after a restart, or with several processes, the unique
constraint on the ledger is what prevents duplicate awards.
"""

import asyncio
import time
from typing import Callable, Dict, Optional

from utils.logging_utils import get_module_logger

logger = get_module_logger('rewards.idempotency_guard')

DEFAULT_RELEASE_DELAY = 2.0


class RewardKeyGuard:
    """Keyed registry of in-flight reward keys with delayed release."""

    def __init__(self, release_delay: float = DEFAULT_RELEASE_DELAY,
                 clock: Callable[[], float] = time.monotonic):
        self.release_delay = float(release_delay)
        self._clock = clock
        self._in_flight: Dict[str, float] = {}
        self._timers: Dict[str, asyncio.TimerHandle] = {}
        # released keys that got no timer, with the time the release was requested
        self._unscheduled: Dict[str, float] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def try_enter(self, key: str) -> bool:
        """Mark *key* as in flight; False if it already is."""
        if self._unscheduled:
            self.sweep()

        if key in self._in_flight:
            logger.info(f"Already processing {key}, skipping duplicate request")
            return False

        self._in_flight[key] = self._clock()
        return True

    def leave(self, key: str) -> None:
        """Remove the marker immediately."""
        self._in_flight.pop(key, None)
        self._unscheduled.pop(key, None)
        timer = self._timers.pop(key, None)
        if timer is not None:
            timer.cancel()

    def schedule_release(self, key: str, delay: Optional[float] = None) -> None:
        """Remove the marker after *delay* seconds (defaults to release_delay).

        Without a running event loop the release is only recorded; the next
        try_enter() sweeps the marker once the delay has passed.
        """
        delay = self.release_delay if delay is None else float(delay)
        if delay <= 0:
            self.leave(key)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running loop to release {key}; it will be swept")
            self._unscheduled[key] = self._clock()
            return

        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
        self._timers[key] = loop.call_later(delay, self._release, key)

    def sweep(self, max_age: Optional[float] = None) -> int:
        """Drop released markers that got no timer and are older than *max_age* seconds.

        Markers of operations still in flight are never swept. Returns how many
        markers were removed.
        """
        max_age = self.release_delay if max_age is None else float(max_age)
        cutoff = self._clock() - max_age
        stale = [key for key, released_at in self._unscheduled.items() if released_at <= cutoff]
        for key in stale:
            self.leave(key)
        if stale:
            logger.debug(f"Swept {len(stale)} stale reward key marker(s)")
        return len(stale)

    def _release(self, key: str) -> None:
        self._timers.pop(key, None)
        self._in_flight.pop(key, None)
