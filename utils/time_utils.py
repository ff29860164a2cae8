# -*- coding: utf-8 -*-
# ============================================================================ #
# BashPointsBot (BPB)                                                          #
# Copyright (c) 2025 BashPointsBot contributors                                #
# Licensed under the MIT License                                               #
# ============================================================================ #
from datetime import date, datetime, timezone
from typing import Optional, Union

import pytz

from utils.logging_utils import setup_logger

logger = setup_logger('bpb.time_utils')

TimezoneLike = Union[str, pytz.BaseTzInfo, None]


def _resolve_tz(tz: TimezoneLike):
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        try:
            return pytz.timezone(tz)
        except pytz.exceptions.UnknownTimeZoneError as e:
            logger.warning(f"Invalid timezone '{tz}', falling back to UTC: {e}")
            return timezone.utc
    return tz


def get_current_time(tz: TimezoneLike = None) -> datetime:
    """
    Returns the current time in the specified timezone.

    Args:
        tz: Timezone name (e.g. 'Europe/London') or tzinfo, None for UTC

    Returns:
        Current time as timezone-aware datetime
    """
    return datetime.now(_resolve_tz(tz))


def to_local_date(dt: datetime, tz: TimezoneLike = None) -> date:
    """
    Calendar date of *dt* as seen in the given timezone.

    Naive datetimes are treated as UTC, which is what Discord hands out for
    message timestamps on older library versions.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(_resolve_tz(tz)).date()


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp used for ledger rows."""
    return datetime.now(timezone.utc).isoformat()


def format_datetime_with_timezone(value: Optional[str], tz: TimezoneLike = None,
                                  fmt: str = '%d %b %Y %H:%M') -> str:
    """
    Formats an ISO timestamp from the datastore for display.

    Unparseable values are returned unchanged so the reply still carries
    whatever the store gave us.
    """
    if not value:
        return ''
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return str(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(_resolve_tz(tz))
    return f"{local.strftime(fmt)} {local.tzname()}"
