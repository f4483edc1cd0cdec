"""Timezone and clock helpers for crbmnl."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from datetime import tzinfo

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


def now_utc() -> datetime.datetime:
    """Current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def now_in(tz: tzinfo, clock: Clock = now_utc) -> datetime.datetime:
    """Current time converted to ``tz``."""
    return clock().astimezone(tz)


def local_midnight(day: datetime.date, tz: tzinfo) -> datetime.datetime:
    """Midnight at the start of ``day`` in ``tz``.

    With zoneinfo, a midnight inside a DST gap resolves to the earlier offset
    (fold=0), matching "earliest" local time resolution.
    """
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=tz)


def day_window(
    now: datetime.datetime, tz: tzinfo, days: int
) -> tuple[datetime.datetime, datetime.datetime]:
    """UTC ``(start, end)`` covering ``days`` days from local midnight of ``now``.

    The end is computed in local wall-clock days, so a window crossing a DST
    change still ends at local midnight.
    """
    today = now.astimezone(tz).date()
    start = local_midnight(today, tz)
    end = local_midnight(today + datetime.timedelta(days=days), tz)
    utc = datetime.timezone.utc
    logger.debug("Fetch window %s .. %s (%s)", start.isoformat(), end.isoformat(), tz)
    return start.astimezone(utc), end.astimezone(utc)
