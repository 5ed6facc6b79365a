# -*- coding: utf-8 -*-
"""
Time-of-day helpers. Every timestamp in a run is anchored to one reference
calendar day so that shifting is plain time-of-day arithmetic.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional


def set_clock(reference: datetime, hour: int, minute: int, second: int, millisecond: int) -> datetime:
    """Return `reference`'s calendar day with the given time-of-day fields."""
    return datetime(
        reference.year, reference.month, reference.day,
        hour, minute, second, millisecond * 1000,
        tzinfo=reference.tzinfo,
    )


def day_zero(now: Optional[datetime] = None) -> datetime:
    if now is None:
        now = datetime.now()
    return set_clock(now, 0, 0, 0, 0)


def reproject(reference: datetime, instant: datetime) -> datetime:
    """Move `instant`'s time-of-day onto `reference`'s calendar day."""
    return set_clock(reference, instant.hour, instant.minute, instant.second, instant.microsecond // 1000)
