# kappagotchi/core/calendar.py
"""
Game calendar: absolute instants <-> ``YYYY-MM-DD`` day identifiers.

Uses a fixed UTC offset in minutes, never a timezone database, so a day
boundary is the same instant for every player sharing the offset.
"""
from __future__ import annotations
import math
from datetime import datetime, timedelta, timezone

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
DAYS_PER_YEAR = 365

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_game_day(instant: float, utc_offset_minutes: int) -> str:
    """Return the game day containing ``instant`` at the given offset."""
    shifted = _EPOCH + timedelta(seconds=instant + utc_offset_minutes * SECONDS_PER_MINUTE)
    return f"{shifted.year:04d}-{shifted.month:02d}-{shifted.day:02d}"


def day_start_instant(day: str, hour: int, minute: int, utc_offset_minutes: int) -> float:
    """Return the instant of ``hour:minute`` on ``day`` at the given offset."""
    year, month, dom = (int(part) for part in day.split("-"))
    naive = datetime(year, month, dom, hour, minute, tzinfo=timezone.utc)
    return (naive - _EPOCH).total_seconds() - utc_offset_minutes * SECONDS_PER_MINUTE


def age_in_days(now: float, born_at: float) -> int:
    """Whole days elapsed since ``born_at``, never negative."""
    return max(0, math.floor((now - born_at) / SECONDS_PER_DAY))


def hours(value: float) -> float:
    """Hours -> seconds."""
    return value * SECONDS_PER_HOUR


def days(value: float) -> float:
    """Days -> seconds."""
    return value * SECONDS_PER_DAY
