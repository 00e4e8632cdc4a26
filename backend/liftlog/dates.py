"""Calendar-day arithmetic for the dashboard.

Every timestamp we store is a naive wall-clock value, so a calendar day is the
half-open window ``[midnight, next midnight)`` in those same terms.
"""
from __future__ import annotations
import re
from datetime import date, datetime, time, timedelta
from typing import NamedTuple
from zoneinfo import ZoneInfo

from liftlog.errors import ValidationFailed
from liftlog.settings import get_settings


_CALENDAR_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class DayWindow(NamedTuple):
    start: datetime
    end: datetime  # exclusive

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


def compute_day_window(day: date) -> DayWindow:
    start = datetime.combine(day, time.min)
    return DayWindow(start, start + timedelta(days=1))


def parse_calendar_date(value: str) -> date:
    """Parse the ``YYYY-MM-DD`` form used in query strings."""
    if not _CALENDAR_DATE.fullmatch(value):
        raise ValidationFailed("date", "expected a calendar date as YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationFailed("date", f"{value} is not a real calendar date")


def to_wall_clock(moment: datetime) -> datetime:
    # Naive values are already wall-clock; aware ones are pinned to WALL_CLOCK_TZ
    if moment.tzinfo is None:
        return moment
    zone = ZoneInfo(get_settings().WALL_CLOCK_TZ)
    return moment.astimezone(zone).replace(tzinfo=None)


def today() -> date:
    """Current calendar date in WALL_CLOCK_TZ, the zone stored times are pinned to."""
    return datetime.now(ZoneInfo(get_settings().WALL_CLOCK_TZ)).date()


def _ordinal_suffix(day: int) -> str:
    if 3 < day < 21:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_display_date(day: date) -> str:
    """``date(2025, 9, 1)`` -> ``"1st Sep 2025"``."""
    return f"{day.day}{_ordinal_suffix(day.day)} {day.strftime('%b %Y')}"
