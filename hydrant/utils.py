"""
Slot grid helpers.

The week is a fixed grid of 5 days x 30 half-hour slots (8:00 to 23:00):

    Monday    -> slots   0..29
    Tuesday   -> slots  30..59
    ...
    Friday    -> slots 120..149

Slot numbers are the only interchange format between the model and any
renderer. For display they are mapped onto the week of Monday 2001-01-01,
which is used as a fixed reference week (no calendar-date meaning).
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta


# ---------------------------------------------------------------------------
# Grid constants
# ---------------------------------------------------------------------------

DAYS_PER_WEEK = 5
SLOTS_PER_DAY = 30
TOTAL_SLOTS = DAYS_PER_WEEK * SLOTS_PER_DAY
FIRST_HOUR = 8
SLOT_MINUTES = 30

# a date that is, conveniently enough, a monday
REFERENCE_MONDAY = datetime(2001, 1, 1)

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri"]

# Used when an activity has no background color of its own
FALLBACK_COLOR = "#4A5568"


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def to_date(slot: int) -> datetime:
    """
    Convert a slot number to the instant it starts, on the reference week.
    """
    day, offset = divmod(slot, SLOTS_PER_DAY)
    return REFERENCE_MONDAY + timedelta(days=day, hours=FIRST_HOUR, minutes=SLOT_MINUTES * offset)


def to_slot(date: datetime) -> int:
    """
    Convert an instant on the reference week to a slot number.

    The time of day is rounded to the nearest half-hour boundary, so
    9:10 -> 9:00 and 9:20 -> 9:30. The weekday is taken from the date itself,
    which lets callers pass instants of any week.
    """
    minutes = (date.hour - FIRST_HOUR) * 60 + date.minute + date.second / 60
    offset = math.floor(minutes / SLOT_MINUTES + 0.5)
    return date.weekday() * SLOTS_PER_DAY + offset


def slot_to_day_string(slot: int) -> str:
    """
    Short weekday name of a slot, e.g. 31 -> 'Tue'.
    """
    day = slot // SLOTS_PER_DAY
    return DAY_NAMES[day] if 0 <= day < len(DAY_NAMES) else str(day)


def format_time(dt: datetime) -> str:
    """
    12-hour wall-clock form, e.g. '9:30 AM', '12:00 PM'.
    """
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def slot_to_time_string(slot: int) -> str:
    """
    Wall-clock time at which a slot starts, e.g. 3 -> '9:30 AM'.
    """
    return format_time(to_date(slot))


def format_number(value: float, digits: int) -> str:
    """
    Format a number with a fixed number of decimals (4 -> '4.0').
    """
    return f"{value:.{digits}f}"
