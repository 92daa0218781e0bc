"""
Timeslot value type.

A timeslot is a contiguous run of half-hour slots on the weekly grid,
stored as (start_slot, num_slots). Two forms of "end" exist and must not be
mixed up:

- end_slot is INCLUSIVE: the last slot the timeslot occupies.
- from_start_end() / from_dates() take an EXCLUSIVE end: the first slot
  (or instant) after the timeslot. This matches how a calendar selection
  reports its range ("9:00 to 10:00" covers slots 2 and 3, not 4).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from hydrant.utils import SLOT_MINUTES, format_time, slot_to_day_string, to_date, to_slot


@dataclass(frozen=True)
class Timeslot:
    """
    A period of time spanning one or more thirty-minute slots.

    Equality is range equality: two timeslots are equal when they start and
    end on the same slots. Instances are immutable and hashable.
    """

    start_slot: int
    num_slots: int

    @classmethod
    def from_raw(cls, raw: Sequence[int]) -> "Timeslot":
        """
        Build from the raw catalog pair [start slot, length].
        """
        start, length = raw
        return cls(int(start), int(length))

    @classmethod
    def from_start_end(cls, start_slot: int, end_slot: int) -> "Timeslot":
        """
        Build from a start slot and an EXCLUSIVE end slot.
        """
        return cls(start_slot, end_slot - start_slot)

    @classmethod
    def from_dates(cls, start: datetime, end: datetime) -> "Timeslot":
        """
        Build from two instants, each rounded to the nearest slot boundary.
        The end instant is exclusive.
        """
        return cls.from_start_end(to_slot(start), to_slot(end))

    @property
    def end_slot(self) -> int:
        """Ending slot, inclusive."""
        return self.start_slot + self.num_slots - 1

    @property
    def start_time(self) -> datetime:
        """The start time, on the reference week."""
        return to_date(self.start_slot)

    @property
    def end_time(self) -> datetime:
        """The instant the last slot ends, on the reference week."""
        return self.start_time + timedelta(minutes=SLOT_MINUTES * self.num_slots)

    @property
    def hours(self) -> float:
        return self.num_slots / 2

    def conflicts(self, other: "Timeslot") -> bool:
        """
        True if the two inclusive slot ranges share at least one slot.
        """
        return self.start_slot <= other.end_slot and other.start_slot <= self.end_slot

    def to_display_string(self) -> str:
        """
        Human readable form, e.g. "Mon, 9:30 AM – 11:00 AM".
        """
        return (
            f"{slot_to_day_string(self.start_slot)}, "
            f"{format_time(self.start_time)} – {format_time(self.end_time)}"
        )

    def __str__(self) -> str:
        return self.to_display_string()
