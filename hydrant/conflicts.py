"""
Conflict detection.

Given the selected activities, detect calendar entries that overlap.
Overlap rule (inclusive slot ranges):
    start_slot <= other_end_slot AND other_start_slot <= end_slot

Entries of the same Event never conflict with each other; a NonClass with
two touching timeslots is not in conflict with itself.
"""

from __future__ import annotations

from typing import Iterable

from hydrant.activity import Activity, Section, Sections
from hydrant.model import EventInput
from hydrant.timeslot import Timeslot


def occupied_slots(activities: Iterable[Activity]) -> list[Timeslot]:
    """
    All timeslots currently occupied by the activities' events.
    """
    out: list[Timeslot] = []
    for activity in activities:
        for event in activity.events:
            out.extend(event.slots)
    return out


def find_conflicts(activities: Iterable[Activity]) -> list[tuple[EventInput, EventInput]]:
    """
    Find overlapping entry pairs (A,B), each pair appears once (i<j).
    """
    conflicts: list[tuple[EventInput, EventInput]] = []

    # Tag each entry with the index of its event so siblings can be skipped
    entries: list[tuple[int, EventInput]] = []
    event_index = 0
    for activity in activities:
        for event in activity.events:
            for entry in event.event_inputs:
                entries.append((event_index, entry))
            event_index += 1

    # O(n^2) is fine for a weekly schedule
    for i in range(len(entries)):
        e1, a = entries[i]
        for j in range(i + 1, len(entries)):
            e2, b = entries[j]
            if e1 == e2:
                continue
            if a.slot.conflicts(b.slot):
                conflicts.append((a, b))

    return conflicts


def rank_sections(group: Sections, occupied: list[Timeslot]) -> list[Section]:
    """
    The group's sections ordered by conflict severity against `occupied`.
    Ties keep catalog order.
    """
    return sorted(group.sections, key=lambda section: section.count_conflicts(occupied))
