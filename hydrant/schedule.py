"""
Schedule: the set of activities a user currently has on their calendar.

This is the session state that sits between the activity model and a
renderer:
- activities are added and removed here (no duplicates)
- new activities get a color from a fixed palette
- auto_select() fills in section choices, leaving locked groups untouched

Nothing here is persisted.
"""

from __future__ import annotations

import logging
from typing import Collection, Optional

from hydrant.activity import Activity, Class, NonClass
from hydrant.conflicts import find_conflicts, rank_sections
from hydrant.model import Event, EventInput
from hydrant.timeslot import Timeslot

logger = logging.getLogger(__name__)

PALETTE = [
    "#16A085",
    "#2980B9",
    "#9B59B6",
    "#C0392B",
    "#D35400",
    "#F39C12",
    "#27AE60",
    "#7F8C8D",
]


class Schedule:
    """
    Ordered collection of selected activities.

    catalog_numbers is the set of class numbers of the loaded catalog; ids of
    new non-class activities are kept disjoint from it.
    """

    def __init__(self, catalog_numbers: Collection[str] = ()) -> None:
        self.catalog_numbers = set(catalog_numbers)
        self.activities: list[Activity] = []

    def __contains__(self, activity: Activity) -> bool:
        return any(activity is own for own in self.activities)

    def add_activity(self, activity: Activity) -> None:
        if activity in self:
            logger.debug("%r already selected", activity)
            return
        if activity.background_color is None:
            activity.background_color = self._next_color()
        self.activities.append(activity)
        logger.info("added %r (%d activities)", activity, len(self.activities))

    def remove_activity(self, activity: Activity) -> None:
        self.activities = [own for own in self.activities if own is not activity]
        logger.info("removed %r (%d activities)", activity, len(self.activities))

    def new_non_class(self, name: str = "New Activity") -> NonClass:
        """
        Create a non-class activity and add it to the schedule.
        """
        taken = self.catalog_numbers | {activity.id for activity in self.activities}
        activity = NonClass(name, taken_ids=taken)
        self.add_activity(activity)
        return activity

    def _next_color(self) -> str:
        used = {activity.background_color for activity in self.activities}
        for color in PALETTE:
            if color not in used:
                return color
        return PALETTE[len(self.activities) % len(PALETTE)]

    @property
    def classes(self) -> list[Class]:
        return [activity for activity in self.activities if isinstance(activity, Class)]

    @property
    def events(self) -> list[Event]:
        out: list[Event] = []
        for activity in self.activities:
            out.extend(activity.events)
        return out

    @property
    def event_inputs(self) -> list[EventInput]:
        out: list[EventInput] = []
        for event in self.events:
            out.extend(event.event_inputs)
        return out

    @property
    def total_hours(self) -> float:
        return sum(activity.hours for activity in self.activities)

    @property
    def total_units(self) -> float:
        return sum(cls.total_units for cls in self.classes)

    @property
    def conflicts(self) -> list[tuple[EventInput, EventInput]]:
        return find_conflicts(self.activities)

    def find_class(self, number: str) -> Optional[Class]:
        for cls in self.classes:
            if cls.number == number:
                return cls
        return None

    def auto_select(self) -> None:
        """
        Pick a section for every unlocked group, greedily preferring the
        alternative with the fewest conflicts.

        Fixed slots are placed first: non-class activities and the current
        choice of locked groups. Unlocked groups are then filled in schedule
        order, each seeing the choices made before it.
        """
        occupied: list[Timeslot] = []
        for activity in self.activities:
            if isinstance(activity, NonClass):
                occupied.extend(activity.timeslots)
                continue
            for secs in activity.sections:
                if secs.locked and secs.selected is not None:
                    occupied.extend(secs.selected.timeslots)

        for cls in self.classes:
            for secs in cls.sections:
                if secs.locked or not secs.sections:
                    continue
                best = rank_sections(secs, occupied)[0]
                logger.debug(
                    "%s %s -> %s (%d conflicts)",
                    cls.number,
                    secs.short_name,
                    best.raw_time,
                    best.count_conflicts(occupied),
                )
                secs.select(best)
                occupied.extend(best.timeslots)
