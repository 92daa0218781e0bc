"""
Hydrant: weekly class and activity planner on a half-hour slot grid.
"""

from hydrant.activity import Activity, Class, InvalidSelectionError, NonClass, Section, SectionKind, Sections
from hydrant.model import Event, EventInput
from hydrant.schedule import Schedule
from hydrant.timeslot import Timeslot

__all__ = [
    "Activity",
    "Class",
    "Event",
    "EventInput",
    "InvalidSelectionError",
    "NonClass",
    "Schedule",
    "Section",
    "SectionKind",
    "Sections",
    "Timeslot",
]
