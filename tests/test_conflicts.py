"""
Unit tests for conflict detection.

Definition used here:
- A conflict exists if two calendar entries of different events share a slot.
- Touching timeslots (end_slot + 1 == other start_slot) are NOT a conflict.
"""

import unittest
from datetime import datetime

from catalog_records import make_raw_class

from hydrant.activity import Class, NonClass
from hydrant.conflicts import find_conflicts, occupied_slots, rank_sections
from hydrant.timeslot import Timeslot


def _gym(start_hour: int, end_hour: int, day: int = 2) -> NonClass:
    activity = NonClass("Gym")
    activity.add_timeslot(datetime(2001, 1, day, start_hour), datetime(2001, 1, day, end_hour))
    return activity


class TestConflicts(unittest.TestCase):
    def setUp(self) -> None:
        self.cls = Class(make_raw_class(s=["l"]))
        self.lectures = self.cls.sections[0]
        self.lectures.select(self.lectures.sections[0])  # Tue/Thu 9:00-10:30

    def test_overlap_reported_once(self) -> None:
        confs = find_conflicts([self.cls, _gym(10, 11)])
        self.assertEqual(len(confs), 1)
        a, b = confs[0]
        self.assertEqual(a.title, "6.036 lec")
        self.assertEqual(b.title, "Gym")

    def test_no_overlap_touching_end(self) -> None:
        # lecture ends 10:30, gym starts 10:30
        gym = NonClass("Gym")
        gym.add_timeslot(datetime(2001, 1, 2, 10, 30), datetime(2001, 1, 2, 11, 30))
        self.assertEqual(find_conflicts([self.cls, gym]), [])

    def test_different_day_no_conflict(self) -> None:
        self.assertEqual(find_conflicts([self.cls, _gym(9, 10, day=3)]), [])

    def test_entries_of_same_event_never_conflict(self) -> None:
        gym = NonClass("Gym")
        gym.add_timeslot(datetime(2001, 1, 1, 9), datetime(2001, 1, 1, 11))
        gym.add_timeslot(datetime(2001, 1, 1, 10), datetime(2001, 1, 1, 12))
        self.assertEqual(find_conflicts([gym]), [])

    def test_unselected_groups_occupy_nothing(self) -> None:
        self.lectures.clear()
        self.assertEqual(occupied_slots([self.cls]), [])
        self.assertEqual(find_conflicts([self.cls, _gym(9, 10)]), [])

    def test_occupied_slots(self) -> None:
        slots = occupied_slots([self.cls, _gym(17, 18, day=1)])
        self.assertEqual(slots, [Timeslot(32, 3), Timeslot(92, 3), Timeslot(18, 2)])

    def test_rank_sections_prefers_fewest_conflicts(self) -> None:
        ranked = rank_sections(self.lectures, [Timeslot(32, 1), Timeslot(92, 1)])
        self.assertEqual(ranked, [self.lectures.sections[1], self.lectures.sections[0]])

    def test_rank_sections_keeps_order_on_ties(self) -> None:
        ranked = rank_sections(self.lectures, [])
        self.assertEqual(ranked, self.lectures.sections)


if __name__ == "__main__":
    unittest.main()
