"""
Unit tests for the Schedule session state.

auto_select contract:
- locked groups keep their selection (even none)
- unlocked groups get their lowest-conflict alternative
"""

import unittest
from datetime import datetime

from catalog_records import make_raw_class

from hydrant.activity import Class, SectionKind
from hydrant.schedule import PALETTE, Schedule


class TestSchedule(unittest.TestCase):
    def setUp(self) -> None:
        self.cls = Class(make_raw_class())
        self.schedule = Schedule(catalog_numbers={"6.036"})

    def test_add_assigns_palette_colors(self) -> None:
        other = Class(make_raw_class(no="18.06", co="18"))
        self.schedule.add_activity(self.cls)
        self.schedule.add_activity(other)
        self.assertEqual(self.cls.background_color, PALETTE[0])
        self.assertEqual(other.background_color, PALETTE[1])

    def test_add_keeps_existing_color(self) -> None:
        self.cls.background_color = "#000000"
        self.schedule.add_activity(self.cls)
        self.assertEqual(self.cls.background_color, "#000000")

    def test_add_twice_is_noop(self) -> None:
        self.schedule.add_activity(self.cls)
        self.schedule.add_activity(self.cls)
        self.assertEqual(len(self.schedule.activities), 1)

    def test_remove_activity(self) -> None:
        self.schedule.add_activity(self.cls)
        gym = self.schedule.new_non_class("Gym")
        self.schedule.remove_activity(self.cls)
        self.assertEqual(self.schedule.activities, [gym])
        self.assertNotIn(self.cls, self.schedule)

    def test_new_non_class(self) -> None:
        gym = self.schedule.new_non_class("Gym")
        self.assertIn(gym, self.schedule)
        self.assertEqual(gym.name, "Gym")
        self.assertNotEqual(gym.id, "6.036")
        self.assertIsNotNone(gym.background_color)

    def test_totals(self) -> None:
        self.schedule.add_activity(self.cls)
        gym = self.schedule.new_non_class("Gym")
        gym.add_timeslot(datetime(2001, 1, 1, 17), datetime(2001, 1, 1, 18))
        self.assertEqual(self.schedule.total_units, 12)
        self.assertEqual(self.schedule.total_hours, 11.48 + 1)

    def test_find_class(self) -> None:
        self.schedule.add_activity(self.cls)
        self.assertIs(self.schedule.find_class("6.036"), self.cls)
        self.assertIsNone(self.schedule.find_class("18.06"))

    def test_auto_select_avoids_non_class(self) -> None:
        self.schedule.add_activity(self.cls)
        gym = self.schedule.new_non_class("Gym")
        # Tuesday 9:00-10:00 collides with lecture A and nothing else
        gym.add_timeslot(datetime(2001, 1, 2, 9), datetime(2001, 1, 2, 10))

        self.schedule.auto_select()

        lectures = self.cls.section_group(SectionKind.LECTURE)
        recitations = self.cls.section_group(SectionKind.RECITATION)
        assert lectures is not None and recitations is not None
        self.assertIs(lectures.selected, lectures.sections[1])
        self.assertIs(recitations.selected, recitations.sections[0])
        self.assertEqual(self.schedule.conflicts, [])

    def test_auto_select_leaves_locked_groups(self) -> None:
        self.schedule.add_activity(self.cls)
        lectures = self.cls.section_group(SectionKind.LECTURE)
        recitations = self.cls.section_group(SectionKind.RECITATION)
        assert lectures is not None and recitations is not None

        lectures.select(lectures.sections[0])
        lectures.locked = True
        recitations.locked = True

        gym = self.schedule.new_non_class("Gym")
        gym.add_timeslot(datetime(2001, 1, 2, 9), datetime(2001, 1, 2, 10))
        self.schedule.auto_select()

        self.assertIs(lectures.selected, lectures.sections[0])
        self.assertIsNone(recitations.selected)
        self.assertEqual(len(self.schedule.conflicts), 1)

    def test_auto_select_sees_earlier_choices(self) -> None:
        # two classes whose only lecture options overlap with each other
        a = Class(make_raw_class(no="A.1", co="A", s=["l"], l=[[[[10, 2]], "R1"], [[[40, 2]], "R2"]], lr=["x", "y"]))
        b = Class(make_raw_class(no="B.1", co="B", s=["l"], l=[[[[10, 2]], "R3"], [[[70, 2]], "R4"]], lr=["x", "y"]))
        self.schedule.add_activity(a)
        self.schedule.add_activity(b)

        self.schedule.auto_select()

        self.assertEqual(a.sections[0].selected.room, "R1")
        self.assertEqual(b.sections[0].selected.room, "R4")

    def test_events_and_inputs(self) -> None:
        self.schedule.add_activity(self.cls)
        self.schedule.auto_select()
        self.assertEqual([e.name for e in self.schedule.events], ["6.036 lec", "6.036 rec"])
        self.assertEqual(len(self.schedule.event_inputs), 3)
        self.assertTrue(all(e.color == PALETTE[0] for e in self.schedule.event_inputs))


if __name__ == "__main__":
    unittest.main()
