"""
Activities: catalog classes and user-created non-class activities.

Ownership flows downward only:

    Class -> Sections (one group per kind) -> Section -> Timeslot
    NonClass -> Timeslot

Section.secs and Sections.cls are navigation links back to the owner; they
are never used to mutate it. Every derived getter recomputes from the
current state, nothing is cached.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from enum import IntEnum
from typing import Collection, Dict, List, Optional, Tuple, Union

from hydrant.model import Description, Evals, Event, ExtraUrl, Flags, RawClass, RawSection, Related
from hydrant.timeslot import Timeslot
from hydrant.utils import format_number

logger = logging.getLogger(__name__)


# Extra description links per course prefix: (label, url template).
# Templates are formatted with the class number. Extend by adding entries.
COURSE_LINKS: Dict[str, List[Tuple[str, str]]] = {
    "6": [("HKN Underground Guide", "https://underground-guide.mit.edu/search?q={number}")],
    "18": [("Course 18 Underground Guide", "http://course18.guide/{number}-spring-2021.html")],
}

CATALOG_URL = "http://student.mit.edu/catalog/search.cgi?search={number}"
EVALUATIONS_URL = (
    "https://sisapp.mit.edu/ose-rpt/subjectEvaluationSearch.htm?search=Search&subjectCode={number}"
)


class InvalidSelectionError(ValueError):
    """Raised when selecting a section that does not belong to the group."""


class SectionKind(IntEnum):
    """
    Kind of a section group. The integer value is the display order.
    """

    LECTURE = 0
    RECITATION = 1
    LAB = 2

    @classmethod
    def from_code(cls, code: str) -> "SectionKind":
        return _KIND_BY_CODE[code]

    @property
    def code(self) -> str:
        """Single-letter key used in the raw record ('l', 'r', 'b')."""
        return _CODE_BY_KIND[self]

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_CODE_BY_KIND = {SectionKind.LECTURE: "l", SectionKind.RECITATION: "r", SectionKind.LAB: "b"}
_KIND_BY_CODE = {code: kind for kind, code in _CODE_BY_KIND.items()}
_SHORT_NAMES = {SectionKind.LECTURE: "lec", SectionKind.RECITATION: "rec", SectionKind.LAB: "lab"}
_LABELS = {SectionKind.LECTURE: "Lecture", SectionKind.RECITATION: "Recitation", SectionKind.LAB: "Lab"}


class Section:
    """
    An array of timeslots that meet in the same room for the same purpose.
    Every Section belongs to exactly one Sections group.
    """

    def __init__(self, secs: "Sections", raw_time: str, section: RawSection) -> None:
        self.secs = secs
        # e.g. "MW9-11" or "T2,F1"
        self.raw_time = raw_time
        raw_slots, room = section
        self.timeslots: List[Timeslot] = [Timeslot.from_raw(slot) for slot in raw_slots]
        self.room = room

    def count_conflicts(self, current_slots: List[Timeslot]) -> int:
        """
        Number of (own slot, occupied slot) pairs that overlap.

        This is a severity score for ranking alternatives, not an exact
        conflict count: overlapping entries in current_slots are not
        deduplicated.
        """
        conflicts = 0
        for slot in self.timeslots:
            for other in current_slots:
                conflicts += 1 if slot.conflicts(other) else 0
        return conflicts

    def __repr__(self) -> str:
        return f"Section({self.secs.cls.number} {self.secs.short_name} {self.raw_time!r} @ {self.room!r})"


class Sections:
    """
    A group of Section alternatives of one kind (lecture, recitation or lab).
    At most one of them is selected at a time.

    `locked` is advisory: select() does not check it. Schedule.auto_select()
    leaves locked groups alone.
    """

    def __init__(
        self,
        cls: "Class",
        kind: SectionKind,
        raw_times: List[str],
        secs: List[RawSection],
        locked: bool = False,
    ) -> None:
        self.cls = cls
        self.kind = kind
        self.sections: List[Section] = [
            Section(self, raw_times[i] if i < len(raw_times) else "", sec) for i, sec in enumerate(secs)
        ]
        self.locked = locked
        self.selected: Optional[Section] = None

    @property
    def short_name(self) -> str:
        return self.kind.short_name

    @property
    def name(self) -> str:
        return self.kind.label

    def select(self, section: Section) -> None:
        """
        Select one of this group's sections.

        Raises InvalidSelectionError for a section of another group; the
        current selection is kept in that case.
        """
        if not any(section is own for own in self.sections):
            raise InvalidSelectionError(
                f"section {section!r} is not a {self.short_name} section of {self.cls.number}"
            )
        self.selected = section
        logger.debug("%s %s: selected %s", self.cls.number, self.short_name, section.raw_time)

    def clear(self) -> None:
        self.selected = None

    @property
    def event(self) -> Optional[Event]:
        """The event for the selected section, or None."""
        if self.selected is None:
            return None
        return Event(
            self.cls,
            f"{self.cls.number} {self.short_name}",
            list(self.selected.timeslots),
            self.selected.room,
        )


class Class:
    """
    An entire class, e.g. 6.036, and its selected sections.

    Everything except the section selections and background_color is derived
    from the raw catalog record on each access.
    """

    def __init__(self, raw_class: RawClass) -> None:
        self.raw_class = raw_class
        self.background_color: Optional[str] = None
        groups = []
        for code in raw_class.get("s", []):
            kind = SectionKind.from_code(code)
            groups.append(
                Sections(
                    self,
                    kind,
                    raw_class.get(f"{code}r", []),  # type: ignore[misc]
                    raw_class.get(code, []),  # type: ignore[misc]
                )
            )
        self.sections: List[Sections] = sorted(groups, key=lambda secs: secs.kind)

    @property
    def id(self) -> str:
        return self.number

    @property
    def name(self) -> str:
        """Name, e.g. "Introduction to Machine Learning"."""
        return self.raw_class["n"]

    @property
    def number(self) -> str:
        """Number, e.g. "6.036"."""
        return self.raw_class["no"]

    @property
    def course(self) -> str:
        """Course, e.g. "6"."""
        return self.raw_class["co"]

    @property
    def units(self) -> List[float]:
        """Units [in class, lab, out of class]."""
        return [self.raw_class["u1"], self.raw_class["u2"], self.raw_class["u3"]]

    @property
    def total_units(self) -> float:
        return sum(self.units)

    @property
    def hours(self) -> float:
        """Hours per week from evals if present, otherwise total units."""
        return self.raw_class.get("h") or self.total_units

    @property
    def events(self) -> List[Event]:
        events = [secs.event for secs in self.sections]
        return [event for event in events if event is not None]

    def section_group(self, kind: SectionKind) -> Optional[Sections]:
        for secs in self.sections:
            if secs.kind == kind:
                return secs
        return None

    @property
    def flags(self) -> Flags:
        raw = self.raw_class
        terms = raw.get("t", [])
        return Flags(
            nonext=raw["nx"],
            under=raw["le"] == "U",
            grad=raw["le"] == "G",
            fall="FA" in terms,
            iap="JA" in terms,
            spring="SP" in terms,
            summer="SU" in terms,
            repeat=raw["rp"],
            rest=raw["re"],
            lab=raw["la"],
            part_lab=raw["pl"],
            hass=raw["hh"] or raw["ha"] or raw["hs"] or raw["he"],
            hass_h=raw["hh"],
            hass_a=raw["ha"],
            hass_s=raw["hs"],
            hass_e=raw["he"],
            cih=raw["ci"],
            cihw=raw["cw"],
            notcih=not raw["ci"] and not raw["cw"],
            final=raw["f"],
            nofinal=not raw["f"],
            le9units=self.total_units <= 9,
        )

    @property
    def evals(self) -> Evals:
        """Evals, or N/A when the record carries none (rating == 0)."""
        raw = self.raw_class
        if raw.get("ra", 0) == 0:
            return Evals(rating="N/A", hours="N/A", people="N/A")
        return Evals(
            rating=f"{format_number(raw['ra'], 1)}/7.0",
            hours=format_number(raw["h"], 1),
            people=format_number(raw["si"], 1),
        )

    @property
    def related(self) -> Related:
        return Related(prereq=self.raw_class["pr"], same=self.raw_class["sa"], meets=self.raw_class["mw"])

    @property
    def description(self) -> Description:
        """
        Description, in-charge, and links that should appear after the
        description (catalog, evaluations, course-specific guides).
        """
        number = self.number
        extra_urls = [
            ExtraUrl("Course Catalog", CATALOG_URL.format(number=number)),
            ExtraUrl("Class Evaluations", EVALUATIONS_URL.format(number=number)),
        ]
        if self.raw_class.get("u"):
            extra_urls.insert(0, ExtraUrl("More Info", self.raw_class["u"]))
        for label, template in COURSE_LINKS.get(self.course, []):
            extra_urls.append(ExtraUrl(label, template.format(number=number)))

        return Description(
            description=self.raw_class["d"],
            in_charge=self.raw_class["i"],
            extra_urls=extra_urls,
        )

    def add_timeslot(self, start: datetime, end: datetime) -> None:
        # Catalog sections are not user-editable.
        logger.debug("ignoring add_timeslot on class %s", self.number)

    def remove_timeslot(self, slot: Timeslot) -> None:
        logger.debug("ignoring remove_timeslot on class %s", self.number)

    def __repr__(self) -> str:
        return f"Class({self.number!r})"


def new_activity_id(taken: Collection[str] = ()) -> str:
    """
    Random identifier for a non-class activity, distinct from `taken`
    (typically the catalog class numbers).
    """
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate


class NonClass:
    """
    A user-created activity (e.g. "Gym") owning its timeslots directly.
    """

    def __init__(self, name: str = "New Activity", taken_ids: Collection[str] = ()) -> None:
        self.id = new_activity_id(taken_ids)
        self.name = name
        self.background_color: Optional[str] = None
        self.timeslots: List[Timeslot] = []

    @property
    def hours(self) -> float:
        return sum(slot.hours for slot in self.timeslots)

    @property
    def events(self) -> List[Event]:
        return [Event(self, self.name, list(self.timeslots), None)]

    def add_timeslot(self, start: datetime, end: datetime) -> None:
        """
        Add a timeslot spanning start to end (end exclusive). Adding a range
        that is already present, or an empty range, does nothing.
        """
        slot = Timeslot.from_dates(start, end)
        if slot.num_slots < 1:
            logger.debug("%s: ignoring empty range %s - %s", self.name, start, end)
            return
        if slot in self.timeslots:
            return
        self.timeslots.append(slot)

    def remove_timeslot(self, slot: Timeslot) -> None:
        """Remove every timeslot with the same range as `slot`."""
        self.timeslots = [own for own in self.timeslots if own != slot]

    def __repr__(self) -> str:
        return f"NonClass({self.name!r})"


Activity = Union[Class, NonClass]
