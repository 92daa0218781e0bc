"""
Central data model definitions used across the project.

This module defines:
- the raw catalog record shape, exactly as the external catalog generator
  writes it (short keys, decoded only by hydrant.activity.Class)
- the small value records derived from a class (flags, evals, links)
- Event / EventInput, the derived calendar entries handed to a renderer
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Literal, Optional, Tuple, TypedDict, Union

from hydrant.timeslot import Timeslot
from hydrant.utils import FALLBACK_COLOR

if TYPE_CHECKING:
    from hydrant.activity import Class, NonClass


# Raw timeslot format: [start slot, length of timeslot]
RawTimeslot = Tuple[int, int]

# Raw section format: [[[10, 2], [70, 2]], "34-101"]
RawSection = Tuple[List[RawTimeslot], str]


class RawClass(TypedDict):
    """
    One class record of the catalog JSON. Produced by an external generator
    and assumed to be well-formed.
    """

    no: str  # class number, e.g. "6.036"
    co: str  # course number, e.g. "6"
    cl: str  # class number without course, e.g. "036"
    tb: bool  # some section is not scheduled yet

    s: List[Literal["l", "r", "b"]]  # section kinds that exist
    l: List[RawSection]  # lecture sections
    r: List[RawSection]  # recitation sections
    b: List[RawSection]  # lab sections
    lr: List[str]  # raw lecture times, e.g. "T9.301-11" or "TR1,F2"
    rr: List[str]
    br: List[str]

    hh: bool  # HASS-H
    ha: bool  # HASS-A
    hs: bool  # HASS-S
    he: bool  # HASS-E
    ci: bool  # CI-H
    cw: bool  # CI-HW
    re: bool  # REST
    la: bool  # institute lab
    pl: bool  # partial institute lab

    u1: float  # lecture or recitation units
    u2: float  # lab or field work units
    u3: float  # outside class units

    le: Literal["U", "G"]
    sa: str  # same class as, e.g. "21A.103, WGS.225"
    mw: str  # meets with

    t: List[Literal["FA", "JA", "SP", "SU"]]
    pr: str

    d: str  # description
    n: str  # name, e.g. "Algebra I"
    i: str  # in-charge

    v: bool  # meets virtually

    nx: bool  # NOT offered next year
    rp: bool  # can be repeated for credit
    u: str  # class website
    f: bool  # has final

    ra: float  # rating out of 7.0; 0 means no evals
    h: float  # hours per week from evals
    si: float  # class size from evals


@dataclass(frozen=True)
class Flags:
    """
    Boolean properties of a class, used for filtering.
    """

    nonext: bool
    under: bool
    grad: bool
    fall: bool
    iap: bool
    spring: bool
    summer: bool
    repeat: bool
    rest: bool
    lab: bool
    part_lab: bool
    hass: bool
    hass_h: bool
    hass_a: bool
    hass_s: bool
    hass_e: bool
    cih: bool
    cihw: bool
    notcih: bool
    final: bool
    nofinal: bool
    le9units: bool


@dataclass(frozen=True)
class Evals:
    rating: str
    hours: str
    people: str


@dataclass(frozen=True)
class Related:
    """
    Related classes, free text that usually contains class numbers.
    """

    prereq: str
    same: str
    meets: str


@dataclass(frozen=True)
class ExtraUrl:
    label: str
    url: str


@dataclass(frozen=True)
class Description:
    description: str
    in_charge: str
    extra_urls: List[ExtraUrl] = field(default_factory=list)


@dataclass
class EventInput:
    """
    One render-ready calendar entry (a single timeslot of an Event).

    `activity` is an opaque reference back to the owner; renderers use it
    for identity only.
    """

    title: str
    start: datetime
    end: datetime
    color: str
    room: Optional[str]
    activity: "Union[Class, NonClass]"
    slot: Timeslot

    def to_dict(self) -> dict[str, Any]:
        """
        Plain mapping in the shape calendar widgets expect.
        """
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "backgroundColor": self.color,
            "borderColor": self.color,
            "room": self.room,
        }


@dataclass
class Event:
    """
    A group of calendar entries, all of the same name, room and color.

    Events are derived views: they are rebuilt from the owning activity on
    every access and never stored.
    """

    activity: "Union[Class, NonClass]"
    name: str
    slots: List[Timeslot]
    room: Optional[str] = None

    @property
    def event_inputs(self) -> list[EventInput]:
        color = self.activity.background_color or FALLBACK_COLOR
        return [
            EventInput(
                title=self.name,
                start=slot.start_time,
                end=slot.end_time,
                color=color,
                room=self.room,
                activity=self.activity,
                slot=slot,
            )
            for slot in self.slots
        ]
