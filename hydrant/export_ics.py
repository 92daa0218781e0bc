"""
iCalendar (.ics) export.

We convert materialized calendar entries into a file that can be imported
into Google Calendar, Outlook or Apple Calendar.

Entries are anchored to the reference week (2001-01-01). Passing week_of
moves them onto the Monday-based week containing that date.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional

from hydrant.model import EventInput
from hydrant.utils import REFERENCE_MONDAY

logger = logging.getLogger(__name__)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(dt: datetime) -> str:
    """
    ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    return dt.strftime("%Y%m%dT%H%M00")


def _week_shift(week_of: Optional[date]) -> timedelta:
    if week_of is None:
        return timedelta(0)
    monday = week_of - timedelta(days=week_of.weekday())
    return datetime(monday.year, monday.month, monday.day) - REFERENCE_MONDAY


def export_event_inputs_to_ics(
    entries: Iterable[EventInput],
    out_path: str | Path,
    week_of: Optional[date] = None,
) -> int:
    """
    Export entries to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    shift = _week_shift(week_of)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//Hydrant//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for entry in entries:
        dtstart = _dt_local(entry.start + shift)
        dtend = _dt_local(entry.end + shift)
        summary = entry.title.strip() or "Hydrant Event"
        uid = f"{entry.activity.id}-{entry.title.replace(' ', '_')}-{entry.slot.start_slot}-{entry.slot.num_slots}"

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(uid)}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(summary)}")
        if entry.room:
            lines.append(f"LOCATION:{_ics_escape(entry.room)}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    logger.info("exported %d events to %s", count, out)
    return count
