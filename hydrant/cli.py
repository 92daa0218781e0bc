"""
CLI (Command Line Interface).

Quick terminal commands on top of a catalog JSON file, e.g.:

    hydrant search <text>
    hydrant info <number>
    hydrant sections <number>
    hydrant plan <number> [<number> ...] [--activity "Gym@Mon:17:00-18:30"] [--ics out.ics]

Global options (before the command):
    --catalog PATH   catalog JSON (default: hydrant/data/catalog.json)
    --verbose        debug logging
"""

from __future__ import annotations

import argparse
from dataclasses import asdict
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hydrant.activity import Class, NonClass
from hydrant.catalog import load_classes, search_classes
from hydrant.export_ics import export_event_inputs_to_ics
from hydrant.logging_config import setup_logging
from hydrant.schedule import Schedule
from hydrant.utils import DAY_NAMES, FIRST_HOUR, REFERENCE_MONDAY, SLOT_MINUTES, SLOTS_PER_DAY

console = Console()

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CATALOG = PACKAGE_DIR / "data" / "catalog.json"

MAX_RESULTS = 20


def _lookup(classes: dict[str, Class], number: str) -> Optional[Class]:
    cls = classes.get(number.strip())
    if cls is None:
        console.print(f"[red]Unknown class: {number}[/]")
    return cls


def _cmd_search(args: argparse.Namespace, classes: dict[str, Class]) -> int:
    """
    Search classes by substring match in number or name.
    """
    query = (args.text or "").strip()
    if not query:
        console.print("Please provide a search text.")
        return 1

    matches = search_classes(classes, query)
    if not matches:
        console.print("No results.")
        return 0

    table = Table(title=f"Search results (max {MAX_RESULTS})", box=box.SIMPLE)
    table.add_column("Number", style="bold cyan")
    table.add_column("Name")
    table.add_column("Units", justify="right")
    for cls in matches[:MAX_RESULTS]:
        table.add_row(escape(cls.number), escape(cls.name), f"{cls.total_units:g}")
    console.print(table)
    if len(matches) > MAX_RESULTS:
        console.print(f"... and {len(matches) - MAX_RESULTS} more results")
    return 0


def _cmd_info(args: argparse.Namespace, classes: dict[str, Class]) -> int:
    """
    Print the descriptive data of one class.
    """
    cls = _lookup(classes, args.number)
    if cls is None:
        return 1

    evals = cls.evals
    flags = [name for name, value in asdict(cls.flags).items() if value]
    related = cls.related
    desc = cls.description

    console.print(f"[bold cyan]{escape(cls.number)}[/] [bold]{escape(cls.name)}[/]")
    console.print(f"Units: {'-'.join(f'{u:g}' for u in cls.units)} | Hours: {cls.hours:g}")
    console.print(f"Rating: {evals.rating} | Hours: {evals.hours} | People: {evals.people}")
    console.print(f"Flags: {', '.join(flags) if flags else '-'}")
    if related.prereq:
        console.print(f"Prereqs: {related.prereq}")
    if related.same:
        console.print(f"Same as: {related.same}")
    if related.meets:
        console.print(f"Meets with: {related.meets}")
    if desc.description:
        console.print(f"\n{desc.description}")
    if desc.in_charge:
        console.print(f"In charge: {desc.in_charge}")
    for link in desc.extra_urls:
        console.print(f"- {link.label}: {link.url}")
    return 0


def _cmd_sections(args: argparse.Namespace, classes: dict[str, Class]) -> int:
    """
    List every section alternative of one class, grouped by kind.
    """
    cls = _lookup(classes, args.number)
    if cls is None:
        return 1

    if not cls.sections:
        console.print(f"{cls.number} has no scheduled sections.")
        return 0

    for secs in cls.sections:
        table = Table(title=f"{cls.number} {secs.name}", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Time")
        table.add_column("Room")
        table.add_column("Slots")
        for i, section in enumerate(secs.sections, start=1):
            slots = "; ".join(str(slot) for slot in section.timeslots)
            table.add_row(str(i), escape(section.raw_time), escape(section.room), slots)
        console.print(table)
    return 0


def parse_activity_spec(text: str) -> tuple[str, datetime, datetime]:
    """
    Parse "NAME@Day:HH:MM-HH:MM" (e.g. "Gym@Mon:17:00-18:30") into a name and
    two instants on the reference week. Raises ValueError on bad input.
    """
    name, sep, when = text.rpartition("@")
    if not sep or not name.strip():
        raise ValueError(f"Invalid activity: {text!r} (expected NAME@Day:HH:MM-HH:MM)")

    day_s, sep, times = when.partition(":")
    if not sep or day_s.strip().title() not in DAY_NAMES:
        raise ValueError(f"Invalid day in activity: {text!r}")
    day = DAY_NAMES.index(day_s.strip().title())

    start_s, sep, end_s = times.partition("-")
    if not sep:
        raise ValueError(f"Invalid time range in activity: {text!r}")

    monday = REFERENCE_MONDAY + timedelta(days=day)
    start = datetime.strptime(start_s.strip(), "%H:%M")
    end = datetime.strptime(end_s.strip(), "%H:%M")

    # must stay on the grid of the chosen day
    first = FIRST_HOUR * 60
    last = first + SLOTS_PER_DAY * SLOT_MINUTES
    start_min = start.hour * 60 + start.minute
    end_min = end.hour * 60 + end.minute
    if not first <= start_min < end_min <= last:
        raise ValueError(
            f"Activity must be within {FIRST_HOUR}:00-{last // 60}:00 on one day: {text!r}"
        )

    return (
        name.strip(),
        monday.replace(hour=start.hour, minute=start.minute),
        monday.replace(hour=end.hour, minute=end.minute),
    )


def _cmd_plan(args: argparse.Namespace, classes: dict[str, Class]) -> int:
    """
    Build a schedule from class numbers and activities, pick sections
    automatically, and print the resulting week.
    """
    schedule = Schedule(catalog_numbers=classes.keys())

    for number in args.numbers:
        cls = _lookup(classes, number)
        if cls is None:
            return 1
        schedule.add_activity(cls)

    by_name: dict[str, NonClass] = {}
    for spec in args.activity or []:
        try:
            name, start, end = parse_activity_spec(spec)
        except ValueError as exc:
            console.print(f"[red]{escape(str(exc))}[/]")
            return 1
        if name not in by_name:
            by_name[name] = schedule.new_non_class(name)
        by_name[name].add_timeslot(start, end)

    schedule.auto_select()

    entries = sorted(schedule.event_inputs, key=lambda e: e.slot.start_slot)
    if not entries:
        console.print("Nothing scheduled.")
        return 0

    table = Table(title="Week", box=box.SIMPLE)
    table.add_column("Time")
    table.add_column("Title", style="bold")
    table.add_column("Room")
    for entry in entries:
        table.add_row(str(entry.slot), f"[{entry.color}]{escape(entry.title)}[/]", escape(entry.room or ""))
    console.print(table)
    console.print(f"Total: {schedule.total_units:g} units | {schedule.total_hours:g} hours/week")

    conflicts = schedule.conflicts
    if not conflicts:
        console.print("No conflicts found.")
    else:
        console.print(f"[yellow]Conflicts found: {len(conflicts)}[/]")
        for a, b in conflicts:
            console.print(f"- {escape(a.title)} ({a.slot})  <->  {escape(b.title)} ({b.slot})")

    if args.ics:
        out_path = Path(args.ics)
        if out_path.suffix.lower() != ".ics":
            out_path = out_path.with_suffix(".ics")
        n = export_event_inputs_to_ics(entries, out_path)
        console.print(f"Exported {n} events to: {out_path}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="hydrant", description="Hydrant weekly planner CLI")
    parser.add_argument("--catalog", type=Path, default=DEFAULT_CATALOG, help="Catalog JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search for classes")
    p_search.add_argument("text", type=str, help="Search text")

    p_info = sub.add_parser("info", help="Show class details")
    p_info.add_argument("number", type=str, help="Class number (e.g. 6.036)")

    p_sections = sub.add_parser("sections", help="List section alternatives of a class")
    p_sections.add_argument("number", type=str, help="Class number (e.g. 6.036)")

    p_plan = sub.add_parser("plan", help="Plan a week from class numbers")
    p_plan.add_argument("numbers", nargs="+", help="Class numbers")
    p_plan.add_argument(
        "--activity",
        action="append",
        help='Personal activity, e.g. "Gym@Mon:17:00-18:30" (repeatable)',
    )
    p_plan.add_argument("--ics", type=str, default="", help="Export the week to this .ics file")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    classes = load_classes(args.catalog)

    if args.command == "search":
        raise SystemExit(_cmd_search(args, classes))
    if args.command == "info":
        raise SystemExit(_cmd_info(args, classes))
    if args.command == "sections":
        raise SystemExit(_cmd_sections(args, classes))
    if args.command == "plan":
        raise SystemExit(_cmd_plan(args, classes))

    raise SystemExit(2)
