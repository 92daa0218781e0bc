"""
Catalog loading.

The catalog JSON is produced by an external generator and is trusted to be
well-formed; records are wrapped as-is. Accepted top-level shapes:

    [ {record}, ... ]
    { "6.036": {record}, ... }
    { "classes": { "6.036": {record}, ... }, ... }

A missing or unreadable file never crashes the caller: it is logged and an
empty catalog is returned, so commands can still report "not found".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from hydrant.activity import Class
from hydrant.model import RawClass

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("catalog not found: %s", path)
        return {}
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("could not read catalog %s: %s", path, exc)
        return {}


def load_raw_classes(path: str | Path) -> dict[str, RawClass]:
    """
    Load raw class records keyed by class number.
    """
    data = _load_json(Path(path))

    if isinstance(data, dict) and isinstance(data.get("classes"), dict):
        data = data["classes"]

    records: list[Any]
    if isinstance(data, dict):
        records = list(data.values())
    elif isinstance(data, list):
        records = data
    else:
        records = []

    out: dict[str, RawClass] = {}
    for record in records:
        if isinstance(record, dict) and record.get("no"):
            out[str(record["no"])] = record  # type: ignore[assignment]

    logger.info("loaded %d classes from %s", len(out), path)
    return out


def load_classes(path: str | Path) -> dict[str, Class]:
    """
    Load the catalog and wrap every record in a Class, keyed by number.
    """
    return {number: Class(raw) for number, raw in load_raw_classes(path).items()}


def search_classes(classes: dict[str, Class], text: str) -> list[Class]:
    """
    Case-insensitive substring search over class number and name.
    """
    query = text.strip().lower()
    if not query:
        return []
    matches: list[Class] = []
    for cls in classes.values():
        hay = f"{cls.number} {cls.name}".lower()
        if query in hay:
            matches.append(cls)
    return matches
