"""
Logging setup for the CLI: one rich console handler on the root logger.
"""

import logging
import os
from typing import Optional

from rich.logging import RichHandler


def setup_logging(level: Optional[str] = None) -> None:
    """
    - Console only, through rich
    - Level: argument, else HYDRANT_LOG_LEVEL, else WARNING
    """
    level = (level or os.getenv("HYDRANT_LOG_LEVEL", "WARNING")).upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    existing = [h for h in root.handlers if isinstance(h, RichHandler)]
    if existing:
        for h in existing:
            h.setLevel(level)
        return

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="%(name)s | %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)
