"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

from endsong.logging.formatter import JSONLogFormatter


def configure_logging(
    service: str = "endsong",
    level: int | str = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route all logging through a single JSON handler on the root logger.

    Existing root handlers are replaced, so calling this again (e.g. once
    per app instance in tests) never duplicates output. Returns the
    installed handler.
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    root.addHandler(handler)
    return handler
