"""Centralized constants for the explorer API."""

import enum
from dataclasses import dataclass

# --- Service identity ---


class ServiceName(enum.StrEnum):
    """Service names used for logging and identification."""

    API = "endsong-api"


# --- Application metadata ---

APP_TITLE = "Endsong Explorer API"
APP_DESCRIPTION = "Top lists, summaries and listening-time queries over a Spotify streaming history"
APP_VERSION = "0.1.0"


# --- Route configuration ---


@dataclass(frozen=True, slots=True)
class _Route:
    """A route prefix paired with its OpenAPI tag."""

    prefix: str
    tag: str


class Routes:
    """API route prefixes and tags."""

    HISTORY = _Route("/history", "history")
    HEALTH = "/healthz"


# --- Query limits ---

MAX_TOP_LIMIT = 1000
MAX_ENTRIES = 10_000
MAX_PEAK_DAYS = 36_500
