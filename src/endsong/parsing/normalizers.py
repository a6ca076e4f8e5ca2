"""Normalizer that converts raw extended streaming history JSON objects into RawPlayRecord."""

import logging
from datetime import UTC, datetime, tzinfo

from endsong.constants import (
    FIELD_ALBUM_NAME,
    FIELD_ARTIST_NAME,
    FIELD_MS_PLAYED,
    FIELD_TIMESTAMP,
    FIELD_TRACK_NAME,
    FIELD_TRACK_URI,
)
from endsong.parsing.models import RawPlayRecord

logger = logging.getLogger(__name__)


def parse_timestamp(ts: str, tz: tzinfo = UTC) -> datetime:
    """Parse an export timestamp such as "2016-07-21T01:02:07Z" (UTC) into ``tz``.

    Raises ValueError if ``ts`` is not an ISO 8601 datetime.
    """
    parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(tz)


def normalize_extended_record(raw: dict[str, object], tz: tzinfo = UTC) -> RawPlayRecord | None:
    """Normalize a record from Extended Streaming History (endsong_*.json).

    Expected fields:
        ts: str (ISO 8601 datetime, e.g. "2023-01-15T10:30:00Z")
        ms_played: int
        master_metadata_track_name: str | None
        master_metadata_album_album_name: str | None
        master_metadata_album_artist_name: str | None
        spotify_track_uri: str | None

    Returns None for podcast entries (no track, album or artist) and for
    records whose timestamp cannot be parsed.
    """
    track_name = raw.get(FIELD_TRACK_NAME)
    album_name = raw.get(FIELD_ALBUM_NAME)
    artist_name = raw.get(FIELD_ARTIST_NAME)

    if track_name is None or album_name is None or artist_name is None:
        return None

    ts_str = raw.get(FIELD_TIMESTAMP)
    if not isinstance(ts_str, str):
        return None

    try:
        played_at = parse_timestamp(ts_str, tz)
    except ValueError:
        logger.warning("Skipping record with unparseable timestamp: %s", ts_str)
        return None

    ms_played = raw.get(FIELD_MS_PLAYED, 0)
    if not isinstance(ms_played, int) or ms_played < 0:
        ms_played = 0

    track_uri = raw.get(FIELD_TRACK_URI)

    return RawPlayRecord(
        track_name=str(track_name),
        album_name=str(album_name),
        artist_name=str(artist_name),
        ms_played=ms_played,
        played_at=played_at,
        spotify_track_uri=str(track_uri) if track_uri else None,
    )
