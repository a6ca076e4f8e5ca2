"""Constants for history parsing and analysis."""

import re
from datetime import timedelta

# Filename patterns for extended streaming history exports
EXTENDED_HISTORY_PATTERN = re.compile(
    r"(endsong_\d+\.json|Streaming_History_Audio_.*\.json)$",
    re.IGNORECASE,
)

# Raw JSON field names of the extended streaming history format
FIELD_TIMESTAMP = "ts"
FIELD_MS_PLAYED = "ms_played"
FIELD_TRACK_NAME = "master_metadata_track_name"
FIELD_ALBUM_NAME = "master_metadata_album_album_name"
FIELD_ARTIST_NAME = "master_metadata_album_artist_name"
FIELD_TRACK_URI = "spotify_track_uri"

# Play-duration filter defaults
DEFAULT_PERCENT_THRESHOLD = 30
DEFAULT_ABSOLUTE_THRESHOLD = timedelta(seconds=10)

DEFAULT_TIMEZONE = "UTC"

# Peak-window search granularity
WINDOW_STEP = timedelta(days=1)
MIN_WINDOW_SPAN = timedelta(days=1)

# Default number of entries in top-N listings
DEFAULT_TOP_LIMIT = 20
