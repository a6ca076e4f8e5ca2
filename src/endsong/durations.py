"""Canonical song length inferred from observed play durations.

A song's length is taken to be the most common play duration, not the
longest: seeking inside a song can push ``ms_played`` above its real
length. When several durations are equally common the longest of them
wins, which keeps the result deterministic.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import timedelta

from endsong.entities import Song
from endsong.records import PlayRecord


def canonical_duration(durations: Iterable[timedelta]) -> timedelta:
    """Return the most frequent duration, preferring the longest on ties.

    Raises ValueError if ``durations`` is empty.
    """
    occurrences = Counter(durations)
    if not occurrences:
        raise ValueError("canonical_duration() requires at least one duration")
    highest = max(occurrences.values())
    return max(dur for dur, count in occurrences.items() if count == highest)


def song_durations(records: Iterable[PlayRecord]) -> dict[Song, timedelta]:
    """Map every distinct song in ``records`` to its canonical duration."""
    observed: defaultdict[Song, Counter[timedelta]] = defaultdict(Counter)
    for record in records:
        observed[Song.from_record(record)][record.played_duration] += 1
    return {song: canonical_duration(counts.elements()) for song, counts in observed.items()}


def song_length(records: Iterable[PlayRecord], song: Song) -> timedelta:
    """Canonical duration of a single song.

    Raises LookupError if ``song`` has no records.
    """
    durations = [record.played_duration for record in records if song.matches(record)]
    if not durations:
        raise LookupError(f"No plays of {song} in history")
    return canonical_duration(durations)
