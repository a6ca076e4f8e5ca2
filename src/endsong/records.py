"""Play records and read-only views over time-ordered record sequences."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import overload


@dataclass(frozen=True, slots=True, eq=False)
class PlayRecord:
    """A single listening event of a song.

    Identity is the (artist, album, track) triple with exact capitalization;
    timestamp, duration and URI do not take part in equality or hashing.
    """

    timestamp: datetime
    played_duration: timedelta
    track_name: str
    album_name: str
    artist_name: str
    track_uri: str | None = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.artist_name, self.album_name, self.track_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayRecord):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


class StringPool:
    """Interns names so every record sharing a name holds the same string object."""

    def __init__(self) -> None:
        self._names: dict[str, str] = {}

    def __call__(self, name: str) -> str:
        return self._names.setdefault(name, name)

    def __len__(self) -> int:
        return len(self._names)


class RecordView(Sequence[PlayRecord]):
    """Contiguous, read-only window onto an ordered record sequence.

    Slicing a view returns another view over the same underlying
    sequence; records are never copied.
    """

    __slots__ = ("_records", "_start", "_stop")

    def __init__(self, records: Sequence[PlayRecord], start: int = 0, stop: int | None = None) -> None:
        length = len(records)
        stop = length if stop is None else stop
        if not 0 <= start <= length or not 0 <= stop <= length:
            raise IndexError(f"view bounds [{start}, {stop}) outside of 0..{length}")
        self._records = records
        self._start = start
        self._stop = max(start, stop)

    @property
    def indices(self) -> tuple[int, int]:
        """Half-open (start, stop) position of this view in the underlying sequence."""
        return (self._start, self._stop)

    def __len__(self) -> int:
        return self._stop - self._start

    @overload
    def __getitem__(self, index: int) -> PlayRecord: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[PlayRecord]: ...

    def __getitem__(self, index: int | slice) -> PlayRecord | Sequence[PlayRecord]:
        positions = range(self._start, self._stop)
        if isinstance(index, slice):
            selected = positions[index]
            if selected.step == 1:
                return RecordView(self._records, selected.start, selected.stop)
            return [self._records[i] for i in selected]
        return self._records[positions[index]]

    def __iter__(self) -> Iterator[PlayRecord]:
        records = self._records
        for i in range(self._start, self._stop):
            yield records[i]

    def __reversed__(self) -> Iterator[PlayRecord]:
        records = self._records
        for i in range(self._stop - 1, self._start - 1, -1):
            yield records[i]

    def __repr__(self) -> str:
        return f"RecordView(start={self._start}, stop={self._stop})"
