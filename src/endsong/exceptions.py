"""Exceptions raised by the history engine."""


class EndsongError(Exception):
    """Base exception for history engine errors."""


class HistoryParseError(EndsongError):
    """A streaming history source could not be opened, read or decoded."""

    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Failed to parse streaming history {source!r}" + (f": {detail}" if detail else ""))


class InvalidArgumentError(EndsongError, ValueError):
    """A query argument is out of its allowed range (thresholds, inverted date ranges)."""


class EmptyHistoryError(EndsongError, LookupError):
    """A query that needs at least one record was run against an empty store."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot compute {operation} of an empty history")
