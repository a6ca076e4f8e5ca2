"""JSON log formatter for structured logging output."""

import json
import logging
from datetime import UTC, datetime

# ``extra`` keys copied into the JSON entry when a log call sets them
CONTEXT_FIELDS = ("request_id", "source", "records", "duration_ms")


class JSONLogFormatter(logging.Formatter):
    """Render each log record as one JSON object per line.

    Output format::

        {"timestamp": "...", "level": "INFO", "service": "endsong",
         "logger": "endsong.parsing.parser", "message": "...", "source": "...", ...}

    Context passed through ``extra`` (see ``CONTEXT_FIELDS``) becomes
    top-level keys, so a history load can be followed per source file and
    an explorer request by its ``request_id``.
    """

    def __init__(self, service: str = "endsong", context_fields: tuple[str, ...] = CONTEXT_FIELDS) -> None:
        super().__init__()
        self._service = service
        self._context_fields = context_fields

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self._context_fields:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)
