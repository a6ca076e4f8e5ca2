"""History engine settings loaded from environment variables."""

import functools
from datetime import timedelta
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from endsong.constants import (
    DEFAULT_ABSOLUTE_THRESHOLD,
    DEFAULT_PERCENT_THRESHOLD,
    DEFAULT_TIMEZONE,
)


class EndsongSettings(BaseSettings):
    """Configuration for parsing and preparing a streaming history."""

    # Root log level for the JSON log output
    LOG_LEVEL: str = "INFO"

    # Zone the UTC timestamps of the export are converted into
    TIMEZONE: str = DEFAULT_TIMEZONE

    # Comma-separated endsong_*.json files and/or export ZIPs
    HISTORY_PATHS: str = ""

    # Preparation passes
    NORMALIZE_CAPITALIZATION: bool = True
    PERCENT_THRESHOLD: int = DEFAULT_PERCENT_THRESHOLD
    ABSOLUTE_THRESHOLD_SECONDS: int = int(DEFAULT_ABSOLUTE_THRESHOLD.total_seconds())

    model_config = {"env_prefix": ""}

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)

    @property
    def history_paths(self) -> list[str]:
        return [p.strip() for p in self.HISTORY_PATHS.split(",") if p.strip()]

    @property
    def absolute_threshold(self) -> timedelta:
        return timedelta(seconds=self.ABSOLUTE_THRESHOLD_SECONDS)


@functools.lru_cache(maxsize=1)
def get_settings() -> EndsongSettings:
    """Return cached history engine settings singleton."""
    return EndsongSettings()
