"""Explorer settings loaded from environment variables."""

import functools

from endsong.config import EndsongSettings


class ApiSettings(EndsongSettings):
    """Explorer API configuration on top of the history engine settings."""

    # Drop plays below PERCENT_THRESHOLD / ABSOLUTE_THRESHOLD_SECONDS at startup
    APPLY_FILTER: bool = True

    # CORS
    CORS_ALLOWED_ORIGINS: str = "http://localhost:8000"  # comma-separated origins

    model_config = {"env_prefix": ""}

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]


@functools.lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    """Return cached explorer settings singleton."""
    return ApiSettings()
