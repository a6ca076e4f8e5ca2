"""Tests for EndsongSettings and ApiSettings."""

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from endsong.config import EndsongSettings
from endsong_api.settings import ApiSettings


def test_defaults() -> None:
    """Settings have sensible defaults."""
    settings = EndsongSettings()
    assert settings.TIMEZONE == "UTC"
    assert settings.history_paths == []
    assert settings.NORMALIZE_CAPITALIZATION is True
    assert settings.PERCENT_THRESHOLD == 30
    assert settings.absolute_threshold == timedelta(seconds=10)


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings can be overridden via environment variables."""
    monkeypatch.setenv("TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("HISTORY_PATHS", "/data/endsong_0.json, /data/export.zip,")
    monkeypatch.setenv("PERCENT_THRESHOLD", "50")
    monkeypatch.setenv("NORMALIZE_CAPITALIZATION", "false")

    settings = EndsongSettings()
    assert settings.tz == ZoneInfo("Europe/Berlin")
    assert settings.history_paths == ["/data/endsong_0.json", "/data/export.zip"]
    assert settings.PERCENT_THRESHOLD == 50
    assert settings.NORMALIZE_CAPITALIZATION is False


def test_api_settings_extend_engine_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPLY_FILTER", "false")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.example, http://b.example")

    settings = ApiSettings(ABSOLUTE_THRESHOLD_SECONDS=0)
    assert settings.APPLY_FILTER is False
    assert settings.cors_origins == ["http://a.example", "http://b.example"]
    assert settings.absolute_threshold == timedelta()
