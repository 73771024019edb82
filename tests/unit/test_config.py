"""Tests for syllabus-cal configuration loading."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from syllabus_cal.config import ConfigError, Settings, load_settings


class TestLoadSettingsDefaults:
    """An empty environment yields the defaults."""

    def test_defaults(self, clean_env: None) -> None:
        settings = load_settings()

        assert settings == Settings(log_level="INFO", timezone="UTC", event_duration_minutes=60)

    def test_blank_values_use_defaults(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "   ")
        monkeypatch.setenv("TIMEZONE", "")

        settings = load_settings()

        assert settings.log_level == "INFO"
        assert settings.timezone == "UTC"


class TestLoadSettingsOverrides:
    def test_custom_log_level(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"

    def test_custom_timezone(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMEZONE", "America/Chicago")

        assert load_settings().timezone == "America/Chicago"

    def test_custom_duration(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_DURATION_MINUTES", "90")

        assert load_settings().event_duration_minutes == 90

    def test_dotenv_is_loaded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[bool] = []
        monkeypatch.setattr("syllabus_cal.config.load_dotenv", lambda *_a, **_kw: calls.append(True))

        load_settings()

        assert calls == [True]


class TestLoadSettingsInvalid:
    def test_unknown_timezone(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMEZONE", "Mars/Olympus_Mons")

        with pytest.raises(ConfigError, match="TIMEZONE"):
            load_settings()

    @pytest.mark.parametrize("value", ["0", "-5", "an hour", "1.5"])
    def test_bad_duration(self, value: str, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_DURATION_MINUTES", value)

        with pytest.raises(ConfigError, match="EVENT_DURATION_MINUTES"):
            load_settings()

    def test_error_names_all_invalid_variables(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIMEZONE", "Nowhere/Special")
        monkeypatch.setenv("EVENT_DURATION_MINUTES", "zero")

        with pytest.raises(ConfigError) as exc_info:
            load_settings()

        message = str(exc_info.value)
        assert "TIMEZONE" in message
        assert "EVENT_DURATION_MINUTES" in message


class TestSettings:
    def test_settings_are_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(AttributeError):
            settings.timezone = "UTC"  # type: ignore[misc]

    def test_now_uses_timezone(self) -> None:
        now = Settings(timezone="Asia/Tokyo").now()

        assert now.tzinfo == ZoneInfo("Asia/Tokyo")
