"""Shared fixtures for syllabus-cal tests."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from datetime import datetime, timezone

import pytest

_ENV_VARS = ("LOG_LEVEL", "TIMEZONE", "EVENT_DURATION_MINUTES")


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all syllabus-cal environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("syllabus_cal.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def reference() -> datetime:
    """Fixed "now" used by classifier tests: Monday 2026-10-19 09:00 UTC."""
    return datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def no_natural_dates():
    """Natural-language search stub that never finds a date."""

    def _search(_text: str, _reference: datetime) -> None:
        return None

    return _search


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)


@pytest.fixture()
def los_angeles_local_time(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Make system local time America/Los_Angeles for the test."""
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
