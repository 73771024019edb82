"""Configuration loading for syllabus-cal.

Reads settings from environment variables (with .env support via python-dotenv)
and validates them.  Every setting has a default, so an empty environment
is valid.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        timezone: IANA timezone in which syllabus dates are interpreted
            (default ``"UTC"``).
        event_duration_minutes: Length of each event written to an
            ``.ics`` export (default ``60``).
    """

    log_level: str = "INFO"
    timezone: str = "UTC"
    event_duration_minutes: int = 60

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(ZoneInfo(self.timezone))


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If any variable is set to an invalid value.  The
            error message names **all** invalid variables.
    """
    load_dotenv()

    values: dict[str, str | int] = {}
    invalid: list[str] = []

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    timezone = os.environ.get("TIMEZONE", "").strip()
    duration = os.environ.get("EVENT_DURATION_MINUTES", "").strip()

    if log_level:
        values["log_level"] = log_level

    if timezone:
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            invalid.append(f"TIMEZONE={timezone!r}")
        else:
            values["timezone"] = timezone

    if duration:
        if duration.isdigit() and int(duration) > 0:
            values["event_duration_minutes"] = int(duration)
        else:
            invalid.append(f"EVENT_DURATION_MINUTES={duration!r}")

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Invalid environment variables: {names}")

    return Settings(**values)
