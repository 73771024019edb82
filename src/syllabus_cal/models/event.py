"""Pydantic models for extracted syllabus events.

Defines the structured output of the line classifier:

- :class:`Category` -- closed set of event categories.
- :data:`CATEGORY_COLORS` -- fixed, read-only category to colour table.
- :class:`Event` -- a single dated event; its ``color`` is derived from
  its category and cannot be set independently.
- :class:`ParseResult` -- events plus the lines that yielded no date.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

# ---------------------------------------------------------------------------
# Category and colour table
# ---------------------------------------------------------------------------


class Category(str, Enum):
    """Classification tag attached to every event."""

    EXAM = "exam"
    QUIZ = "quiz"
    ASSIGNMENT = "assignment"
    PROJECT = "project"
    LECTURE = "lecture"
    OFFICE_HOURS = "office-hours"
    HOLIDAY = "holiday"
    OTHER = "other"


CATEGORY_COLORS: MappingProxyType[Category, str] = MappingProxyType(
    {
        Category.EXAM: "#ef4444",
        Category.QUIZ: "#f97316",
        Category.ASSIGNMENT: "#3b82f6",
        Category.PROJECT: "#8b5cf6",
        Category.LECTURE: "#10b981",
        Category.OFFICE_HOURS: "#06b6d4",
        Category.HOLIDAY: "#84cc16",
        Category.OTHER: "#6b7280",
    }
)


def color_of(category: Category | str) -> str:
    """Return the display colour for *category*.

    Args:
        category: A :class:`Category` member or its string value
            (e.g. ``"office-hours"``).

    Returns:
        A ``"#rrggbb"`` hex string.

    Raises:
        ValueError: If *category* is not one of the eight categories.
    """
    return CATEGORY_COLORS[Category(category)]


def format_instant(value: datetime) -> str:
    """Render *value* as a UTC ISO 8601 instant, e.g. ``2026-03-15T07:00:00.000Z``."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


class Event(BaseModel):
    """A single calendar event extracted from one syllabus line.

    Attributes:
        title: Event title, never empty or whitespace-only.
        date: Timezone-aware start instant.  Naive values are taken to
            be UTC.
        category: The event's :class:`Category`.
        color: Display colour, always ``color_of(category)``.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    date: datetime
    category: Category = Category.OTHER

    @computed_field  # type: ignore[prop-decorator]
    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self.category]

    @field_validator("title")
    @classmethod
    def _reject_blank_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty or whitespace-only")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: datetime | str) -> datetime:
        """Accept ISO 8601 strings (including a trailing ``Z``)."""
        if isinstance(value, str):
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if isinstance(value, datetime) and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: datetime) -> str:
        return format_instant(value)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form ``{title, date, category, color}``."""
        return self.model_dump(mode="json")


# ---------------------------------------------------------------------------
# ParseResult
# ---------------------------------------------------------------------------


class ParseResult(BaseModel):
    """Output of :func:`~syllabus_cal.classifier.classify`.

    Attributes:
        events: Extracted events in input line order (not sorted by date).
        unparsed: Trimmed lines for which no date could be recognised,
            in input order.
    """

    events: list[Event] = Field(default_factory=list)
    unparsed: list[str] = Field(default_factory=list)

    @property
    def summary(self) -> str:
        """Aggregate outcome, e.g. ``"Found 3 events (1 lines couldn't be parsed)"``."""
        if self.unparsed:
            return f"Found {len(self.events)} events ({len(self.unparsed)} lines couldn't be parsed)"
        return f"Found {len(self.events)} events"

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form ``{events: [...], unparsed: [...]}``."""
        return self.model_dump(mode="json")
