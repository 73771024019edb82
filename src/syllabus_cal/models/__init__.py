"""Data models for syllabus-cal."""

from __future__ import annotations

from syllabus_cal.models.event import (
    CATEGORY_COLORS,
    Category,
    Event,
    ParseResult,
    color_of,
)

__all__ = [
    "CATEGORY_COLORS",
    "Category",
    "Event",
    "ParseResult",
    "color_of",
]
