"""syllabus-cal: Syllabus-to-Calendar.

Extracts dated, categorised calendar events from the text of a course
syllabus and exports them to iCalendar.
"""

from __future__ import annotations

from syllabus_cal.categories import detect_category
from syllabus_cal.classifier import classify, classify_line
from syllabus_cal.exceptions import ExportError, TextExtractionError
from syllabus_cal.export import build_calendar, export_ics
from syllabus_cal.extract import extract_text
from syllabus_cal.models.event import (
    CATEGORY_COLORS,
    Category,
    Event,
    ParseResult,
    color_of,
)
from syllabus_cal.query import EventStats, compute_stats, filter_events

__version__ = "0.1.0"

__all__ = [
    "CATEGORY_COLORS",
    "Category",
    "Event",
    "EventStats",
    "ExportError",
    "ParseResult",
    "TextExtractionError",
    "build_calendar",
    "classify",
    "classify_line",
    "color_of",
    "compute_stats",
    "detect_category",
    "export_ics",
    "extract_text",
    "filter_events",
]
