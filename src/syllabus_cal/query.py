"""Searching and summarising extracted events.

Helpers for consumers of a :class:`~syllabus_cal.models.event.ParseResult`:
filtering by title, category and date range, and computing the counts
shown next to a calendar (upcoming, this week, per category).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Literal

from syllabus_cal.models.event import Category, Event

DateRange = Literal["all", "upcoming", "past"]

_WEEK = timedelta(days=7)


def _now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.astimezone()
    return now


def filter_events(
    events: Iterable[Event],
    search: str | None = None,
    category: Category | str | None = None,
    date_range: DateRange = "all",
    now: datetime | None = None,
) -> list[Event]:
    """Return the events matching every given filter, earliest first.

    Args:
        events: Events to filter.
        search: Case-insensitive substring that must occur in the title.
        category: Only keep events of this category.
        date_range: ``"upcoming"`` keeps events at or after *now*,
            ``"past"`` keeps events before it, ``"all"`` keeps both.
        now: Reference instant for *date_range*.  Defaults to the
            current time.

    Raises:
        ValueError: If *category* or *date_range* is not recognised.
    """
    selected = list(events)

    if search:
        needle = search.lower()
        selected = [e for e in selected if needle in e.title.lower()]

    if category is not None:
        wanted = Category(category)
        selected = [e for e in selected if e.category == wanted]

    if date_range == "upcoming":
        cutoff = _now(now)
        selected = [e for e in selected if e.date >= cutoff]
    elif date_range == "past":
        cutoff = _now(now)
        selected = [e for e in selected if e.date < cutoff]
    elif date_range != "all":
        raise ValueError(f"Unknown date range: {date_range!r}")

    return sorted(selected, key=lambda e: e.date)


@dataclass
class EventStats:
    """Aggregate counts over a set of events.

    Attributes:
        total: Number of events.
        upcoming: Events at or after the reference instant.
        this_week: Upcoming events within the next seven days.
        categories: Event count per category value (only categories
            that occur).
        next_event: The earliest upcoming event, or ``None``.
    """

    total: int = 0
    upcoming: int = 0
    this_week: int = 0
    categories: dict[str, int] = field(default_factory=dict)
    next_event: Event | None = None


def compute_stats(events: Iterable[Event], now: datetime | None = None) -> EventStats:
    """Compute :class:`EventStats` for *events* relative to *now*."""
    reference = _now(now)
    all_events = list(events)
    upcoming = filter_events(all_events, date_range="upcoming", now=reference)

    return EventStats(
        total=len(all_events),
        upcoming=len(upcoming),
        this_week=sum(1 for e in upcoming if e.date <= reference + _WEEK),
        categories=dict(Counter(e.category.value for e in all_events)),
        next_event=upcoming[0] if upcoming else None,
    )
