"""iCalendar export of extracted events using the :mod:`ics` library."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import timedelta
from pathlib import Path

from ics import Calendar
from ics import Event as IcsEvent

from syllabus_cal.exceptions import ExportError
from syllabus_cal.models.event import Event

logger = logging.getLogger(__name__)

DEFAULT_DURATION = timedelta(hours=1)


def to_ics_event(event: Event, duration: timedelta = DEFAULT_DURATION) -> IcsEvent:
    """Map a syllabus :class:`Event` onto an :class:`ics.Event`."""
    return IcsEvent(
        name=event.title,
        begin=event.date,
        duration=duration,
        description=f"Category: {event.category.value}",
        categories={event.category.value},
    )


def build_calendar(events: Iterable[Event], duration: timedelta = DEFAULT_DURATION) -> Calendar:
    """Build an :class:`ics.Calendar` holding one VEVENT per event.

    Raises:
        ExportError: If *events* is empty.
    """
    calendar = Calendar()
    for event in events:
        calendar.events.add(to_ics_event(event, duration))

    if not calendar.events:
        raise ExportError("No events to export")
    return calendar


def export_ics(
    events: Iterable[Event],
    path: str | Path,
    duration: timedelta = DEFAULT_DURATION,
) -> Path:
    """Write *events* to an ``.ics`` file at *path*.

    Args:
        events: Events to export.
        path: Destination file; parent directories are created.
        duration: Length given to every event.

    Returns:
        The written path.

    Raises:
        ExportError: If there are no events or the file cannot be written.
    """
    calendar = build_calendar(events, duration)
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            f.writelines(calendar)
    except OSError as exc:
        raise ExportError(f"Cannot write calendar to {out}: {exc}") from exc

    logger.info("Exported %d event(s) to %s", len(calendar.events), out)
    return out
