"""Line classifier: syllabus text in, events and unparsed lines out.

Every line is handled independently:

1. Trim it; drop it if shorter than :data:`MIN_LINE_LENGTH`.
2. Try the structured ``<date> - <title>`` grammar.
3. Otherwise try natural-language date search.
4. On a match, detect the category from the whole line and emit an
   :class:`~syllabus_cal.models.event.Event`; otherwise record the line
   as unparsed.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from syllabus_cal.categories import detect_category
from syllabus_cal.dates import (
    DateMatch,
    NaturalDateSearch,
    match_natural,
    match_structured,
    search_natural_dates,
)
from syllabus_cal.models.event import Event, ParseResult

logger = logging.getLogger(__name__)

MIN_LINE_LENGTH = 5

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split *text* into trimmed lines, dropping blank and short ones."""
    lines = (raw.strip() for raw in _LINE_BREAK_RE.split(text))
    return [line for line in lines if len(line) >= MIN_LINE_LENGTH]


def match_line(
    line: str,
    reference: datetime,
    search: NaturalDateSearch = search_natural_dates,
) -> DateMatch | None:
    """Return the first strategy's match for *line*, or ``None``."""
    return match_structured(line, reference) or match_natural(line, reference, search)


def classify_line(
    line: str,
    reference: datetime,
    search: NaturalDateSearch = search_natural_dates,
) -> Event | None:
    """Turn a single trimmed line into an :class:`Event`.

    Returns:
        The event, or ``None`` when neither strategy finds a date.
    """
    found = match_line(line, reference, search)
    if found is None:
        logger.debug("Unparsed line: %r", line)
        return None

    category = detect_category(line)
    logger.debug(
        "Matched %r via %s date %r -> %s",
        line,
        found.strategy,
        found.date_text,
        category.value,
    )
    return Event(title=found.title, date=found.date, category=category)


def classify(
    text: str,
    reference: datetime | None = None,
    search: NaturalDateSearch = search_natural_dates,
) -> ParseResult:
    """Extract calendar events from syllabus *text*.

    Args:
        text: Plain text of the syllabus, newline-delimited.
        reference: The instant treated as "now".  It supplies the year
            for dates written without one, the base for relative
            expressions such as ``"next Monday"``, and the time zone in
            which dates are interpreted.  A naive value stands for system
            local time, and each date gets the UTC offset in force on
            that date.  Defaults to the current local time.
        search: Natural-language date search used when the structured
            grammar does not apply.  Injectable for testing.

    Returns:
        A :class:`ParseResult`.  Each kept line contributes to exactly
        one of ``events`` or ``unparsed``, in input order.
    """
    if reference is None:
        reference = datetime.now()

    result = ParseResult()
    for line in split_lines(text):
        event = classify_line(line, reference, search)
        if event is None:
            result.unparsed.append(line)
        else:
            result.events.append(event)

    logger.info(
        "Classified syllabus text: %d event(s), %d unparsed line(s)",
        len(result.events),
        len(result.unparsed),
    )
    return result
