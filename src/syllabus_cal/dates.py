"""Date and title recognition for single syllabus lines.

Two independent strategies are provided:

- :func:`match_structured` -- a fixed ``<date> <separator> <title>``
  grammar (e.g. ``"3/15 - Homework 3 due"`` or ``"March 5: Quiz 2"``),
  with the date token checked against an ordered list of formats.
- :func:`match_natural` -- free-form date expressions found anywhere in
  the line: calendar dates such as ``"Quiz 2 on Mar 5"`` by pattern, and
  relative ones (``"Submit the paper next Monday"``) via :mod:`dateparser`.

Both return a :class:`DateMatch` on success and ``None`` otherwise.
Neither raises for unrecognised input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

from dateparser.search import search_dates

logger = logging.getLogger(__name__)

# ``<date> <sep> <title>`` where sep is -, en dash, em dash or colon.
_STRUCTURED_LINE_RE = re.compile(
    r"^(?P<date>\d{1,2}/\d{1,2}(?:/\d{2,4})?|[A-Za-z]{3,9}\s+\d{1,2})"
    r"\s*[-–—:]\s*"
    r"(?P<title>.+)$"
)

_LEADING_SEPARATOR_RE = re.compile(r"^\s*[-–—:]\s*")

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}

# Month-name or numeric calendar dates anywhere in a line, e.g. "Mar 5",
# "Sept. 12th, 2026", "3/5", "3/15/26".
_CALENDAR_DATE_RE = re.compile(
    r"\b(?:"
    r"(?P<month_name>jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?\s+"
    r"(?P<day>\d{1,2})(?:st|nd|rd|th)?\b(?:,?\s+(?P<year>\d{4})\b)?"
    r"|(?P<month>\d{1,2})/(?P<num_day>\d{1,2})(?:/(?P<num_year>\d{4}|\d{2}))?\b"
    r")",
    re.IGNORECASE,
)

_MONTH_WORD_RE = re.compile(r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\b", re.IGNORECASE)
_YEAR_RE = re.compile(r"\b\d{4}\b")

# Words read as part of the date phrase that follows them.
_LEADING_WORD_RE = re.compile(r"\b(?P<word>on|next|this|last)\s+$", re.IGNORECASE)

# (label, strptime pattern, pattern includes a year).  Tried in order;
# the first calendar-valid parse wins.  ``%m``/``%d`` accept one or two
# digits, so the single- and double-digit variants share a pattern.
DATE_FORMATS: tuple[tuple[str, str, bool], ...] = (
    ("MMM d", "%b %d", False),
    ("MMMM d", "%B %d", False),
    ("MM/dd/yyyy", "%m/%d/%Y", True),
    ("M/d/yyyy", "%m/%d/%Y", True),
    ("MM/dd/yy", "%m/%d/%y", True),
    ("M/dd", "%m/%d", False),
    ("MM/d", "%m/%d", False),
)

DEFAULT_TITLE = "Class Event"

NaturalDateSearch = Callable[[str, datetime], "list[tuple[str, datetime]] | None"]


@dataclass(frozen=True)
class DateMatch:
    """A recognised date and the title left over once it is removed.

    Attributes:
        title: Non-empty event title.
        date: Timezone-aware event instant.
        strategy: ``"pattern"`` for the structured grammar,
            ``"natural"`` for the natural-language fallback.
        date_text: The substring of the line that was read as the date.
    """

    title: str
    date: datetime
    strategy: Literal["pattern", "natural"]
    date_text: str


def localize(value: datetime, reference: datetime) -> datetime:
    """Give naive *value* the time zone of *reference*.

    A naive *reference* stands for system local time; each value then
    gets the local UTC offset in force on its own date, so dates across
    a daylight-saving change keep their wall-clock time.  Aware values
    are returned unchanged.
    """
    if value.tzinfo is not None:
        return value
    if reference.tzinfo is None:
        return value.astimezone()
    return value.replace(tzinfo=reference.tzinfo)


# ---------------------------------------------------------------------------
# Structured pattern
# ---------------------------------------------------------------------------


def parse_date_token(token: str, reference: datetime) -> datetime | None:
    """Parse a structured date token against :data:`DATE_FORMATS`.

    Formats without a year use the year of *reference*.  The result is
    local midnight in the time zone of *reference*.

    Args:
        token: The date part of a line, e.g. ``"3/15"`` or ``"Mar 5"``.
        reference: The instant treated as "now".

    Returns:
        The parsed datetime, or ``None`` if no format yields a valid
        calendar date.
    """
    for label, pattern, has_year in DATE_FORMATS:
        candidate, fmt = (token, pattern) if has_year else (f"{token} {reference.year}", f"{pattern} %Y")
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        logger.debug("Date token %r matched format %s", token, label)
        return localize(parsed, reference)
    return None


def match_structured(line: str, reference: datetime) -> DateMatch | None:
    """Recognise a ``<date> <separator> <title>`` line.

    Args:
        line: A trimmed syllabus line.
        reference: The instant treated as "now".

    Returns:
        A :class:`DateMatch` with ``strategy="pattern"``, or ``None`` when
        the line does not have the expected shape, the date token is not
        a valid date, or the title is blank.
    """
    match = _STRUCTURED_LINE_RE.match(line)
    if match is None:
        return None

    date_text = match.group("date")
    title = match.group("title").strip()
    if not title:
        return None

    date = parse_date_token(date_text, reference)
    if date is None:
        return None

    return DateMatch(title=title, date=date, strategy="pattern", date_text=date_text)


# ---------------------------------------------------------------------------
# Natural language
# ---------------------------------------------------------------------------


def find_calendar_dates(text: str, reference: datetime) -> list[tuple[int, int, datetime]]:
    """Find month-name and numeric dates anywhere in *text*.

    A missing year is the year of *reference*; a two-digit year is read
    the way ``%y`` reads it.  Impossible dates such as ``4/31`` are
    skipped.

    Returns:
        ``(start, end, naive_datetime)`` for each date, in order of
        appearance.
    """
    found: list[tuple[int, int, datetime]] = []
    for match in _CALENDAR_DATE_RE.finditer(text):
        if match.group("month_name"):
            month = _MONTHS[match.group("month_name")[:3].lower()]
            day, year = match.group("day"), match.group("year")
        else:
            month = int(match.group("month"))
            day, year = match.group("num_day"), match.group("num_year")

        if year is None:
            year_value = reference.year
        elif len(year) == 2:
            year_value = datetime.strptime(year, "%y").year
        else:
            year_value = int(year)

        try:
            value = datetime(year_value, month, int(day))
        except ValueError:
            continue
        found.append((match.start(), match.end(), value))
    return found


def _with_year(value: datetime, year: int) -> datetime:
    try:
        return value.replace(year=year)
    except ValueError:  # Feb 29 outside a leap year
        return value


def _widen(
    text: str,
    start: int,
    end: int,
    value: datetime,
    reference: datetime,
) -> tuple[str, datetime]:
    """Extend a hit over a leading ``on``/``next``/``this``/``last``.

    ``next`` and ``last`` also move a weekday that landed on the wrong
    side of *reference* by one week.
    """
    lead = _LEADING_WORD_RE.search(text, 0, start)
    if lead is None:
        return text[start:end], value

    word = lead.group("word").lower()
    if word == "next" and value.date() <= reference.date():
        value += timedelta(days=7)
    elif word == "last" and value.date() >= reference.date():
        value -= timedelta(days=7)
    return text[lead.start() : end], value


def search_natural_dates(text: str, reference: datetime) -> list[tuple[str, datetime]] | None:
    """Find date expressions in *text*, in order of appearance.

    Calendar dates (``"Mar 5"``, ``"3/5"``) come from
    :func:`find_calendar_dates`.  Everything else is left to
    :func:`dateparser.search.search_dates`, which resolves relative
    expressions (``"next Monday"``, ``"tomorrow"``) against *reference*,
    preferring future dates.  Its hits are dropped when they are only
    digits and punctuation (``"40"`` in ``"40% exams"``) or overlap a
    calendar date; a month-name hit without a year is pinned to the
    year of *reference*.

    Returns:
        ``(matched_text, naive_datetime)`` pairs, or ``None``.
    """
    hits = find_calendar_dates(text, reference)
    taken = [(start, end) for start, end, _ in hits]

    settings = {
        "RELATIVE_BASE": reference.replace(tzinfo=None),
        "PREFER_DATES_FROM": "future",
        "RETURN_AS_TIMEZONE_AWARE": False,
    }
    cursor = 0
    for date_text, value in search_dates(text, languages=["en"], settings=settings) or []:
        start = text.find(date_text, cursor)
        if start < 0:
            continue
        end = start + len(date_text)
        cursor = end

        if not any(ch.isalpha() for ch in date_text):
            continue
        if any(start < taken_end and taken_start < end for taken_start, taken_end in taken):
            continue
        if _MONTH_WORD_RE.search(date_text) and not _YEAR_RE.search(date_text):
            value = _with_year(value, reference.year)
        hits.append((start, end, value))

    hits.sort(key=lambda hit: hit[0])
    return [_widen(text, start, end, value, reference) for start, end, value in hits] or None


def title_without(line: str, date_text: str) -> str:
    """Remove the first occurrence of *date_text* from *line* and tidy up.

    Leading separators and surrounding whitespace are stripped.  Falls
    back to :data:`DEFAULT_TITLE` when nothing is left.
    """
    remainder = line.replace(date_text, "", 1)
    remainder = _LEADING_SEPARATOR_RE.sub("", remainder).strip()
    return remainder or DEFAULT_TITLE


def match_natural(
    line: str,
    reference: datetime,
    search: NaturalDateSearch = search_natural_dates,
) -> DateMatch | None:
    """Recognise the first natural-language date expression in *line*.

    Any exception raised by *search* is treated as "no date found".

    Args:
        line: A trimmed syllabus line.
        reference: The instant treated as "now".  A naive value stands
            for system local time.
        search: Callable returning ``(matched_text, datetime)`` pairs in
            order of appearance, or ``None``.

    Returns:
        A :class:`DateMatch` with ``strategy="natural"``, or ``None``.
    """
    try:
        found = search(line, reference)
    except Exception as exc:
        logger.debug("Natural-language date search failed for %r: %s", line, exc)
        return None

    if not found:
        return None

    date_text, date = found[0]
    return DateMatch(
        title=title_without(line, date_text),
        date=localize(date, reference),
        strategy="natural",
        date_text=date_text,
    )
