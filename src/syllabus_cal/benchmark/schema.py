"""Pydantic models for benchmark sidecar JSON files.

Each ``.txt`` sample syllabus is paired with a ``.expected.json`` sidecar
that defines the reference date, the tolerance level, and the events the
classifier should find.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from syllabus_cal.models.event import Category

DEFAULT_REFERENCE = dt.datetime.fromisoformat("2026-01-12T09:00:00+00:00")


class SidecarExpectedEvent(BaseModel):
    """Expected extraction result for a single event.

    Attributes:
        title: Expected event title (fuzzy-matched via ``rapidfuzz``
            unless the tolerance is ``"strict"``).
        date: Expected calendar date of the event.
        category: Expected category.
    """

    title: str
    date: dt.date
    category: Category


class SidecarSpec(BaseModel):
    """Top-level sidecar JSON schema for a benchmark sample.

    Attributes:
        description: Human-readable description of the sample.
        tolerance: Title matching tolerance.  Defaults to ``"moderate"``.
        reference_datetime: ISO 8601 instant used as "now" when
            classifying.  Its offset sets the time zone.
        expected_events: Events the classifier should produce.
        expected_unparsed: Number of lines expected to stay unparsed, or
            ``None`` to skip that check.
        notes: Optional notes about the sample.
    """

    description: str
    tolerance: Literal["strict", "moderate", "relaxed"] = "moderate"
    reference_datetime: dt.datetime = DEFAULT_REFERENCE
    expected_events: list[SidecarExpectedEvent] = Field(default_factory=list)
    expected_unparsed: int | None = None
    notes: str | None = None


def load_sidecar(path: Path) -> SidecarSpec:
    """Read and validate the sidecar at *path*.

    Raises:
        pydantic.ValidationError: If the JSON does not match the schema.
    """
    return SidecarSpec.model_validate_json(Path(path).read_text(encoding="utf-8"))
