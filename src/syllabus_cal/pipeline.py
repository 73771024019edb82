"""Pipeline orchestrator for the syllabus-to-calendar workflow.

Wires the components together: document text extraction, line
classification, event statistics, and optional ``.ics`` export.  The
top-level entry point is :func:`run_pipeline`, which returns a
:class:`PipelineResult` suitable for rendering by the demo output
formatter.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from syllabus_cal.classifier import classify
from syllabus_cal.exceptions import ExportError
from syllabus_cal.export import DEFAULT_DURATION, export_ics
from syllabus_cal.extract import extract_text
from syllabus_cal.log import get_logger
from syllabus_cal.models.event import ParseResult
from syllabus_cal.query import EventStats, compute_stats

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Aggregated result from the full pipeline run.

    Attributes:
        source_path: Path to the input syllabus document.
        reference: The instant treated as "now" during classification.
        line_count: Number of lines in the extracted text.
        parse_result: Events and unparsed lines from the classifier.
        stats: Summary counts over the extracted events.
        ics_path: Where the ``.ics`` export was written, or ``None``.
        warnings: Non-fatal warnings from any pipeline stage.
        duration_seconds: Wall-clock time for the full pipeline.
    """

    source_path: Path
    reference: datetime | None = None
    line_count: int = 0
    parse_result: ParseResult = field(default_factory=ParseResult)
    stats: EventStats = field(default_factory=EventStats)
    ics_path: Path | None = None
    warnings: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0


def run_pipeline(
    source_path: Path,
    current_datetime: datetime | None = None,
    ics_path: Path | None = None,
    event_duration: timedelta = DEFAULT_DURATION,
) -> PipelineResult:
    """Run the full syllabus-to-calendar pipeline.

    Executes three stages:

    1. **Extract** -- read the document's plain text.
    2. **Classify** -- turn lines into events and unparsed lines, then
       compute summary statistics.
    3. **Export** -- write an ``.ics`` file when *ics_path* is given.
       Export failures are recorded as warnings.

    Args:
        source_path: Path to a ``.pdf``, ``.txt`` or ``.md`` syllabus.
        current_datetime: The instant treated as "now".  Defaults to
            the current local time.
        ics_path: Optional destination for an iCalendar export.
        event_duration: Length of each exported event.

    Returns:
        A :class:`PipelineResult` with all pipeline outputs.

    Raises:
        FileNotFoundError: If *source_path* does not exist.
        TextExtractionError: If the document cannot be read.
    """
    start_time = time.monotonic()
    now = current_datetime or datetime.now()

    result = PipelineResult(source_path=source_path, reference=now)

    # ------------------------------------------------------------------
    # Stage 1: Extract
    # ------------------------------------------------------------------
    logger.info("Stage 1: Extracting text from %s", source_path)

    text = extract_text(source_path)
    result.line_count = len(text.splitlines())

    if not text.strip():
        msg = f"No text could be extracted from {source_path}"
        result.warnings.append(msg)
        logger.warning(msg)

    logger.info("Stage 1 complete: %d line(s) of text", result.line_count)

    # ------------------------------------------------------------------
    # Stage 2: Classify
    # ------------------------------------------------------------------
    logger.info("Stage 2: Classifying lines")

    result.parse_result = classify(text, reference=now)
    result.stats = compute_stats(result.parse_result.events, now=now)

    logger.info("Stage 2 complete: %s", result.parse_result.summary)

    # ------------------------------------------------------------------
    # Stage 3: Export
    # ------------------------------------------------------------------
    if ics_path is not None:
        logger.info("Stage 3: Exporting calendar to %s", ics_path)
        try:
            result.ics_path = export_ics(result.parse_result.events, ics_path, event_duration)
        except ExportError as exc:
            msg = f"Calendar export skipped: {exc}"
            result.warnings.append(msg)
            logger.warning(msg)

    result.duration_seconds = time.monotonic() - start_time
    logger.info("Pipeline finished in %.2fs", result.duration_seconds)
    return result
