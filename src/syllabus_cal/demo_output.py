"""Console output formatter for the syllabus-to-calendar pipeline.

Renders a :class:`~syllabus_cal.pipeline.PipelineResult` as structured
console output: source metadata, extracted events, unparsed lines, and
a summary.

The primary entry point is :func:`format_pipeline_result`, which returns
the formatted string.  :func:`print_pipeline_result` is a convenience
wrapper that writes directly to stdout.
"""

from __future__ import annotations

import sys

from syllabus_cal.models.event import Event
from syllabus_cal.pipeline import PipelineResult

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_DATE_FORMAT = "%a %b %d, %Y"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_pipeline_result(result: PipelineResult) -> str:
    """Render a :class:`PipelineResult` as structured console output.

    The output includes three labelled stages and a summary section:

    - **Stage 1** -- Source document and line count.
    - **Stage 2** -- Extracted events with date, category and colour.
    - **Stage 3** -- Lines for which no date was recognised.
    - **Summary** -- Counts, upcoming events, export path, warnings
      and pipeline duration.

    Args:
        result: The pipeline result to format.

    Returns:
        A multi-line string ready for console display.
    """
    lines: list[str] = []

    _append_banner(lines)
    _append_stage1(lines, result)
    _append_stage2(lines, result)
    _append_stage3(lines, result)
    _append_summary(lines, result)
    lines.append(_SEPARATOR)

    return "\n".join(lines)


def print_pipeline_result(result: PipelineResult) -> None:
    """Format and print a :class:`PipelineResult` to stdout."""
    sys.stdout.write(format_pipeline_result(result) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_banner(lines: list[str]) -> None:
    lines.append(_SEPARATOR)
    lines.append("  SYLLABUS-TO-CALENDAR")
    lines.append(_SEPARATOR)


def _append_stage1(lines: list[str], result: PipelineResult) -> None:
    lines.append("")
    lines.append("--- STAGE 1: Text Extracted ---")
    lines.append(f"  File: {result.source_path}")
    lines.append(f"  Lines: {result.line_count}")


def _append_stage2(lines: list[str], result: PipelineResult) -> None:
    lines.append("")
    lines.append("--- STAGE 2: Events Found ---")

    events = result.parse_result.events
    if not events:
        lines.append("  No dated events found in this syllabus.")
        return

    for idx, event in enumerate(events, start=1):
        lines.append(f"  {idx:>3}. {_format_event(event)}")


def _append_stage3(lines: list[str], result: PipelineResult) -> None:
    lines.append("")
    lines.append("--- STAGE 3: Unparsed Lines ---")

    unparsed = result.parse_result.unparsed
    if not unparsed:
        lines.append("  Every line was parsed.")
        return

    for line in unparsed:
        lines.append(f"  - {line}")


def _append_summary(lines: list[str], result: PipelineResult) -> None:
    stats = result.stats
    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  {result.parse_result.summary}")

    if stats.categories:
        breakdown = ", ".join(f"{name}: {count}" for name, count in sorted(stats.categories.items()))
        lines.append(f"  By category: {breakdown}")

    lines.append(f"  Upcoming: {stats.upcoming} (this week: {stats.this_week})")
    if stats.next_event is not None:
        lines.append(f"  Next: {_format_event(stats.next_event)}")

    if result.ics_path is not None:
        lines.append(f"  Calendar written to: {result.ics_path}")

    lines.append(f"  Warnings: {len(result.warnings)}")
    for warning in result.warnings:
        lines.append(f"    - {warning}")

    lines.append(f"  Pipeline duration: {result.duration_seconds:.1f}s")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _format_event(event: Event) -> str:
    """Format an event as ``"Mon Mar 16, 2026  [assignment #3b82f6]  Homework 3"``."""
    when = event.date.strftime(_DATE_FORMAT)
    return f"{when}  [{event.category.value} {event.color}]  {event.title}"
