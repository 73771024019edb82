"""Benchmark suite for scoring classifier accuracy.

Scores the line classifier against annotated sample syllabi with
Precision/Recall/F1 metrics and formats a console summary.
"""

from __future__ import annotations

from syllabus_cal.benchmark.report import format_console_summary
from syllabus_cal.benchmark.runner import (
    BenchmarkResult,
    SampleResult,
    discover_samples,
    run_benchmark,
)
from syllabus_cal.benchmark.schema import SidecarExpectedEvent, SidecarSpec, load_sidecar
from syllabus_cal.benchmark.scoring import (
    AggregateScore,
    EventMatchDetail,
    SampleScore,
    aggregate_scores,
    score_sample,
)

__all__ = [
    "AggregateScore",
    "BenchmarkResult",
    "EventMatchDetail",
    "SampleResult",
    "SampleScore",
    "SidecarExpectedEvent",
    "SidecarSpec",
    "aggregate_scores",
    "discover_samples",
    "format_console_summary",
    "load_sidecar",
    "run_benchmark",
    "score_sample",
]
