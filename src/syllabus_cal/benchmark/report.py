"""Console report for benchmark results.

Compact summary with overall and per-category P/R/F1, samples whose
unparsed-line count differs from the sidecar, and every mismatched
event.  Follows the ``demo_output.py`` pattern of building a list of
strings.
"""

from __future__ import annotations

from syllabus_cal.benchmark.runner import BenchmarkResult
from syllabus_cal.benchmark.scoring import CategoryScore, EventMatchDetail

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH


def format_console_summary(result: BenchmarkResult) -> str:
    """Format a compact console summary of benchmark results.

    Args:
        result: The benchmark result to format.

    Returns:
        Multi-line string for console display.
    """
    lines: list[str] = []

    lines.append(_SEPARATOR)
    lines.append("  BENCHMARK RESULTS")
    lines.append(_SEPARATOR)

    agg = result.aggregate
    if agg is None or agg.sample_count == 0:
        lines.append("")
        lines.append("  No scored samples.")
        lines.append(_SEPARATOR)
        return "\n".join(lines)

    lines.append("")
    lines.append("--- OVERALL ---")
    lines.append(f"  Samples scored: {agg.sample_count}")
    lines.append(
        f"  Precision: {agg.overall_precision:.4f}  "
        f"Recall: {agg.overall_recall:.4f}  "
        f"F1: {agg.overall_f1:.4f}"
    )
    lines.append(f"  TP: {agg.overall_tp}  FP: {agg.overall_fp}  FN: {agg.overall_fn}")

    if agg.per_category:
        lines.append("")
        lines.append("--- PER CATEGORY ---")
        for cat in agg.per_category:
            lines.append(_format_category_line(cat))

    mismatched = [sr for sr in result.sample_results if sr.unparsed_mismatch]
    if mismatched:
        lines.append("")
        lines.append("--- UNPARSED LINE COUNTS ---")
        for sr in mismatched:
            lines.append(f"  {sr.sample_name}: {sr.unparsed_mismatch}")

    misses = [
        (sr.sample_name, detail)
        for sr in result.sample_results
        if sr.score is not None
        for detail in sr.score.per_event_details
        # A mismatched pair is recorded as both fp and fn; report it once.
        if detail.classification == "fp"
        or (detail.classification == "fn" and not detail.mismatch_reasons)
    ]
    if misses:
        lines.append("")
        lines.append("--- MISSES ---")
        for sample_name, detail in misses:
            lines.append(f"  {sample_name}: {_format_miss(detail)}")

    lines.append("")
    n_samples = len(result.sample_results) or 1
    lines.append(
        f"  Total latency: {result.total_latency_s:.2f}s  "
        f"Avg: {result.total_latency_s / n_samples:.3f}s/sample"
    )
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def _format_category_line(cat: CategoryScore) -> str:
    """Format a line like ``"  basic (2): P=0.95 R=0.90 F1=0.93"``."""
    return (
        f"  {cat.category} ({cat.sample_count}): "
        f"P={cat.precision:.2f} R={cat.recall:.2f} F1={cat.f1:.2f}"
    )


def _format_miss(detail: EventMatchDetail) -> str:
    if detail.mismatch_reasons:
        return "; ".join(detail.mismatch_reasons)
    if detail.classification == "fp" and detail.actual_event is not None:
        event = detail.actual_event
        return f"unexpected {event.title!r} on {event.date.date().isoformat()}"
    if detail.expected_event is not None:
        expected = detail.expected_event
        return f"missed {expected.title!r} on {expected.date.isoformat()}"
    return detail.classification
