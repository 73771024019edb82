"""Benchmark runner for classifier accuracy.

Discovers sample syllabi, classifies each one against the reference date
from its sidecar, scores the result against the expected events, and
records a history line per run.

Key functions:
    :func:`discover_samples` -- find all .txt files with optional sidecars.
    :func:`run_benchmark` -- orchestrate classification, scoring, history.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from syllabus_cal.benchmark.schema import DEFAULT_REFERENCE, SidecarSpec, load_sidecar
from syllabus_cal.benchmark.scoring import (
    AggregateScore,
    SampleScore,
    aggregate_scores,
    score_sample,
)
from syllabus_cal.classifier import classify
from syllabus_cal.models.event import ParseResult

logger = logging.getLogger(__name__)

HISTORY_FILENAME = "benchmark_history.jsonl"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class SampleResult:
    """Result of running a single benchmark sample.

    Attributes:
        sample_name: Identifier like ``"basic/cs101"``.
        category: Sample category (e.g. ``"basic"``).
        txt_path: Path to the syllabus text.
        has_sidecar: Whether a sidecar was found.
        parse_result: The classifier output.
        score: The P/R/F1 score (``None`` if no sidecar).
        unparsed_mismatch: Set when the sidecar's ``expected_unparsed``
            differs from the actual count, e.g. ``"expected 2, got 3"``.
        latency_s: Wall-clock time for classification.
        error: Error message if the sidecar could not be loaded.
    """

    sample_name: str
    category: str
    txt_path: Path
    has_sidecar: bool = False
    parse_result: ParseResult | None = None
    score: SampleScore | None = None
    unparsed_mismatch: str | None = None
    latency_s: float = 0.0
    error: str | None = None


@dataclass
class BenchmarkResult:
    """Aggregate result of a full benchmark run."""

    sample_results: list[SampleResult] = field(default_factory=list)
    aggregate: AggregateScore | None = None
    total_latency_s: float = 0.0
    timestamp: str = ""


# ---------------------------------------------------------------------------
# Sample discovery
# ---------------------------------------------------------------------------


def discover_samples(
    directory: Path,
) -> list[tuple[Path, Path | None, str]]:
    """Discover sample .txt files with optional sidecar JSON files.

    Scans *directory* recursively for ``.txt`` files.  Each is paired
    with a sibling ``.expected.json`` sidecar if one exists.  Category
    is derived from the immediate subdirectory name; files directly in
    *directory* are categorized as ``"uncategorized"``.

    Returns:
        A sorted list of ``(txt_path, sidecar_path | None, category)``
        tuples, ordered by file path.
    """
    base = Path(directory)
    results: list[tuple[Path, Path | None, str]] = []

    for txt_path in sorted(base.rglob("*.txt")):
        sidecar_path = txt_path.with_suffix(".expected.json")
        relative = txt_path.relative_to(base)
        category = relative.parts[0] if len(relative.parts) > 1 else "uncategorized"
        results.append((txt_path, sidecar_path if sidecar_path.exists() else None, category))

    return results


# ---------------------------------------------------------------------------
# Main benchmark runner
# ---------------------------------------------------------------------------


def _run_sample(txt_path: Path, sidecar_path: Path | None, category: str) -> SampleResult:
    sample_name = f"{category}/{txt_path.stem}"
    sr = SampleResult(
        sample_name=sample_name,
        category=category,
        txt_path=txt_path,
        has_sidecar=sidecar_path is not None,
    )

    sidecar: SidecarSpec | None = None
    if sidecar_path is not None:
        try:
            sidecar = load_sidecar(sidecar_path)
        except (OSError, ValidationError) as exc:
            logger.warning("Failed to load sidecar for %s: %s", sample_name, exc)
            sr.error = f"Sidecar load failed: {exc}"

    reference = sidecar.reference_datetime if sidecar else DEFAULT_REFERENCE

    text = txt_path.read_text(encoding="utf-8")
    t0 = time.monotonic()
    sr.parse_result = classify(text, reference=reference)
    sr.latency_s = time.monotonic() - t0

    if sidecar is None:
        logger.warning("No sidecar for %s; skipping scoring", sample_name)
        return sr

    sr.score = score_sample(
        actual_events=sr.parse_result.events,
        expected_events=sidecar.expected_events,
        tolerance_level=sidecar.tolerance,
        sample_name=sample_name,
        category=category,
    )

    actual_unparsed = len(sr.parse_result.unparsed)
    if sidecar.expected_unparsed is not None and sidecar.expected_unparsed != actual_unparsed:
        sr.unparsed_mismatch = f"expected {sidecar.expected_unparsed}, got {actual_unparsed}"

    return sr


def run_benchmark(directory: Path, output_path: Path) -> BenchmarkResult:
    """Run the classifier against every sample in *directory*.

    Args:
        directory: Root directory containing sample syllabi.
        output_path: Directory for the JSONL run history.

    Returns:
        A :class:`BenchmarkResult` with all per-sample and aggregate data.
    """
    samples = discover_samples(directory)
    total = len(samples)
    result = BenchmarkResult(timestamp=datetime.now().isoformat())

    if total == 0:
        logger.warning("No samples found in %s", directory)
        return result

    scored: list[SampleScore] = []
    for idx, (txt_path, sidecar_path, category) in enumerate(samples, 1):
        sr = _run_sample(txt_path, sidecar_path, category)
        result.sample_results.append(sr)

        if sr.score is not None:
            scored.append(sr.score)
            status = f"P={sr.score.precision:.2f} R={sr.score.recall:.2f}"
        elif sr.error:
            status = "SIDECAR_ERROR"
        else:
            status = "no sidecar"
        print(f"[{idx}/{total}] {sr.sample_name}... {status}", file=sys.stderr)

    result.aggregate = aggregate_scores(scored)
    result.total_latency_s = sum(sr.latency_s for sr in result.sample_results)

    _append_history(output_path, result)
    return result


# ---------------------------------------------------------------------------
# JSONL history
# ---------------------------------------------------------------------------


def _append_history(output_path: Path, result: BenchmarkResult) -> None:
    """Append one JSONL line for this run to :data:`HISTORY_FILENAME`."""
    output_path.mkdir(parents=True, exist_ok=True)
    history_file = output_path / HISTORY_FILENAME

    agg = result.aggregate
    record = {
        "timestamp": result.timestamp,
        "sample_count": len(result.sample_results),
        "scored_count": agg.sample_count if agg else 0,
        "precision": round(agg.overall_precision, 4) if agg else None,
        "recall": round(agg.overall_recall, 4) if agg else None,
        "f1": round(agg.overall_f1, 4) if agg else None,
        "unparsed_lines": sum(
            len(sr.parse_result.unparsed) for sr in result.sample_results if sr.parse_result
        ),
    }

    with open(history_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(record) + "\n")

    logger.info("History appended to %s", history_file)
