"""Scoring engine for benchmark Precision/Recall/F1 metrics.

Pairs classifier events with the expected events from a sidecar, then
classifies each pair as a true positive (TP) or a mismatch.  Unmatched
actual events are false positives (FP) and unmatched expected events are
false negatives (FN).

Pairing only considers events on the same calendar date; among those,
the pairs with the most similar titles (``rapidfuzz`` token-set ratio)
are taken first.

Functions:
    :func:`score_sample` -- score a single sample's classifier output.
    :func:`aggregate_scores` -- aggregate per-sample scores into overall
        and per-category P/R/F1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from rapidfuzz.fuzz import token_set_ratio

from syllabus_cal.benchmark.schema import SidecarExpectedEvent
from syllabus_cal.models.event import Event

Tolerance = Literal["strict", "moderate", "relaxed"]

# Minimum token-set ratio (0-100) for a title to count as matching.
TITLE_RATIO_MIN: dict[str, float] = {
    "strict": 100.0,
    "moderate": 80.0,
    "relaxed": 60.0,
}

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EventMatchDetail:
    """Detail record for a single event pairing outcome.

    Attributes:
        classification: One of ``"tp"``, ``"fp"``, or ``"fn"``.
        actual_event: The classifier event (``None`` for FN).
        expected_event: The expected sidecar event (``None`` for FP).
        mismatch_reasons: Reasons a paired match failed (empty for TP
            and for unpaired events).
    """

    classification: Literal["tp", "fp", "fn"]
    actual_event: Event | None = None
    expected_event: SidecarExpectedEvent | None = None
    mismatch_reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SampleScore:
    """Score result for a single benchmark sample.

    Attributes:
        sample_name: Identifier for the sample (e.g. ``"basic/cs101"``).
        category: Sample category, taken from its directory.
        tolerance: Tolerance level used for scoring.
        tp: True positive count.
        fp: False positive count.
        fn: False negative count.
        precision: Precision metric (0.0-1.0).
        recall: Recall metric (0.0-1.0).
        f1: F1 score (0.0-1.0).
        per_event_details: Detailed classification for each event.
    """

    sample_name: str
    category: str
    tolerance: str
    tp: int
    fp: int
    fn: int
    precision: float
    recall: float
    f1: float
    per_event_details: list[EventMatchDetail] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryScore:
    """Aggregate P/R/F1 for a single sample category."""

    category: str
    tp: int
    fp: int
    fn: int
    precision: float
    recall: float
    f1: float
    sample_count: int


@dataclass(frozen=True)
class AggregateScore:
    """Aggregate benchmark scores across all samples (micro-averaged)."""

    overall_tp: int
    overall_fp: int
    overall_fn: int
    overall_precision: float
    overall_recall: float
    overall_f1: float
    per_category: list[CategoryScore] = field(default_factory=list)
    sample_count: int = 0


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _compute_prf(tp: int, fp: int, fn: int) -> tuple[float, float, float]:
    """Compute Precision, Recall, and F1 from raw counts.

    With no predictions and nothing expected all three are 1.0.  An
    empty denominator yields 1.0 for that metric (nothing was wrongly
    predicted, or nothing was missed).
    """
    if tp == 0 and fp == 0 and fn == 0:
        return 1.0, 1.0, 1.0

    precision = tp / (tp + fp) if (tp + fp) > 0 else 1.0
    recall = tp / (tp + fn) if (tp + fn) > 0 else 1.0
    f1 = 2.0 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0

    return precision, recall, f1


def _pair_events(
    actual_events: list[Event],
    expected_events: list[SidecarExpectedEvent],
) -> list[tuple[int, int]]:
    """Greedily pair same-date events, most similar titles first.

    Returns:
        ``(actual_index, expected_index)`` pairs; each index appears at
        most once.
    """
    candidates: list[tuple[float, int, int]] = []
    for i, actual in enumerate(actual_events):
        for j, expected in enumerate(expected_events):
            if actual.date.date() == expected.date:
                candidates.append((token_set_ratio(actual.title, expected.title), i, j))

    # Highest ratio first; ties resolved by input order.
    candidates.sort(key=lambda c: (-c[0], c[1], c[2]))

    used_actual: set[int] = set()
    used_expected: set[int] = set()
    pairs: list[tuple[int, int]] = []
    for _ratio, i, j in candidates:
        if i in used_actual or j in used_expected:
            continue
        used_actual.add(i)
        used_expected.add(j)
        pairs.append((i, j))

    return pairs


def _check_event_match(
    actual: Event,
    expected: SidecarExpectedEvent,
    tolerance: Tolerance,
) -> list[str]:
    """Return the reasons a same-date pair is not a true positive."""
    reasons: list[str] = []

    if tolerance == "strict":
        if actual.title.strip().lower() != expected.title.strip().lower():
            reasons.append(f"title (strict exact): expected {expected.title!r}, got {actual.title!r}")
    else:
        ratio = token_set_ratio(actual.title, expected.title)
        if ratio < TITLE_RATIO_MIN[tolerance]:
            reasons.append(
                f"title: ratio={ratio:.1f} < {TITLE_RATIO_MIN[tolerance]} "
                f"(expected {expected.title!r}, got {actual.title!r})"
            )

    if actual.category != expected.category:
        reasons.append(
            f"category: expected {expected.category.value!r}, got {actual.category.value!r}"
        )

    return reasons


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_sample(
    actual_events: list[Event],
    expected_events: list[SidecarExpectedEvent],
    tolerance_level: Tolerance = "moderate",
    *,
    sample_name: str = "",
    category: str = "uncategorized",
) -> SampleScore:
    """Score a single sample by matching actual events to expected events.

    A pair outside tolerance counts as both a FP and a FN.

    Args:
        actual_events: Events produced by the classifier.
        expected_events: Events from the sidecar.
        tolerance_level: Title matching tolerance.
        sample_name: Human-readable sample name for reporting.
        category: Sample category for aggregation.

    Returns:
        A :class:`SampleScore` with TP/FP/FN counts, P/R/F1 metrics,
        and per-event classification details.
    """
    details: list[EventMatchDetail] = []
    tp = fp = fn = 0

    pairs = _pair_events(actual_events, expected_events)
    paired_actual = {i for i, _ in pairs}
    paired_expected = {j for _, j in pairs}

    for i, j in pairs:
        actual_event = actual_events[i]
        expected_event = expected_events[j]
        reasons = _check_event_match(actual_event, expected_event, tolerance_level)

        if not reasons:
            tp += 1
            details.append(
                EventMatchDetail(
                    classification="tp",
                    actual_event=actual_event,
                    expected_event=expected_event,
                )
            )
            continue

        fp += 1
        fn += 1
        details.append(
            EventMatchDetail(
                classification="fp",
                actual_event=actual_event,
                expected_event=expected_event,
                mismatch_reasons=reasons,
            )
        )
        details.append(
            EventMatchDetail(
                classification="fn",
                expected_event=expected_event,
                mismatch_reasons=reasons,
            )
        )

    for i, actual_event in enumerate(actual_events):
        if i not in paired_actual:
            fp += 1
            details.append(EventMatchDetail(classification="fp", actual_event=actual_event))

    for j, expected_event in enumerate(expected_events):
        if j not in paired_expected:
            fn += 1
            details.append(EventMatchDetail(classification="fn", expected_event=expected_event))

    precision, recall, f1 = _compute_prf(tp, fp, fn)

    return SampleScore(
        sample_name=sample_name,
        category=category,
        tolerance=tolerance_level,
        tp=tp,
        fp=fp,
        fn=fn,
        precision=precision,
        recall=recall,
        f1=f1,
        per_event_details=details,
    )


def aggregate_scores(sample_scores: list[SampleScore]) -> AggregateScore:
    """Aggregate per-sample scores into overall and per-category metrics.

    Uses micro-averaging: sums TP/FP/FN across all samples, then
    computes P/R/F1 from the totals.
    """
    if not sample_scores:
        return AggregateScore(
            overall_tp=0,
            overall_fp=0,
            overall_fn=0,
            overall_precision=1.0,
            overall_recall=1.0,
            overall_f1=1.0,
            sample_count=0,
        )

    total_tp = sum(s.tp for s in sample_scores)
    total_fp = sum(s.fp for s in sample_scores)
    total_fn = sum(s.fn for s in sample_scores)
    overall_p, overall_r, overall_f1 = _compute_prf(total_tp, total_fp, total_fn)

    categories: dict[str, list[SampleScore]] = {}
    for s in sample_scores:
        categories.setdefault(s.category, []).append(s)

    per_category: list[CategoryScore] = []
    for cat_name in sorted(categories):
        cat_samples = categories[cat_name]
        cat_tp = sum(s.tp for s in cat_samples)
        cat_fp = sum(s.fp for s in cat_samples)
        cat_fn = sum(s.fn for s in cat_samples)
        cat_p, cat_r, cat_f1 = _compute_prf(cat_tp, cat_fp, cat_fn)
        per_category.append(
            CategoryScore(
                category=cat_name,
                tp=cat_tp,
                fp=cat_fp,
                fn=cat_fn,
                precision=cat_p,
                recall=cat_r,
                f1=cat_f1,
                sample_count=len(cat_samples),
            )
        )

    return AggregateScore(
        overall_tp=total_tp,
        overall_fp=total_fp,
        overall_fn=total_fn,
        overall_precision=overall_p,
        overall_recall=overall_r,
        overall_f1=overall_f1,
        per_category=per_category,
        sample_count=len(sample_scores),
    )
