"""Unit tests for benchmark event pairing and P/R/F1 scoring."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from syllabus_cal.benchmark.schema import SidecarExpectedEvent
from syllabus_cal.benchmark.scoring import (
    _compute_prf,
    aggregate_scores,
    score_sample,
)
from syllabus_cal.models.event import Category, Event


def _actual(title: str, day: int, category: str = "exam") -> Event:
    return Event(title=title, date=datetime(2026, 3, day, tzinfo=timezone.utc), category=category)


def _expected(title: str, day: int, category: str = "exam") -> SidecarExpectedEvent:
    return SidecarExpectedEvent(title=title, date=date(2026, 3, day), category=Category(category))


# ---------------------------------------------------------------------------
# _compute_prf
# ---------------------------------------------------------------------------


class TestComputePrf:
    def test_all_zero_is_perfect(self) -> None:
        assert _compute_prf(0, 0, 0) == (1.0, 1.0, 1.0)

    def test_mixed_counts(self) -> None:
        precision, recall, f1 = _compute_prf(3, 1, 2)

        assert precision == pytest.approx(0.75)
        assert recall == pytest.approx(0.6)
        assert f1 == pytest.approx(2 * 0.75 * 0.6 / 1.35)

    def test_only_false_positives(self) -> None:
        assert _compute_prf(0, 2, 0) == (0.0, 1.0, 0.0)


# ---------------------------------------------------------------------------
# score_sample
# ---------------------------------------------------------------------------


class TestScoreSample:
    def test_exact_match(self) -> None:
        score = score_sample([_actual("Midterm exam", 5)], [_expected("Midterm exam", 5)])

        assert (score.tp, score.fp, score.fn) == (1, 0, 0)
        assert score.f1 == 1.0
        assert score.per_event_details[0].classification == "tp"

    def test_fuzzy_title_within_moderate(self) -> None:
        score = score_sample(
            [_actual("Midterm exam in room 101", 5)],
            [_expected("Midterm exam", 5)],
            "moderate",
        )

        assert score.tp == 1

    def test_strict_requires_exact_title(self) -> None:
        score = score_sample(
            [_actual("Midterm exam in room 101", 5)],
            [_expected("Midterm exam", 5)],
            "strict",
        )

        assert (score.tp, score.fp, score.fn) == (0, 1, 1)
        assert "title (strict exact)" in score.per_event_details[0].mismatch_reasons[0]

    def test_strict_ignores_case(self) -> None:
        score = score_sample([_actual("MIDTERM EXAM", 5)], [_expected("Midterm exam", 5)], "strict")

        assert score.tp == 1

    def test_category_mismatch(self) -> None:
        score = score_sample(
            [_actual("Quiz 2", 5, "exam")],
            [_expected("Quiz 2", 5, "quiz")],
        )

        assert (score.tp, score.fp, score.fn) == (0, 1, 1)
        reasons = score.per_event_details[0].mismatch_reasons
        assert reasons == ["category: expected 'quiz', got 'exam'"]

    def test_different_dates_never_pair(self) -> None:
        score = score_sample([_actual("Midterm exam", 5)], [_expected("Midterm exam", 6)])

        assert (score.tp, score.fp, score.fn) == (0, 1, 1)
        assert [d.classification for d in score.per_event_details] == ["fp", "fn"]
        assert all(not d.mismatch_reasons for d in score.per_event_details)

    def test_best_title_paired_first(self) -> None:
        actual = [_actual("Lab 3 review", 9, "other"), _actual("Final exam", 9)]
        expected = [_expected("Final exam", 9)]

        score = score_sample(actual, expected)

        assert (score.tp, score.fp, score.fn) == (1, 1, 0)
        fp = [d for d in score.per_event_details if d.classification == "fp"]
        assert fp[0].actual_event is not None
        assert fp[0].actual_event.title == "Lab 3 review"

    def test_empty_inputs(self) -> None:
        score = score_sample([], [])

        assert (score.precision, score.recall, score.f1) == (1.0, 1.0, 1.0)

    def test_metadata_carried(self) -> None:
        score = score_sample([], [], "relaxed", sample_name="basic/cs101", category="basic")

        assert score.sample_name == "basic/cs101"
        assert score.category == "basic"
        assert score.tolerance == "relaxed"


# ---------------------------------------------------------------------------
# aggregate_scores
# ---------------------------------------------------------------------------


class TestAggregateScores:
    def test_empty(self) -> None:
        agg = aggregate_scores([])

        assert agg.sample_count == 0
        assert agg.overall_f1 == 1.0
        assert agg.per_category == []

    def test_micro_average_and_categories(self) -> None:
        perfect = score_sample(
            [_actual("Final exam", 9)],
            [_expected("Final exam", 9)],
            sample_name="basic/a",
            category="basic",
        )
        missed = score_sample(
            [],
            [_expected("Essay", 10, "project")],
            sample_name="prose/b",
            category="prose",
        )

        agg = aggregate_scores([missed, perfect])

        assert (agg.overall_tp, agg.overall_fp, agg.overall_fn) == (1, 0, 1)
        assert agg.overall_precision == 1.0
        assert agg.overall_recall == pytest.approx(0.5)
        assert [c.category for c in agg.per_category] == ["basic", "prose"]
        assert agg.per_category[1].recall == 0.0
        assert agg.sample_count == 2
