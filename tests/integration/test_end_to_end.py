"""Integration tests for the end-to-end pipeline.

These tests use the real ``dateparser`` search and the sample syllabi in
``samples/``.  Sample headers may or may not be read as dates by the
natural-language search, so assertions focus on the expected events
being found rather than on exact unparsed counts.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from syllabus_cal.benchmark.runner import run_benchmark
from syllabus_cal.benchmark.schema import load_sidecar
from syllabus_cal.classifier import classify
from syllabus_cal.demo_output import format_pipeline_result
from syllabus_cal.models.event import Category
from syllabus_cal.pipeline import run_pipeline

# ---------------------------------------------------------------------------
# Frozen reference datetime and sample paths
# ---------------------------------------------------------------------------

FROZEN_NOW = datetime(2026, 1, 12, 9, 0, tzinfo=timezone.utc)

SAMPLES = Path(__file__).resolve().parents[2] / "samples"
BASIC = SAMPLES / "basic" / "intro_programming.txt"
PROSE = SAMPLES / "prose" / "research_methods.txt"


# ---------------------------------------------------------------------------
# Natural-language dates
# ---------------------------------------------------------------------------


class TestNaturalLanguage:
    def test_absolute_date_in_sentence(self) -> None:
        result = classify("The paper is due on December 12, 2026", reference=FROZEN_NOW)

        assert len(result.events) == 1
        event = result.events[0]
        assert event.date.date() == date(2026, 12, 12)
        assert event.title == "The paper is due"
        assert event.category is Category.ASSIGNMENT

    def test_relative_date_resolved_from_reference(self) -> None:
        reference = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

        result = classify("Submit your project next Monday", reference=reference)

        assert len(result.events) == 1
        event = result.events[0]
        assert event.date.date() == date(2026, 10, 26)
        assert event.title == "Submit your project"
        assert event.category is Category.PROJECT

    @pytest.mark.parametrize(
        ("line", "title", "expected", "category"),
        [
            ("Quiz 2 on Mar 5", "Quiz 2", date(2026, 3, 5), Category.QUIZ),
            ("Quiz 2 on March 5", "Quiz 2", date(2026, 3, 5), Category.QUIZ),
            ("Homework 3 due March 5", "Homework 3 due", date(2026, 3, 5), Category.ASSIGNMENT),
            ("Exam on 3/5", "Exam", date(2026, 3, 5), Category.EXAM),
            ("Lab due Sept 5", "Lab due", date(2026, 9, 5), Category.ASSIGNMENT),
            ("3/15/26 - Quiz", "Quiz", date(2026, 3, 15), Category.QUIZ),
        ],
    )
    def test_calendar_date_inside_line_uses_reference_year(
        self,
        line: str,
        title: str,
        expected: date,
        category: Category,
    ) -> None:
        reference = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

        result = classify(line, reference=reference)

        assert result.unparsed == []
        assert [(e.title, e.date.date(), e.category) for e in result.events] == [
            (title, expected, category)
        ]

    def test_percentage_is_not_a_date(self) -> None:
        result = classify("Grading policy: 40% exams", reference=FROZEN_NOW)

        assert result.events == []
        assert result.unparsed == ["Grading policy: 40% exams"]


# ---------------------------------------------------------------------------
# Sample syllabi
# ---------------------------------------------------------------------------


class TestSampleFiles:
    @pytest.mark.parametrize("txt_path", [BASIC, PROSE], ids=["basic", "prose"])
    def test_expected_dates_found(self, txt_path: Path) -> None:
        sidecar = load_sidecar(txt_path.with_suffix(".expected.json"))

        result = classify(txt_path.read_text(encoding="utf-8"), reference=sidecar.reference_datetime)

        found = {e.date.date() for e in result.events}
        for expected in sidecar.expected_events:
            assert expected.date in found, expected.title

    def test_structured_sample_titles_and_categories(self) -> None:
        sidecar = load_sidecar(BASIC.with_suffix(".expected.json"))

        result = classify(BASIC.read_text(encoding="utf-8"), reference=sidecar.reference_datetime)

        actual = {(e.title, e.date.date(), e.category) for e in result.events}
        for expected in sidecar.expected_events:
            assert (expected.title, expected.date, expected.category) in actual

    def test_benchmark_recall_on_structured_sample(self, tmp_path: Path) -> None:
        result = run_benchmark(SAMPLES / "basic", tmp_path)

        assert len(result.sample_results) == 1
        assert result.aggregate is not None
        assert result.aggregate.sample_count == 1
        assert result.aggregate.overall_fn == 0


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------


class TestPipeline:
    def test_pipeline_with_ics_export(self, tmp_path: Path) -> None:
        ics_path = tmp_path / "cs101.ics"

        result = run_pipeline(BASIC, current_datetime=FROZEN_NOW, ics_path=ics_path)

        assert result.warnings == []
        assert result.ics_path == ics_path
        assert len(result.parse_result.events) >= 9
        content = ics_path.read_text(encoding="utf-8")
        assert content.count("BEGIN:VEVENT") == len(result.parse_result.events)
        assert "Final exam" in content

        output = format_pipeline_result(result)
        assert "Thu Apr 30, 2026  [exam #ef4444]  Final exam" in output
        assert f"Calendar written to: {ics_path}" in output
