"""Keyword-based category detection for syllabus lines.

Categories are tested in a fixed priority order and the first match
wins, so ``"Midterm exam during lecture"`` is an exam, not a lecture.
"""

from __future__ import annotations

import re

from syllabus_cal.models.event import Category

# Ordered by priority.  Patterns match whole words, case-insensitively.
_CATEGORY_PATTERNS: tuple[tuple[Category, re.Pattern[str]], ...] = (
    (Category.EXAM, re.compile(r"\b(exam|test|midterm|final)\b", re.IGNORECASE)),
    (Category.QUIZ, re.compile(r"\b(quiz|pop quiz)\b", re.IGNORECASE)),
    (Category.ASSIGNMENT, re.compile(r"\b(assignment|hw|homework|due)\b", re.IGNORECASE)),
    (Category.PROJECT, re.compile(r"\b(project|paper|presentation)\b", re.IGNORECASE)),
    (Category.OFFICE_HOURS, re.compile(r"\b(office hours?|office|hours)\b", re.IGNORECASE)),
    (Category.HOLIDAY, re.compile(r"\b(holiday|break|no class)\b", re.IGNORECASE)),
    (Category.LECTURE, re.compile(r"\b(lecture|class|session)\b", re.IGNORECASE)),
)


def detect_category(text: str) -> Category:
    """Classify *text* into a :class:`Category`.

    Args:
        text: The full syllabus line (not just the extracted title).

    Returns:
        The highest-priority matching category, or
        :attr:`Category.OTHER` when no keyword is present.
    """
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(text):
            return category
    return Category.OTHER
