"""Custom exceptions for syllabus-cal.

The line classifier itself never raises: unrecognised lines are reported
as unparsed.  These exceptions cover the collaborators around it, namely
reading a source document and writing a calendar file.
"""

from __future__ import annotations

from pathlib import Path


class TextExtractionError(Exception):
    """Raised when a source document cannot be turned into plain text.

    Covers unsupported file types and PDFs that the extractor cannot
    open or read.

    Attributes:
        path: The document that failed to extract.
    """

    def __init__(self, message: str, path: str | Path = "") -> None:
        super().__init__(message)
        self.path = str(path)


class ExportError(Exception):
    """Raised when extracted events cannot be exported to an ``.ics`` file."""
