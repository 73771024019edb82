"""Plain-text extraction from syllabus documents.

PDFs are read page by page with :mod:`pdfplumber`; text and Markdown
files are read as UTF-8.  The classifier only ever sees the resulting
string.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pdfplumber

from syllabus_cal.exceptions import TextExtractionError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = frozenset({".txt", ".md"})
PDF_SUFFIX = ".pdf"


def extract_pdf_text(path: Path) -> str:
    """Return the text of every page of the PDF at *path*, newline-joined.

    Pages without extractable text (e.g. scanned images) are skipped.

    Raises:
        TextExtractionError: If the PDF cannot be opened or read.
    """
    pages: list[str] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                if text:
                    pages.append(text)
            page_count = len(pdf.pages)
    except Exception as exc:
        raise TextExtractionError(f"Cannot read PDF {path}: {exc}", path) from exc

    logger.info("Extracted text from %d of %d page(s) in %s", len(pages), page_count, path)
    return "\n".join(pages)


def extract_text(file_path: str | Path) -> str:
    """Extract plain text from a syllabus document.

    Args:
        file_path: Path to a ``.pdf``, ``.txt`` or ``.md`` file.

    Returns:
        The document text.  May be empty.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        TextExtractionError: If the file type is unsupported or the
            document cannot be read.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Syllabus file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == PDF_SUFFIX:
        return extract_pdf_text(path)

    if suffix in TEXT_SUFFIXES:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise TextExtractionError(f"{path} is not valid UTF-8 text", path) from exc

    raise TextExtractionError(f"Unsupported file type {suffix or '(none)'!r}: {path}", path)
