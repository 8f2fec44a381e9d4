"""PDF text extraction for agenda documents.

Uses pdfplumber for text extraction.
"""

import io
import logging
from pathlib import Path

import pdfplumber

from pvparser.exceptions import DocumentConversionError

logger = logging.getLogger(__name__)


def _open(source):
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(source))
    return pdfplumber.open(str(source) if isinstance(source, Path) else source)


def extract_text_by_page(source: str | Path | bytes) -> list[str]:
    """Extract text from each page of a PDF.

    Args:
        source: Path to the PDF file or its raw bytes.

    Returns:
        List of strings, one per page.

    Raises:
        DocumentConversionError: If the file cannot be opened as a PDF.
    """
    pages = []
    try:
        with _open(source) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                pages.append(text or "")
    except Exception as e:
        raise DocumentConversionError(f"Could not read PDF: {e}") from e
    logger.debug(f"Extracted {len(pages)} PDF pages")
    return pages


def extract_text_from_pdf(source: str | Path | bytes) -> str:
    """Extract all text from a PDF file, one line per text line, pages joined."""
    return "\n".join(extract_text_by_page(source))
