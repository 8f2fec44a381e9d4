"""Word (.docx) to HTML conversion.

Uses mammoth's default style map, so paragraphs styled "Heading 1" become
``<h1>`` and bold runs become ``<strong>``.
"""

import io
import logging

import mammoth

from pvparser.exceptions import DocumentConversionError

logger = logging.getLogger(__name__)


def convert_docx_to_html(content: bytes) -> str:
    """Convert raw .docx bytes to an HTML fragment.

    Args:
        content: The .docx file contents.

    Returns:
        HTML string (body content only, no ``<html>`` wrapper).

    Raises:
        DocumentConversionError: If the bytes are not a readable .docx file.
    """
    if not content:
        raise DocumentConversionError("Empty document")

    try:
        result = mammoth.convert_to_html(io.BytesIO(content))
    except Exception as e:
        raise DocumentConversionError(f"Could not convert document to HTML: {e}") from e

    if result.messages:
        for message in result.messages:
            logger.warning(f"mammoth {message.type}: {message.message}")

    return result.value
