"""Minutes (procès-verbal) parsing pipeline.

Turns a signed PV document into structured meeting data:
  - meeting title, date and number
  - attendance roster (present, also present, absent)
  - agenda items, each carrying its resolutions and comments

The parse either returns a complete ParsedMeetingData or raises
DocumentConversionError; fields that cannot be found are left empty.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Union

from pvparser.agenda_builder import build_agenda_items, build_fallback_items, new_timestamp
from pvparser.agenda_pdf import parse_agenda_pdf
from pvparser.attendance import extract_attendance
from pvparser.exceptions import DocumentConversionError, UnsupportedDocumentError
from pvparser.metadata import extract_metadata
from pvparser.models import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    TEXT_MEDIA_TYPE,
    BlockKind,
    MinuteType,
    ParsedMeetingData,
    RawDocument,
    TextBlock,
)
from pvparser.segmenter import segment_blocks
from pvparser.utils.docx_converter import convert_docx_to_html
from pvparser.utils.html_parser import extract_blocks, extract_full_text, load_html
from pvparser.utils.text import strip_invisible

logger = logging.getLogger(__name__)

DocumentSource = Union[RawDocument, bytes, str, Path, BinaryIO]

MEDIA_TYPES_BY_SUFFIX = {
    ".docx": DOCX_MEDIA_TYPE,
    ".pdf": PDF_MEDIA_TYPE,
    ".txt": TEXT_MEDIA_TYPE,
}


def read_document(source: DocumentSource, media_type: str = DOCX_MEDIA_TYPE) -> RawDocument:
    """Load a document from a path, bytes or binary file object.

    For paths the media type is taken from the file extension when known.

    Raises:
        DocumentConversionError: If the path cannot be read.
    """
    if isinstance(source, RawDocument):
        return source
    if isinstance(source, (bytes, bytearray)):
        return RawDocument(content=bytes(source), media_type=media_type)
    if isinstance(source, (str, Path)):
        path = Path(source)
        media_type = MEDIA_TYPES_BY_SUFFIX.get(path.suffix.lower(), media_type)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise DocumentConversionError(f"Could not read {path}: {e}") from e
        return RawDocument(content=content, media_type=media_type, filename=path.name)
    return RawDocument(
        content=source.read(),
        media_type=media_type,
        filename=getattr(source, "name", "") or "",
    )


def _parse_text_and_blocks(full_text: str, blocks: list[TextBlock],
                           soup=None) -> ParsedMeetingData:
    stamp = new_timestamp()
    metadata = extract_metadata(full_text)
    attendees = extract_attendance(full_text)

    items = segment_blocks(blocks)
    agenda_items = build_agenda_items(items, stamp=stamp)
    if not agenda_items and soup is not None:
        agenda_items = build_fallback_items(soup, stamp=stamp)

    data = ParsedMeetingData(
        title=metadata.title,
        date=metadata.date,
        meeting_number=metadata.meeting_number,
        agenda_items=agenda_items,
        attendees=attendees,
    )

    logger.info(f"  Meeting: {data.title or '(no title)'} / {data.date or '(no date)'}")
    logger.info(f"  Attendees found: {len(attendees)}")
    logger.info(f"  Agenda items: {len(agenda_items)}, minute entries: {len(data.minute_entries)}")
    if not agenda_items:
        logger.warning("No resolutions, comments or agenda list found in document")
    return data


def parse_minutes_html(html: str) -> ParsedMeetingData:
    """Parse minutes already converted to HTML."""
    soup = load_html(html)
    return _parse_text_and_blocks(extract_full_text(soup), extract_blocks(soup), soup)


def parse_agenda_docx(file: DocumentSource) -> ParsedMeetingData:
    """Parse a Word minutes document into structured meeting data.

    This is the main entry point.

    Args:
        file: Path, raw bytes, binary file object or RawDocument of a .docx.

    Raises:
        DocumentConversionError: If the document cannot be converted.
    """
    document = read_document(file, DOCX_MEDIA_TYPE)
    logger.info(f"Parsing minutes: {document.filename or '(in-memory document)'}")
    html = convert_docx_to_html(document.content)
    return parse_minutes_html(html)


def parse_minutes_text(text: str) -> ParsedMeetingData:
    """Parse minutes pasted as plain text, one paragraph per line.

    Plain text carries no heading or bold information, so section titles come
    only from plausible title lines.
    """
    text = strip_invisible(text)
    blocks = [
        TextBlock(kind=BlockKind.PARAGRAPH, text=line)
        for line in text.splitlines()
        if line.strip()
    ]
    return _parse_text_and_blocks(text, blocks)


def parse_document(document: RawDocument) -> ParsedMeetingData:
    """Parse a document according to its declared media type."""
    if document.media_type == DOCX_MEDIA_TYPE:
        return parse_agenda_docx(document)
    if document.media_type == PDF_MEDIA_TYPE:
        return parse_agenda_pdf(document.content)
    if document.media_type == TEXT_MEDIA_TYPE:
        try:
            text = document.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentConversionError(f"Text document is not UTF-8: {e}") from e
        return parse_minutes_text(text)
    raise UnsupportedDocumentError(f"Unsupported media type: {document.media_type}")


# ── Human-readable report ────────────────────────────────────────────────

def format_report(data: ParsedMeetingData) -> str:
    """Format parsed meeting data into a human-readable report."""
    lines = []
    lines.append(f"{'=' * 70}")
    lines.append("PROCÈS-VERBAL IMPORT REPORT")
    lines.append(f"{'=' * 70}")
    lines.append(f"Title:   {data.title or '(not found)'}")
    lines.append(f"Date:    {data.date or '(not found)'}")
    lines.append(f"Number:  {data.meeting_number or '(not found)'}")
    lines.append(f"{'─' * 70}")

    present = [a for a in data.attendees if a.is_present]
    absent = [a for a in data.attendees if not a.is_present]
    if data.attendees:
        lines.append(f"\nATTENDANCE ({len(present)} present, {len(absent)} absent)")
        for a in present:
            lines.append(f"  + {a.name} ({a.role})")
        for a in absent:
            lines.append(f"  - {a.name}")

    lines.append(f"\nAGENDA ITEMS ({len(data.agenda_items)})")
    for item in data.agenda_items:
        lines.append(f"  {item.order + 1}. {item.title} [{item.objective_value}]")
        for entry in item.minute_entries:
            label = "Résolution" if entry.type == MinuteType.RESOLUTION else "Commentaire"
            lines.append(f"     * {label} {entry.number}")
            if entry.proposer:
                seconder = f", appuyé par {entry.seconder}" if entry.seconder else ""
                lines.append(f"       Proposé par {entry.proposer}{seconder}")

    entries = data.minute_entries
    resolutions = sum(1 for e in entries if e.type == MinuteType.RESOLUTION)
    lines.append(f"\n{'=' * 70}")
    lines.append(f"Total: {resolutions} resolutions, {len(entries) - resolutions} comments")
    lines.append(f"{'=' * 70}")

    return "\n".join(lines)
