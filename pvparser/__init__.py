"""Parser for French municipal committee minutes (procès-verbaux).

Public entry points:
    parse_agenda_docx   -- .docx minutes -> ParsedMeetingData
    match_pv_to_agenda  -- link parsed sections to an existing agenda
"""

from pvparser.agenda_pdf import parse_agenda_pdf
from pvparser.exceptions import DocumentConversionError, PVParserError
from pvparser.matcher import match_pv_to_agenda, merge_pv_into_agenda
from pvparser.minutes import (
    parse_agenda_docx,
    parse_document,
    parse_minutes_html,
    parse_minutes_text,
)
from pvparser.models import (
    AgendaItem,
    Attendee,
    MinuteEntry,
    ParsedMeetingData,
    RawDocument,
)

__all__ = [
    "AgendaItem",
    "Attendee",
    "DocumentConversionError",
    "MinuteEntry",
    "PVParserError",
    "ParsedMeetingData",
    "RawDocument",
    "match_pv_to_agenda",
    "merge_pv_into_agenda",
    "parse_agenda_docx",
    "parse_agenda_pdf",
    "parse_document",
    "parse_minutes_html",
    "parse_minutes_text",
]
