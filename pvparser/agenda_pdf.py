"""Agenda (ordre du jour) import from PDF.

Agendas are published as PDFs with numbered items:

    13e ASSEMBLÉE ORDINAIRE
    Mardi 14 mars 2023
    1. Mot de bienvenue
    2) Adoption de l'ordre du jour
    3.
    Apiculture urbaine

A number alone on its line takes the next line as its title; other
unnumbered lines continue the current title.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from pvparser.agenda_builder import new_timestamp
from pvparser.metadata import extract_date
from pvparser.models import AgendaItem, ParsedMeetingData
from pvparser.utils.pdf_parser import extract_text_from_pdf

logger = logging.getLogger(__name__)

DEFAULT_AGENDA_TIME = "17:00"

# "1. Mot de bienvenue", "2) Adoption"; not "13e Assemblée" or "2025"
AGENDA_ITEM_RE = re.compile(r"^(\d+)[.)]\s+(.+)")
NUMBER_ONLY_RE = re.compile(r"^(\d+)[.)]\s*$")


def find_title_line(lines: list[str]) -> Optional[str]:
    """First line mentioning ASSEMBLÉE."""
    for line in lines:
        if "ASSEMBLÉE" in line.upper():
            return line
    return None


def parse_agenda_lines(lines: list[str], stamp: Optional[int] = None) -> list[AgendaItem]:
    """Build agenda items from trimmed, non-empty text lines."""
    stamp = stamp if stamp is not None else new_timestamp()
    titles: list[str] = []
    current: Optional[str] = None

    for line in lines:
        item_match = AGENDA_ITEM_RE.match(line)
        if item_match or NUMBER_ONLY_RE.match(line):
            if current:
                titles.append(current)
            current = item_match.group(2).strip() if item_match else ""
        elif current is not None:
            current = f"{current} {line}" if current else line

    if current:
        titles.append(current)

    return [
        AgendaItem(id=f"imported-{stamp}-{order}", order=order, title=title)
        for order, title in enumerate(titles)
    ]


def parse_agenda_text(text: str) -> ParsedMeetingData:
    """Parse agenda text extracted from a PDF."""
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    # Text extraction may split the date across lines
    date = extract_date(text.replace("\n", " "), time=DEFAULT_AGENDA_TIME)
    items = parse_agenda_lines(lines)

    logger.info(f"  Agenda items: {len(items)}")
    return ParsedMeetingData(
        title=find_title_line(lines),
        date=date,
        agenda_items=items,
    )


def parse_agenda_pdf(source: str | Path | bytes) -> ParsedMeetingData:
    """Parse an agenda PDF into meeting data with Information items.

    Raises:
        DocumentConversionError: If the PDF cannot be read.
    """
    logger.info(f"Parsing agenda PDF: {source if not isinstance(source, bytes) else '(in-memory document)'}")
    return parse_agenda_text(extract_text_from_pdf(source))
