"""Build agenda items from segmented minute items.

Minute items sharing a section title become one agenda item whose
``minute_entries`` keep document order. When a document has no resolution or
comment at all, the agenda is read from its largest numbered list, then from
a table with a "SUJET" column.
"""

import logging
import re
import time
from typing import Optional

from bs4 import BeautifulSoup

from pvparser.models import (
    UNTITLED,
    AgendaItem,
    MinuteEntry,
    MinuteType,
    Objective,
)
from pvparser.segmenter import ParsedMinuteItem
from pvparser.utils.html_parser import find_table_column, largest_ordered_list
from pvparser.utils.text import collapse_whitespace

logger = logging.getLogger(__name__)

MIN_LIST_ITEMS = 3
TABLE_SUBJECT_HEADER = "SUJET"

# "Sur une proposition de M. Jean Tremblay, appuyée par Mme Marie Roy, ..."
_PERSON = r"((?:(?:M\.|Mme|Mlle)\s+)?[^,.;\n]+)"
PROPOSER_RE = re.compile(r"(?:Sur une proposition d(?:e|u|')|Propos[ée]e? par)\s*" + _PERSON, re.IGNORECASE)
SECONDER_RE = re.compile(r"Appuy[ée]e?\s+par\s+" + _PERSON, re.IGNORECASE)


def new_timestamp() -> int:
    """Call-local millisecond stamp used to build agenda item ids."""
    return int(time.time() * 1000)


def _find_person(pattern: re.Pattern, content: str) -> Optional[str]:
    match = pattern.search(content)
    if not match:
        return None
    name = collapse_whitespace(match.group(1))
    return name or None


def extract_proposer(content: str) -> Optional[str]:
    return _find_person(PROPOSER_RE, content)


def extract_seconder(content: str) -> Optional[str]:
    return _find_person(SECONDER_RE, content)


def to_minute_entry(item: ParsedMinuteItem) -> MinuteEntry:
    content = item.content.strip()
    return MinuteEntry(
        type=item.minute_type,
        number=item.number,
        content=content,
        proposer=extract_proposer(content),
        seconder=extract_seconder(content),
    )


def group_by_section(items: list[ParsedMinuteItem]) -> dict[str, list[ParsedMinuteItem]]:
    """Group minute items by section title, in order of first appearance."""
    groups: dict[str, list[ParsedMinuteItem]] = {}
    for item in items:
        groups.setdefault(item.section_title, []).append(item)
    return groups


def build_agenda_items(items: list[ParsedMinuteItem],
                       stamp: Optional[int] = None) -> list[AgendaItem]:
    """Emit one agenda item per section, in first-occurrence order."""
    stamp = stamp if stamp is not None else new_timestamp()
    agenda_items = []

    for order, (title, group) in enumerate(group_by_section(items).items()):
        entries = [to_minute_entry(i) for i in group]
        has_resolution = any(e.type == MinuteType.RESOLUTION for e in entries)
        agenda_item = AgendaItem(
            id=f"imported-pv-{stamp}-{order}",
            order=order,
            title=title or UNTITLED,
            objective=Objective.DECISION if has_resolution else Objective.INFORMATION,
            minute_entries=entries,
        )
        agenda_item.mirror_first_entry()
        agenda_items.append(agenda_item)

    return agenda_items


def _information_items(titles: list[str], prefix: str, stamp: int) -> list[AgendaItem]:
    return [
        AgendaItem(id=f"{prefix}-{stamp}-{order}", order=order, title=title)
        for order, title in enumerate(titles)
    ]


def build_fallback_items(soup: BeautifulSoup, stamp: Optional[int] = None) -> list[AgendaItem]:
    """Agenda items for documents without any resolution or comment.

    Tries the largest ordered list (at least three items), then the first
    table with a "SUJET" header column. Returns [] if neither is found.
    """
    stamp = stamp if stamp is not None else new_timestamp()

    titles = largest_ordered_list(soup, min_items=MIN_LIST_ITEMS)
    if titles:
        logger.info(f"No minute markers; using ordered list with {len(titles)} items")
        return _information_items(titles, "imported-docx-auto", stamp)

    titles = find_table_column(soup, TABLE_SUBJECT_HEADER)
    if titles:
        logger.info(f"No minute markers; using agenda table with {len(titles)} rows")
        return _information_items(titles, "imported-docx-table", stamp)

    return []
