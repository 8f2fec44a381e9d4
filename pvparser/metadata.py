"""Meeting metadata extraction: date, meeting number and PV title.

Each field is extracted independently; a field whose pattern does not match
is left as None.
"""

import logging
import re
from typing import Optional

from pvparser.models import ParsedMeetingMetadata
from pvparser.utils.text import collapse_whitespace

logger = logging.getLogger(__name__)

DEFAULT_MEETING_TIME = "19:00"

FRENCH_MONTHS = {
    "janvier": "01", "février": "02", "mars": "03", "avril": "04",
    "mai": "05", "juin": "06", "juillet": "07", "août": "08",
    "septembre": "09", "octobre": "10", "novembre": "11", "décembre": "12",
}

# "9 juin 2022", "le jeudi 14 septembre 2023"
DATE_RE = re.compile(
    r"(\d{1,2})\s+(janvier|février|mars|avril|mai|juin|juillet|août|"
    r"septembre|octobre|novembre|décembre)\s+(\d{4})",
    re.IGNORECASE,
)

# "9e ASSEMBLÉE", "12è assemblée", "3ème Assemblée"
MEETING_NUMBER_RE = re.compile(r"(\d+)\s*(?:e|è)(?:me)?\s+ASSEMBL[ÉE]E", re.IGNORECASE)

# "PROCÈS-VERBAL de la 9e assemblée ordinaire ... ."
TITLE_RE = re.compile(r"PROC[ÈE]S-VERBAL[^.]*\.", re.IGNORECASE)


def format_french_date(day: str, month_name: str, year: str,
                       time: str = DEFAULT_MEETING_TIME) -> Optional[str]:
    """Build an ISO date-time string from French date parts.

    Returns None if the month name is not a French month.
    """
    month = FRENCH_MONTHS.get(month_name.lower())
    if not month:
        return None
    return f"{year}-{month}-{day.zfill(2)}T{time}"


def extract_date(text: str, time: str = DEFAULT_MEETING_TIME) -> Optional[str]:
    """Extract the first French date in the text as ``YYYY-MM-DDTHH:MM``.

    The time is not read from the document; ``time`` is used as-is.
    """
    match = DATE_RE.search(text or "")
    if not match:
        return None
    return format_french_date(match.group(1), match.group(2), match.group(3), time)


def extract_meeting_number(text: str) -> Optional[str]:
    """Extract the meeting sequence number, zero-padded to two digits."""
    match = MEETING_NUMBER_RE.search(text or "")
    if not match:
        return None
    return match.group(1).zfill(2)


def extract_title(text: str) -> Optional[str]:
    """Extract the first PROCÈS-VERBAL sentence, up to and including its period."""
    match = TITLE_RE.search(text or "")
    if not match:
        return None
    return collapse_whitespace(match.group(0))


def extract_metadata(text: str) -> ParsedMeetingMetadata:
    metadata = ParsedMeetingMetadata(
        title=extract_title(text),
        date=extract_date(text),
        meeting_number=extract_meeting_number(text),
    )
    logger.debug(
        f"Metadata: title={metadata.title!r} date={metadata.date} "
        f"number={metadata.meeting_number}"
    )
    return metadata
