"""Attendance roster extraction from the PV header.

French minutes list attendance in three blocks:

    ÉTAIENT PRÉSENTS :
    M. Jean Tremblay, président
    Mme Marie Roy, vice-présidente
    ÉTAIENT AUSSI PRÉSENTS :
    Mme Julie Côté, conseillère responsable
    ÉTAIT ABSENT : M. Paul Gagnon

The same person may appear in several blocks; no de-duplication is done.
"""

import logging
import re
from typing import Optional

from pvparser.models import Attendee, generate_id

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "Membre"

# Ordered: "vice-président" contains "président" and "conseiller responsable"
# contains "conseiller", so the longer form must be tested first.
ROLE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"vice[-\s]?pr[ée]sident", re.IGNORECASE), "Vice-président(e)"),
    (re.compile(r"pr[ée]sident", re.IGNORECASE), "Président(e)"),
    (re.compile(r"secr[ée]taire", re.IGNORECASE), "Secrétaire"),
    (re.compile(r"conseill(?:er|[èe]re)\s+responsable", re.IGNORECASE), "Conseiller responsable"),
    (re.compile(r"conseill(?:er|[èe]re)", re.IGNORECASE), "Conseiller"),
]

_PLURAL = r"(?:\(?E\)?)?(?:\(?S\)?)?"
_ABSENT_MARKER = r"[ÉE]TAI(?:T|ENT)\s+ABSENT"
_AGENDA_MARKER = r"ORDRE\s+DU\s+JOUR|R[ÉE]SOLUTION\s+\d{2}-|COMMENTAIRE\s+\d{2}-"

PRESENT_BLOCK_RE = re.compile(
    r"[ÉE]TAIENT\s+PR[ÉE]SENT" + _PLURAL + r"\s*:?(.*?)"
    r"(?=[ÉE]TAIENT\s+AUSSI|" + _ABSENT_MARKER + "|" + _AGENDA_MARKER + r"|\Z)",
    re.IGNORECASE | re.DOTALL,
)

ALSO_PRESENT_BLOCK_RE = re.compile(
    r"[ÉE]TAIENT\s+AUSSI\s+PR[ÉE]SENT" + _PLURAL + r"\s*:?(.*?)"
    r"(?=" + _ABSENT_MARKER + "|" + _AGENDA_MARKER + r"|\Z)",
    re.IGNORECASE | re.DOTALL,
)

# One line: the rest of the marker line, or the next non-blank line when the
# marker stands alone.
ABSENT_LINE_RE = re.compile(
    _ABSENT_MARKER + _PLURAL + r"[ \t]*:?[ \t]*(?:\s*\n[ \t]*)?([^\n]*)",
    re.IGNORECASE,
)

_TITLE_MARKER = r"(?<![\w.])(?:MM\.|Mmes|Mme|Mlle|M\.)"
_NAME_TOKEN = r"[A-ZÀ-ÖØ-Þ][A-Za-zÀ-ÖØ-öø-ÿ'’\-]+"
_NOT_TITLE = r"(?!(?:MM|Mmes|Mme|Mlle)\b)"

# "M. Jean-Luc Tremblay, président du comité": the role runs to the next
# title marker.
ATTENDEE_RE = re.compile(
    _TITLE_MARKER + r"[ \t]+"
    r"(" + _NAME_TOKEN + r"(?:[ \t]+" + _NOT_TITLE + _NAME_TOKEN + r")*)"
    r"(?:[ \t]*,(.*?)(?=" + _TITLE_MARKER + r"[ \t]|\Z))?",
    re.DOTALL,
)

# Absence lines are terse: title plus exactly two capitalized words.
STRICT_ATTENDEE_RE = re.compile(
    _TITLE_MARKER + r"[ \t]+(" + _NAME_TOKEN + r"[ \t]+" + _NAME_TOKEN + r")"
)

MIN_NAME_LENGTH = 3


def classify_role(role_text: Optional[str]) -> str:
    """Map free role text to a role label; first matching pattern wins."""
    if not role_text:
        return DEFAULT_ROLE
    for pattern, label in ROLE_PATTERNS:
        if pattern.search(role_text):
            return label
    return DEFAULT_ROLE


def parse_attendee_block(block: str, is_present: bool = True) -> list[Attendee]:
    """Parse a block of "M./Mme Name[, role]" entries."""
    attendees = []
    for match in ATTENDEE_RE.finditer(block or ""):
        name = match.group(1).strip()
        if len(name) < MIN_NAME_LENGTH:
            continue
        role_text = (match.group(2) or "").strip().split("\n")[0]
        attendees.append(Attendee(
            id=generate_id(),
            name=name,
            role=classify_role(role_text),
            is_present=is_present,
        ))
    return attendees


def parse_absent_line(line: str) -> list[Attendee]:
    """Parse an absence line with the strict two-word name pattern."""
    return [
        Attendee(id=generate_id(), name=m.group(1), role=DEFAULT_ROLE, is_present=False)
        for m in STRICT_ATTENDEE_RE.finditer(line or "")
    ]


def extract_attendance(text: str) -> list[Attendee]:
    """Extract present, also-present and absent attendees, in that order."""
    attendees = []

    present_match = PRESENT_BLOCK_RE.search(text or "")
    if present_match:
        found = parse_attendee_block(present_match.group(1), is_present=True)
        logger.debug(f"Present block: {len(found)} attendees")
        attendees.extend(found)

    also_match = ALSO_PRESENT_BLOCK_RE.search(text or "")
    if also_match:
        found = parse_attendee_block(also_match.group(1), is_present=True)
        logger.debug(f"Also-present block: {len(found)} attendees")
        attendees.extend(found)

    absent_match = ABSENT_LINE_RE.search(text or "")
    if absent_match:
        found = parse_absent_line(absent_match.group(1))
        logger.debug(f"Absent line: {len(found)} attendees")
        attendees.extend(found)

    return attendees
