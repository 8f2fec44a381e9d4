"""Section and entry segmentation of PV text blocks.

Minutes mix three heading conventions: explicit "Heading 1" paragraphs, ad-hoc
bold paragraphs, and no heading at all before a resolution. The segmenter
walks the blocks once and always keeps a best available title to attach the
next RÉSOLUTION / COMMENTAIRE to: the last confirmed heading, else the last
plausible title line.

The scan state is an explicit ``SegmenterState``; ``advance`` applies one
block to it and ``segment_blocks`` folds a block list through it.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from pvparser.models import BlockKind, MinuteType, TextBlock

logger = logging.getLogger(__name__)

# ── Patterns ─────────────────────────────────────────────────────────────

RESOLUTION_RE = re.compile(r"^R[ÉE]SOLUTION\s+(\d{2})-(\d+)", re.IGNORECASE)
COMMENT_RE = re.compile(r"^COMMENTAIRE\s+(\d{2})-([A-Za-z])", re.IGNORECASE)
FORMAL_LANGUAGE_RE = re.compile(
    r"^(?:CONSID[ÉE]RANT|ATTENDU|RECONNAISSANT|IL\s+EST\s+R[ÉE]SOLU)", re.IGNORECASE,
)
NUMBERED_SUBITEM_RE = re.compile(r"^\d+\.\s")
PROPOSAL_RE = re.compile(r"^Sur une proposition", re.IGNORECASE)
SIGNATURE_RE = re.compile(r"^(?:_{3,}|Président|Secrétaire)", re.IGNORECASE)
SIGNATURE_RULE_RE = re.compile(r"^_{3,}")
# "PATRICIA BOUTIN MICHAËL ROSS": officer names in capitals under the rule
OFFICER_NAMES_RE = re.compile(r"^[A-ZÀ-ÖØ-Þ][A-ZÀ-ÖØ-Þ'’\-]*(?:\s+[A-ZÀ-ÖØ-Þ][A-ZÀ-ÖØ-Þ'’\-]*)+$")

# Document header lines that are never section titles
HEADER_LINE_RE = re.compile(
    r"^(?:COMIT[ÉE]\s+CONSULTATIF|PROC[ÈE]S-VERBAL|ASSEMBL[ÉE]E|"
    r"[ÉE]TAIENT\s+(?:AUSSI\s+)?PR[ÉE]SENT|[ÉE]TAI(?:T|ENT)\s+ABSENT|"
    r"(?:Lundi|Mardi|Mercredi|Jeudi|Vendredi|Samedi|Dimanche)\b|"
    r"\d{1,2}\s+(?:janvier|février|mars|avril|mai|juin|juillet|août|"
    r"septembre|octobre|novembre|décembre)\b|"
    r"Salle\s|M\.\s|Mme\s)",
    re.IGNORECASE,
)

BOLD_TITLE_MIN_LENGTH = 15
BOLD_TITLE_MAX_LENGTH = 250
POTENTIAL_TITLE_MIN_LENGTH = 10
POTENTIAL_TITLE_MAX_LENGTH = 300


@dataclass
class ParsedMinuteItem:
    """A resolution/comment found in the document, before grouping."""
    section_title: str
    minute_type: MinuteType
    number: str
    content: str = ""


@dataclass
class SegmenterState:
    current_section_title: str = ""
    last_potential_title: str = ""
    current_item: Optional[ParsedMinuteItem] = None
    content_lines: list[str] = field(default_factory=list)
    items: list[ParsedMinuteItem] = field(default_factory=list)
    # Set by an underscore signature rule until the next line is seen
    after_signature_rule: bool = False


# ── Predicates ───────────────────────────────────────────────────────────

def match_resolution(text: str) -> Optional[str]:
    """Return the resolution number ("09-35") if the text opens a resolution."""
    match = RESOLUTION_RE.match(text)
    if match:
        return f"{match.group(1)}-{match.group(2)}"
    return None


def match_comment(text: str) -> Optional[str]:
    """Return the comment number ("09-A") if the text opens a comment."""
    match = COMMENT_RE.match(text)
    if match:
        return f"{match.group(1)}-{match.group(2).upper()}"
    return None


def is_marker(text: str) -> bool:
    return bool(RESOLUTION_RE.match(text) or COMMENT_RE.match(text))


def is_formal_language(text: str) -> bool:
    return bool(FORMAL_LANGUAGE_RE.match(text))


def is_numbered_subitem(text: str) -> bool:
    return bool(NUMBERED_SUBITEM_RE.match(text))


def is_signature_line(text: str) -> bool:
    return bool(SIGNATURE_RE.match(text))


def is_signature_rule(text: str) -> bool:
    return bool(SIGNATURE_RULE_RE.match(text))


def is_officer_names_line(text: str) -> bool:
    """Officer names in capitals, as printed under the signature rule."""
    return bool(OFFICER_NAMES_RE.match(text)) and not is_formal_language(text)


def is_header_line(text: str) -> bool:
    return bool(HEADER_LINE_RE.match(text))


def is_bold_section_title(block: TextBlock, text: str) -> bool:
    """A fully bold paragraph of heading length that is not resolution body text."""
    return (
        block.emphasized
        and not is_formal_language(text)
        and BOLD_TITLE_MIN_LENGTH < len(text) < BOLD_TITLE_MAX_LENGTH
        and not is_marker(text)
        and not is_numbered_subitem(text)
    )


def is_potential_title(text: str) -> bool:
    """A line that may be an unmarked section heading."""
    return (
        not is_formal_language(text)
        and not is_marker(text)
        and not is_numbered_subitem(text)
        and POTENTIAL_TITLE_MIN_LENGTH <= len(text) <= POTENTIAL_TITLE_MAX_LENGTH
        and not PROPOSAL_RE.match(text)
        and not is_header_line(text)
    )


# ── Transitions ──────────────────────────────────────────────────────────

def flush(state: SegmenterState) -> SegmenterState:
    """Close the open item, if any, using the accumulated lines as its body."""
    if state.current_item is not None:
        state.current_item.content = "\n".join(state.content_lines)
        state.items.append(state.current_item)
    state.current_item = None
    state.content_lines = []
    state.after_signature_rule = False
    return state


def _open_section(state: SegmenterState, title: str) -> SegmenterState:
    flush(state)
    state.current_section_title = title
    state.last_potential_title = title
    logger.debug(f"Found section title: {title}")
    return state


def _open_item(state: SegmenterState, minute_type: MinuteType, number: str) -> SegmenterState:
    flush(state)
    title = state.current_section_title or state.last_potential_title
    state.current_item = ParsedMinuteItem(
        section_title=title, minute_type=minute_type, number=number,
    )
    logger.debug(f"Found {minute_type.value} {number} for section: {title!r}")
    return state


def advance(state: SegmenterState, block: TextBlock) -> SegmenterState:
    """Apply one block to the scan state."""
    text = block.text.strip()
    if not text:
        return state

    if block.kind == BlockKind.HEADING:
        return _open_section(state, text)

    number = match_resolution(text)
    if number:
        return _open_item(state, MinuteType.RESOLUTION, number)

    number = match_comment(text)
    if number:
        return _open_item(state, MinuteType.COMMENT, number)

    if state.after_signature_rule:
        state.after_signature_rule = False
        if is_officer_names_line(text):
            return state

    if is_bold_section_title(block, text):
        return _open_section(state, text)

    if state.current_item is None:
        if is_potential_title(text):
            state.last_potential_title = text
        return state

    if is_signature_rule(text):
        state.after_signature_rule = True
        return state

    if not is_signature_line(text):
        state.content_lines.append(text)
    return state


def segment_blocks(blocks: list[TextBlock]) -> list[ParsedMinuteItem]:
    """Walk the blocks and return every resolution/comment with its section title."""
    state = SegmenterState()
    for block in blocks:
        state = advance(state, block)
    flush(state)
    logger.debug(f"Segmented {len(state.items)} minute items")
    return state.items
