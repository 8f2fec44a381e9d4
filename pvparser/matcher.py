"""Match parsed PV sections to an existing agenda by title similarity.

Matching is greedy and first-fit: parsed items are taken in order and each
binds to the first still-unmatched existing item whose title is similar.
There is no attempt at a globally optimal assignment.
"""

import logging
import re
from dataclasses import replace

from pvparser.models import AgendaItem

logger = logging.getLogger(__name__)

SHARED_WORD_RATIO = 0.5
MIN_SIGNIFICANT_WORD_LENGTH = 4

_PUNCTUATION_RE = re.compile(r"[;:,.]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, drop ``;:,.`` and collapse whitespace."""
    title = _PUNCTUATION_RE.sub("", (title or "").lower())
    return _WHITESPACE_RE.sub(" ", title).strip()


def _significant_words(normalized: str) -> list[str]:
    return [w for w in normalized.split(" ") if len(w) >= MIN_SIGNIFICANT_WORD_LENGTH]


def titles_match(parsed_title: str, existing_title: str) -> bool:
    """True if one title contains the other, or they share enough long words.

    The shared-word ratio is measured against the shorter list of words longer
    than three characters. Empty titles never match.
    """
    a = normalize_title(parsed_title)
    b = normalize_title(existing_title)
    if not a or not b:
        return False

    if a in b or b in a:
        return True

    words_a = _significant_words(a)
    words_b = _significant_words(b)
    shortest = min(len(words_a), len(words_b))
    if shortest == 0:
        return False

    shared = [w for w in words_a if w in words_b]
    return len(shared) / shortest >= SHARED_WORD_RATIO


def match_pv_to_agenda(parsed_items: list[AgendaItem],
                       existing_items: list[AgendaItem]) -> dict[str, AgendaItem]:
    """Map existing agenda item ids to the parsed item matched to them.

    Each existing item is matched at most once. Parsed items with no match
    are left out of the result.
    """
    matches: dict[str, AgendaItem] = {}

    for parsed in parsed_items:
        for existing in existing_items:
            if existing.id in matches:
                continue
            if titles_match(parsed.title, existing.title):
                matches[existing.id] = parsed
                logger.debug(f"Matched: {parsed.title!r} -> {existing.title!r}")
                break
        else:
            logger.debug(f"No agenda match for: {parsed.title!r}")

    logger.info(f"Matched {len(matches)} of {len(parsed_items)} PV sections to the agenda")
    return matches


def merge_pv_into_agenda(parsed_items: list[AgendaItem],
                         existing_items: list[AgendaItem]) -> list[AgendaItem]:
    """Return the existing agenda with minute entries taken from matched PV sections.

    Identity, order, duration and presenter of existing items are kept;
    unmatched existing items are returned unchanged.
    """
    matches = match_pv_to_agenda(parsed_items, existing_items)
    merged = []
    for existing in existing_items:
        parsed = matches.get(existing.id)
        if parsed is None:
            merged.append(existing)
            continue
        item = replace(
            existing,
            objective=parsed.objective,
            minute_entries=list(parsed.minute_entries),
        )
        item.mirror_first_entry()
        merged.append(item)
    return merged
