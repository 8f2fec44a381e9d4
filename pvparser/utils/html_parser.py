"""HTML parsing utilities for converted minutes documents.

Provides helper functions for turning the HTML produced by the document
converter into plain text and ordered text blocks, using BeautifulSoup
with the lxml parser.
"""

import logging

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from pvparser.models import BlockKind, TextBlock
from pvparser.utils.text import collapse_whitespace, strip_invisible

logger = logging.getLogger(__name__)

BLOCK_TAGS = {"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "br", "tr"}
TEXT_BLOCK_TAGS = ["p", "h1", "h2", "h3", "h4", "h5", "h6", "li"]
EMPHASIS_TAGS = {"strong", "b"}


def load_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def _append_text(node, parts: list[str]):
    for child in node.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag):
            is_block = child.name in BLOCK_TAGS
            if is_block:
                parts.append("\n")
            _append_text(child, parts)
            if is_block and parts and not parts[-1].endswith("\n"):
                parts.append("\n")


def extract_full_text(soup: BeautifulSoup) -> str:
    """Return the visible text of the document body in reading order.

    Block elements are separated by newlines so that line-oriented patterns
    (attendance lists, dates) see one paragraph per line.
    """
    root = soup.body or soup
    parts: list[str] = []
    _append_text(root, parts)
    return strip_invisible("".join(parts))


def is_emphasized(element: Tag) -> bool:
    """True if every visible character of the element is inside bold markup."""
    seen_text = False
    for string in element.find_all(string=True):
        if isinstance(string, Comment) or not strip_invisible(string).strip():
            continue
        seen_text = True
        node = string.parent
        bold = False
        while node is not None and node is not element:
            if node.name in EMPHASIS_TAGS:
                bold = True
                break
            node = node.parent
        if not bold:
            return False
    return seen_text


def _block_kind(tag_name: str) -> BlockKind:
    if tag_name == "h1":
        return BlockKind.HEADING
    if tag_name == "li":
        return BlockKind.LIST_ITEM
    return BlockKind.PARAGRAPH


def extract_blocks(soup: BeautifulSoup) -> list[TextBlock]:
    """Return one TextBlock per paragraph, heading and list item in document order.

    Text is the element's full text content with invisible characters removed;
    it is not trimmed.
    """
    blocks = []
    for element in soup.find_all(TEXT_BLOCK_TAGS):
        blocks.append(TextBlock(
            kind=_block_kind(element.name),
            text=strip_invisible(element.get_text()),
            emphasized=is_emphasized(element),
        ))
    return blocks


def parse_html(html: str) -> tuple[str, list[TextBlock]]:
    """Parse converted HTML into (full_text, blocks)."""
    soup = load_html(html)
    return extract_full_text(soup), extract_blocks(soup)


def largest_ordered_list(soup: BeautifulSoup, min_items: int = 3) -> list[str]:
    """Return the item texts of the ordered list with the most items.

    Args:
        soup: Parsed document.
        min_items: Lists with fewer items are ignored.

    Returns:
        Trimmed, non-empty item texts in list order, or [] if no list qualifies.
    """
    best = None
    best_count = 0
    for ol in soup.find_all("ol"):
        count = len(ol.find_all("li"))
        if count > best_count:
            best = ol
            best_count = count

    if best is None or best_count < min_items:
        return []

    items = []
    for li in best.find_all("li"):
        text = collapse_whitespace(strip_invisible(li.get_text()))
        if text:
            items.append(text)
    return items


def parse_html_table(table: Tag) -> list[list[str]]:
    """Extract a table as a list of rows of trimmed cell text."""
    rows = []
    for tr in table.find_all("tr"):
        cells = [
            collapse_whitespace(strip_invisible(td.get_text()))
            for td in tr.find_all(["td", "th"])
        ]
        if cells:
            rows.append(cells)
    return rows


def find_table_column(soup: BeautifulSoup, header_keyword: str) -> list[str]:
    """Return the body cells of the first table whose header has ``header_keyword``.

    The first row is the header; the keyword is matched case-insensitively as a
    substring. Empty cells are skipped.
    """
    keyword = header_keyword.upper()
    for table in soup.find_all("table"):
        rows = parse_html_table(table)
        if len(rows) < 2:
            continue
        headers = [h.upper() for h in rows[0]]
        column = next((i for i, h in enumerate(headers) if keyword in h), None)
        if column is None:
            continue
        logger.debug(f"Using table column '{rows[0][column]}' ({len(rows) - 1} rows)")
        return [row[column] for row in rows[1:] if len(row) > column and row[column]]
    return []
