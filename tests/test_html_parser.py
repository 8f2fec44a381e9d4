"""Tests for HTML parsing utilities."""

from pvparser.models import BlockKind
from pvparser.utils.html_parser import (
    extract_blocks,
    extract_full_text,
    find_table_column,
    is_emphasized,
    largest_ordered_list,
    load_html,
    parse_html,
)


class TestFullText:
    def test_paragraphs_on_separate_lines(self):
        soup = load_html("<p>ÉTAIENT PRÉSENTS :</p><p>M. Jean Tremblay, président</p>")
        lines = [l for l in extract_full_text(soup).split("\n") if l]
        assert lines == ["ÉTAIENT PRÉSENTS :", "M. Jean Tremblay, président"]

    def test_inline_markup_stays_on_line(self):
        soup = load_html("<p>tenue le <strong>jeudi</strong> 9 juin 2022</p>")
        assert "tenue le jeudi 9 juin 2022" in extract_full_text(soup)

    def test_invisible_characters_removed(self):
        soup = load_html("<p>RÉSO\u200bLUTION 09-35</p>")
        assert "RÉSOLUTION 09-35" in extract_full_text(soup)


class TestEmphasis:
    def test_fully_bold(self):
        p = load_html("<p><strong>Apiculture</strong> <b>urbaine</b></p>").p
        assert is_emphasized(p)

    def test_partly_bold(self):
        p = load_html("<p><strong>Apiculture</strong> urbaine</p>").p
        assert not is_emphasized(p)

    def test_empty_paragraph(self):
        assert not is_emphasized(load_html("<p><strong> </strong></p>").p)


class TestBlocks:
    def test_kinds_in_document_order(self):
        blocks = extract_blocks(load_html(
            "<h1>Apiculture urbaine</h1>"
            "<p>RÉSOLUTION 09-35</p>"
            "<h2>Sous-titre</h2>"
            "<ul><li>Point</li></ul>"
        ))
        assert [(b.kind, b.text) for b in blocks] == [
            (BlockKind.HEADING, "Apiculture urbaine"),
            (BlockKind.PARAGRAPH, "RÉSOLUTION 09-35"),
            (BlockKind.PARAGRAPH, "Sous-titre"),
            (BlockKind.LIST_ITEM, "Point"),
        ]

    def test_emphasis_flag(self):
        blocks = extract_blocks(load_html(
            "<p><strong>Collecte des matières organiques</strong></p><p>Texte</p>"
        ))
        assert [b.emphasized for b in blocks] == [True, False]

    def test_parse_html(self):
        full_text, blocks = parse_html("<p>Un</p><p>Deux</p>")
        assert "Un" in full_text and "Deux" in full_text
        assert len(blocks) == 2


class TestOrderedList:
    def test_largest_list_wins(self):
        soup = load_html(
            "<ol><li>A</li><li>B</li><li>C</li></ol>"
            "<ol><li>Un</li><li>Deux</li><li>Trois</li><li>Quatre</li></ol>"
        )
        assert largest_ordered_list(soup) == ["Un", "Deux", "Trois", "Quatre"]

    def test_too_short(self):
        soup = load_html("<ol><li>A</li><li>B</li></ol>")
        assert largest_ordered_list(soup) == []

    def test_empty_items_skipped(self):
        soup = load_html("<ol><li>A</li><li> </li><li>C</li><li>D</li></ol>")
        assert largest_ordered_list(soup) == ["A", "C", "D"]


class TestTableColumn:
    def test_subject_column(self):
        soup = load_html(
            "<table>"
            "<tr><td>No</td><td>Sujet</td><td>Durée</td></tr>"
            "<tr><td>1</td><td>Mot de bienvenue</td><td>5</td></tr>"
            "<tr><td>2</td><td>Apiculture urbaine</td><td>20</td></tr>"
            "</table>"
        )
        assert find_table_column(soup, "SUJET") == ["Mot de bienvenue", "Apiculture urbaine"]

    def test_no_matching_header(self):
        soup = load_html("<table><tr><td>No</td></tr><tr><td>1</td></tr></table>")
        assert find_table_column(soup, "SUJET") == []
