"""Tests for the section and entry segmenter."""

import pytest

from pvparser.models import BlockKind, MinuteType, TextBlock
from pvparser.segmenter import (
    SegmenterState,
    advance,
    is_bold_section_title,
    is_potential_title,
    match_comment,
    match_resolution,
    segment_blocks,
)


def heading(text):
    return TextBlock(kind=BlockKind.HEADING, text=text)


def para(text, bold=False):
    return TextBlock(kind=BlockKind.PARAGRAPH, text=text, emphasized=bold)


class TestMarkers:
    def test_resolution_number(self):
        assert match_resolution("RÉSOLUTION 09-35") == "09-35"
        assert match_resolution("Resolution 12-4") == "12-4"
        assert match_resolution("résolution 09-35 adoptée") == "09-35"

    def test_resolution_must_start_line(self):
        assert match_resolution("Voir la RÉSOLUTION 09-35") is None
        assert match_resolution("RÉSOLUTION 9-35") is None

    def test_comment_letter_uppercased(self):
        assert match_comment("COMMENTAIRE 09-a") == "09-A"
        assert match_comment("Commentaire 10-B") == "10-B"

    def test_comment_requires_letter(self):
        assert match_comment("COMMENTAIRE 09-1") is None


class TestTitlePredicates:
    def test_bold_title(self):
        text = "Adoption de l'ordre du jour;"
        assert is_bold_section_title(para(text, bold=True), text)

    def test_bold_requires_emphasis(self):
        text = "Adoption de l'ordre du jour;"
        assert not is_bold_section_title(para(text), text)

    def test_bold_formal_language_is_not_title(self):
        text = "IL EST RÉSOLU à l'unanimité"
        assert not is_bold_section_title(para(text, bold=True), text)

    def test_bold_numbered_subitem_is_not_title(self):
        text = "1. Apiculture urbaine au parc"
        assert not is_bold_section_title(para(text, bold=True), text)

    def test_bold_length_bounds(self):
        short = "Varia et suivi"  # 14 characters
        assert not is_bold_section_title(para(short, bold=True), short)
        long = "x" * 250
        assert not is_bold_section_title(para(long, bold=True), long)

    def test_potential_title(self):
        assert is_potential_title("Projet d'apiculture urbaine")

    def test_potential_title_exclusions(self):
        assert not is_potential_title("1. Apiculture urbaine")
        assert not is_potential_title("CONSIDÉRANT que le projet")
        assert not is_potential_title("Sur une proposition de M. Jean Tremblay")
        assert not is_potential_title("Court")
        assert not is_potential_title("x" * 301)

    def test_header_lines_are_not_titles(self):
        assert not is_potential_title("ÉTAIENT PRÉSENTS :")
        assert not is_potential_title("M. Jean Tremblay, président")
        assert not is_potential_title("Jeudi 9 juin 2022, 19 h")


class TestAdvance:
    def test_heading_sets_both_titles(self):
        state = advance(SegmenterState(), heading("Apiculture urbaine"))
        assert state.current_section_title == "Apiculture urbaine"
        assert state.last_potential_title == "Apiculture urbaine"
        assert state.current_item is None

    def test_resolution_opens_item_with_section_title(self):
        state = advance(SegmenterState(), heading("Apiculture urbaine"))
        state = advance(state, para("RÉSOLUTION 09-35"))
        assert state.current_item is not None
        assert state.current_item.section_title == "Apiculture urbaine"
        assert state.current_item.minute_type == MinuteType.RESOLUTION
        assert state.current_item.number == "09-35"

    def test_content_accumulates_in_open_item(self):
        state = SegmenterState()
        for block in [heading("Apiculture urbaine"), para("RÉSOLUTION 09-35"),
                      para("CONSIDÉRANT que..."), para("IL EST RÉSOLU...")]:
            state = advance(state, block)
        assert state.content_lines == ["CONSIDÉRANT que...", "IL EST RÉSOLU..."]
        assert state.items == []

    def test_potential_title_only_without_open_item(self):
        state = advance(SegmenterState(), para("Projet d'apiculture urbaine"))
        assert state.last_potential_title == "Projet d'apiculture urbaine"

        state = advance(state, para("RÉSOLUTION 09-35"))
        state = advance(state, para("Une autre ligne de texte"))
        assert state.last_potential_title == "Projet d'apiculture urbaine"
        assert state.content_lines == ["Une autre ligne de texte"]

    def test_signature_lines_skipped(self):
        state = SegmenterState()
        for block in [para("RÉSOLUTION 09-35"), para("IL EST RÉSOLU..."),
                      para("______________________"), para("Président"),
                      para("Secrétaire d'assemblée")]:
            state = advance(state, block)
        assert state.content_lines == ["IL EST RÉSOLU..."]

    def test_blank_blocks_ignored(self):
        state = advance(SegmenterState(), para("   \n"))
        assert state == SegmenterState()

    def test_bold_title_flushes_open_item(self):
        state = SegmenterState()
        for block in [heading("Apiculture urbaine"), para("RÉSOLUTION 09-35"),
                      para("IL EST RÉSOLU..."),
                      para("Collecte des matières organiques", bold=True)]:
            state = advance(state, block)
        assert state.current_item is None
        assert len(state.items) == 1
        assert state.items[0].content == "IL EST RÉSOLU..."
        assert state.current_section_title == "Collecte des matières organiques"


class TestSegmentBlocks:
    def test_single_resolution_under_heading(self):
        items = segment_blocks([
            heading("Apiculture urbaine"),
            para("RÉSOLUTION 09-35"),
            para("CONSIDÉRANT que..."),
            para("IL EST RÉSOLU..."),
        ])
        assert len(items) == 1
        assert items[0].section_title == "Apiculture urbaine"
        assert items[0].content == "CONSIDÉRANT que...\nIL EST RÉSOLU..."

    def test_two_markers_same_section(self):
        items = segment_blocks([
            heading("Apiculture urbaine"),
            para("RÉSOLUTION 09-35"),
            para("IL EST RÉSOLU..."),
            para("COMMENTAIRE 09-A"),
            para("Le comité souhaite un suivi."),
        ])
        assert [(i.minute_type, i.number) for i in items] == [
            (MinuteType.RESOLUTION, "09-35"),
            (MinuteType.COMMENT, "09-A"),
        ]
        assert {i.section_title for i in items} == {"Apiculture urbaine"}

    def test_marker_without_body_has_empty_content(self):
        items = segment_blocks([para("RÉSOLUTION 09-35"), para("RÉSOLUTION 09-36")])
        assert [i.content for i in items] == ["", ""]

    def test_numbered_line_never_becomes_title(self):
        items = segment_blocks([
            para("1. Apiculture urbaine"),
            para("RÉSOLUTION 09-35"),
            para("IL EST RÉSOLU..."),
        ])
        assert items[0].section_title == ""

    def test_numbered_line_falls_back_to_earlier_candidate(self):
        items = segment_blocks([
            para("Projet d'apiculture urbaine"),
            para("1. Apiculture urbaine"),
            para("RÉSOLUTION 09-35"),
        ])
        assert items[0].section_title == "Projet d'apiculture urbaine"

    def test_confirmed_heading_wins_over_later_candidate(self):
        items = segment_blocks([
            heading("Apiculture urbaine"),
            para("Présentation du projet par la coordonnatrice"),
            para("RÉSOLUTION 09-35"),
        ])
        assert items[0].section_title == "Apiculture urbaine"

    @pytest.mark.parametrize("blocks", [[], [para("Aucune résolution ce soir.")]])
    def test_no_markers(self, blocks):
        assert segment_blocks(blocks) == []


class TestSignatureBlock:
    def test_officer_names_under_rule_skipped(self):
        items = segment_blocks([
            heading("Apiculture urbaine"),
            para("RÉSOLUTION 09-35"),
            para("IL EST RÉSOLU de poursuivre."),
            para("____ ____"),
            para("PATRICIA BOUTIN MICHAËL ROSS"),
            para("Présidente Secrétaire"),
        ])
        assert items[0].content == "IL EST RÉSOLU de poursuivre."

    def test_bold_officer_names_do_not_open_section(self):
        items = segment_blocks([
            heading("Apiculture urbaine"),
            para("COMMENTAIRE 09-A"),
            para("Le comité souhaite un suivi."),
            para("______________"),
            para("PATRICIA BOUTIN MICHAËL ROSS", bold=True),
            para("COMMENTAIRE 09-B"),
        ])
        assert [i.section_title for i in items] == ["Apiculture urbaine", "Apiculture urbaine"]
        assert items[0].content == "Le comité souhaite un suivi."

    def test_capitals_without_rule_are_content(self):
        items = segment_blocks([
            para("RÉSOLUTION 09-35"),
            para("VILLE DE VAL-D'OR"),
        ])
        assert items[0].content == "VILLE DE VAL-D'OR"
