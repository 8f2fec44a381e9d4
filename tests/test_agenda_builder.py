"""Tests for agenda item construction from minute items."""

from pvparser.agenda_builder import (
    build_agenda_items,
    build_fallback_items,
    extract_proposer,
    extract_seconder,
    group_by_section,
)
from pvparser.models import UNTITLED, MinuteType, Objective
from pvparser.segmenter import ParsedMinuteItem
from pvparser.utils.html_parser import load_html

STAMP = 1700000000000


def resolution(title, number, content=""):
    return ParsedMinuteItem(title, MinuteType.RESOLUTION, number, content)


def comment(title, number, content=""):
    return ParsedMinuteItem(title, MinuteType.COMMENT, number, content)


class TestProposerSeconder:
    def test_proposition_and_seconder(self):
        content = "Sur une proposition de M. Jean Tremblay, appuyée par Mme Marie Roy,\nIL EST RÉSOLU"
        assert extract_proposer(content) == "M. Jean Tremblay"
        assert extract_seconder(content) == "Mme Marie Roy"

    def test_propose_par(self):
        assert extract_proposer("Proposé par Mme Julie Côté; appuyé par M. Paul Gagnon.") == "Mme Julie Côté"
        assert extract_seconder("Proposé par Mme Julie Côté; appuyé par M. Paul Gagnon.") == "M. Paul Gagnon"

    def test_proposition_du(self):
        content = "Sur une proposition du conseiller Jean Tremblay, appuyée par Mme Marie Roy,"
        assert extract_proposer(content) == "conseiller Jean Tremblay"

    def test_missing(self):
        assert extract_proposer("IL EST RÉSOLU") is None
        assert extract_seconder("IL EST RÉSOLU") is None


class TestGrouping:
    def test_first_appearance_order(self):
        groups = group_by_section([
            resolution("B", "09-1"), resolution("A", "09-2"), comment("B", "09-A"),
        ])
        assert list(groups) == ["B", "A"]
        assert [i.number for i in groups["B"]] == ["09-1", "09-A"]


class TestBuildAgendaItems:
    def test_two_markers_one_section(self):
        items = build_agenda_items([
            resolution("Apiculture urbaine", "09-35", "IL EST RÉSOLU..."),
            comment("Apiculture urbaine", "09-A", "Le comité souhaite un suivi."),
        ], stamp=STAMP)

        assert len(items) == 1
        item = items[0]
        assert item.id == f"imported-pv-{STAMP}-0"
        assert item.order == 0
        assert item.title == "Apiculture urbaine"
        assert item.objective == Objective.DECISION
        assert [(e.type, e.number) for e in item.minute_entries] == [
            (MinuteType.RESOLUTION, "09-35"),
            (MinuteType.COMMENT, "09-A"),
        ]

    def test_comment_only_is_information(self):
        items = build_agenda_items([comment("Varia", "09-A")], stamp=STAMP)
        assert items[0].objective == Objective.INFORMATION

    def test_defaults(self):
        item = build_agenda_items([resolution("Budget", "09-1")], stamp=STAMP)[0]
        assert item.duration == 15
        assert item.presenter == "Coordinator"
        assert item.description == ""

    def test_empty_title_becomes_untitled(self):
        items = build_agenda_items([resolution("", "09-35")], stamp=STAMP)
        assert items[0].title == UNTITLED

    def test_legacy_fields_mirror_first_entry(self):
        content = "Sur une proposition de M. Jean Tremblay, appuyée par Mme Marie Roy,\nIL EST RÉSOLU"
        item = build_agenda_items([
            resolution("Budget", "09-1", content),
            resolution("Budget", "09-2", "IL EST RÉSOLU aussi"),
        ], stamp=STAMP)[0]
        assert item.minute_type == MinuteType.RESOLUTION
        assert item.minute_number == "09-1"
        assert item.decision == content
        assert item.proposer == "M. Jean Tremblay"
        assert item.seconder == "Mme Marie Roy"

    def test_legacy_fields_empty_without_proposer(self):
        item = build_agenda_items([comment("Varia", "09-A", "Texte")], stamp=STAMP)[0]
        assert item.proposer == ""
        assert item.seconder == ""

    def test_content_trimmed(self):
        item = build_agenda_items([resolution("Budget", "09-1", "\n  texte  \n")], stamp=STAMP)[0]
        assert item.minute_entries[0].content == "texte"

    def test_orders_are_sequential(self):
        items = build_agenda_items([
            resolution("A", "09-1"), resolution("B", "09-2"), resolution("C", "09-3"),
        ], stamp=STAMP)
        assert [i.order for i in items] == [0, 1, 2]
        assert len({i.id for i in items}) == 3

    def test_no_items(self):
        assert build_agenda_items([], stamp=STAMP) == []


class TestFallback:
    def test_ordered_list(self):
        soup = load_html(
            "<p>Ordre du jour</p><ol>"
            "<li>Mot de bienvenue</li><li>Adoption de l'ordre du jour</li>"
            "<li>Apiculture urbaine</li><li>Collecte des matières organiques</li>"
            "<li>Varia</li></ol>"
        )
        items = build_fallback_items(soup, stamp=STAMP)
        assert [i.title for i in items] == [
            "Mot de bienvenue", "Adoption de l'ordre du jour", "Apiculture urbaine",
            "Collecte des matières organiques", "Varia",
        ]
        assert all(i.objective == Objective.INFORMATION for i in items)
        assert all(i.minute_entries == [] for i in items)
        assert items[0].id == f"imported-docx-auto-{STAMP}-0"
        assert [i.order for i in items] == [0, 1, 2, 3, 4]

    def test_subject_table(self):
        soup = load_html(
            "<table><tr><td><p>No</p></td><td><p>SUJET</p></td></tr>"
            "<tr><td><p>1</p></td><td><p>Mot de bienvenue</p></td></tr>"
            "<tr><td><p>2</p></td><td><p>Varia</p></td></tr></table>"
        )
        items = build_fallback_items(soup, stamp=STAMP)
        assert [i.title for i in items] == ["Mot de bienvenue", "Varia"]
        assert items[1].id == f"imported-docx-table-{STAMP}-1"

    def test_nothing_found(self):
        soup = load_html("<ol><li>A</li><li>B</li></ol>")
        assert build_fallback_items(soup, stamp=STAMP) == []