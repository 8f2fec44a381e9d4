"""CLI interface for the PV minutes parser.

Usage:
    pv-parser parse minutes.docx             # Print an import report
    pv-parser parse minutes.docx --json      # Print the parsed meeting as JSON
    pv-parser parse agenda.pdf               # Agenda PDFs are read the same way
    pv-parser match minutes.docx agenda.json # Merge PV sections into an agenda
    pv-parser export minutes.docx --out DIR  # Write CSV/JSON/XLSX exports
    pv-parser attendance minutes.docx --roster data/seed/members.yaml
"""

import json
import logging
import sys
from pathlib import Path

import click

from pvparser.exceptions import DocumentConversionError, RosterError
from pvparser.export import DEFAULT_EXPORT_DIR, Exporter
from pvparser.matcher import match_pv_to_agenda, merge_pv_into_agenda
from pvparser.minutes import format_report, parse_document, read_document
from pvparser.models import AgendaItem
from pvparser.roster import DEFAULT_ROSTER_PATH, MemberRoster

logger = logging.getLogger(__name__)


def _parse_file(path: str):
    try:
        return parse_document(read_document(Path(path)))
    except DocumentConversionError as e:
        click.echo(f"Error: could not read {path}: {e}", err=True)
        sys.exit(1)


def _load_agenda(path: str) -> list[AgendaItem]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # Either a bare list of items or a meeting record with agendaItems
    if isinstance(data, dict):
        data = data.get("agendaItems", [])
    return [AgendaItem.from_dict(item) for item in data]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every parsing decision")
@click.pass_context
def cli(ctx, verbose):
    """Procès-verbal (PV) minutes parser"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a report")
def parse(path, as_json):
    """Parse a minutes (.docx/.txt) or agenda (.pdf) document."""
    data = _parse_file(path)
    if as_json:
        click.echo(json.dumps(data.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(format_report(data))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("agenda", type=click.Path(exists=True, dir_okay=False))
@click.option("--merge/--no-merge", default=True,
              help="Print the merged agenda (default) or only the match map")
def match(path, agenda, merge):
    """Match parsed PV sections to an existing agenda JSON file."""
    data = _parse_file(path)
    existing = _load_agenda(agenda)

    if merge:
        merged = merge_pv_into_agenda(data.agenda_items, existing)
        click.echo(json.dumps([item.to_dict() for item in merged], ensure_ascii=False, indent=2))
        return

    matches = match_pv_to_agenda(data.agenda_items, existing)
    titles = {item.id: item.title for item in existing}
    click.echo(f"--- Matches ({len(matches)} of {len(data.agenda_items)}) ---")
    for existing_id, parsed in matches.items():
        click.echo(f"  {titles[existing_id]}  <-  {parsed.title}")


@cli.command("export")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", "out_dir", default=str(DEFAULT_EXPORT_DIR), help="Export directory")
def export_cmd(path, out_dir):
    """Parse a document and write CSV, JSON and XLSX exports."""
    data = _parse_file(path)
    results = Exporter(Path(out_dir)).export_all(data)

    click.echo("--- Exports ---")
    for export_type, filepath in results.items():
        if filepath:
            click.echo(f"  {export_type}: {filepath}")
        else:
            click.echo(f"  {export_type}: (no data)")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--roster", default=str(DEFAULT_ROSTER_PATH), help="Member roster YAML file")
def attendance(path, roster):
    """Parse attendance and link attendees to roster members."""
    data = _parse_file(path)
    try:
        member_roster = MemberRoster.from_yaml(Path(roster))
    except (FileNotFoundError, RosterError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    stats = member_roster.reconcile_attendees(data.attendees)

    click.echo(f"--- Attendance ({len(data.attendees)}) ---")
    for a in data.attendees:
        status = "present" if a.is_present else "absent"
        member = a.member_id or "?"
        click.echo(f"  {a.name:<30} {a.role:<25} {status:<8} member={member}")
    click.echo(
        f"\nMatched: {stats['exact']} exact, {stats['alias']} alias, "
        f"{stats['fuzzy']} fuzzy; unmatched: {stats['unmatched']}"
    )


if __name__ == "__main__":
    cli()
