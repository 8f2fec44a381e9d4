"""Export module for parsed minutes.

Writes CSV, JSON and Excel files from a ParsedMeetingData.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from pvparser.models import ParsedMeetingData, enum_value

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_DIR = Path("data/exports")

AGENDA_FIELDS = [
    "order", "title", "objective", "duration", "presenter",
    "minute_type", "minute_number", "proposer", "seconder", "content",
]
ATTENDEE_FIELDS = ["name", "role", "is_present", "member_id"]

HEADER_FILL = PatternFill("solid", fgColor="1B2A4A")
HEADER_FONT = Font(bold=True, color="FFFFFF")


def agenda_rows(data: ParsedMeetingData) -> list[dict]:
    """Flatten agenda items: one row per minute entry, or one per item without entries."""
    rows = []
    for item in data.agenda_items:
        base = {
            "order": item.order,
            "title": item.title,
            "objective": item.objective_value,
            "duration": item.duration,
            "presenter": item.presenter,
        }
        if not item.minute_entries:
            rows.append({**base, "minute_type": "", "minute_number": "",
                         "proposer": "", "seconder": "", "content": ""})
            continue
        for entry in item.minute_entries:
            rows.append({
                **base,
                "minute_type": enum_value(entry.type),
                "minute_number": entry.number,
                "proposer": entry.proposer or "",
                "seconder": entry.seconder or "",
                "content": entry.content,
            })
    return rows


def attendee_rows(data: ParsedMeetingData) -> list[dict]:
    return [
        {
            "name": a.name,
            "role": a.role,
            "is_present": "yes" if a.is_present else "no",
            "member_id": a.member_id or "",
        }
        for a in data.attendees
    ]


class Exporter:
    """Exports parsed meeting data to CSV, JSON and XLSX files."""

    def __init__(self, export_dir: Optional[Path] = None):
        self.export_dir = Path(export_dir or DEFAULT_EXPORT_DIR)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def _write_csv(self, filename: str, fieldnames: list[str], rows: list[dict]) -> Path:
        filepath = self.export_dir / filename
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        logger.info(f"Exported {len(rows)} rows to {filepath}")
        return filepath

    def export_agenda_csv(self, data: ParsedMeetingData) -> Optional[Path]:
        """Export agenda items and their minute entries.

        Returns:
            Path to the generated CSV file, or None if there are no items.
        """
        rows = agenda_rows(data)
        if not rows:
            logger.warning("No agenda items to export")
            return None
        return self._write_csv("agenda_items.csv", AGENDA_FIELDS, rows)

    def export_attendees_csv(self, data: ParsedMeetingData) -> Optional[Path]:
        rows = attendee_rows(data)
        if not rows:
            logger.warning("No attendees to export")
            return None
        return self._write_csv("attendees.csv", ATTENDEE_FIELDS, rows)

    def export_json(self, data: ParsedMeetingData) -> Path:
        """Export the full result in the meeting store's field layout."""
        filepath = self.export_dir / "meeting.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"Exported meeting JSON to {filepath}")
        return filepath

    def export_xlsx(self, data: ParsedMeetingData) -> Path:
        """Export agenda and attendance as two sheets of one workbook."""
        filepath = self.export_dir / "meeting.xlsx"
        wb = Workbook()

        agenda_ws = wb.active
        agenda_ws.title = "Ordre du jour"
        self._fill_sheet(agenda_ws, AGENDA_FIELDS, agenda_rows(data))

        attendees_ws = wb.create_sheet("Présences")
        self._fill_sheet(attendees_ws, ATTENDEE_FIELDS, attendee_rows(data))

        wb.save(filepath)
        logger.info(f"Exported workbook to {filepath}")
        return filepath

    @staticmethod
    def _fill_sheet(ws, fieldnames: list[str], rows: list[dict]):
        ws.append(fieldnames)
        for cell in ws[1]:
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center")
        for row in rows:
            ws.append([row.get(name, "") for name in fieldnames])

        for col_idx, name in enumerate(fieldnames, 1):
            width = max([len(name)] + [len(str(r.get(name, ""))) for r in rows])
            ws.column_dimensions[get_column_letter(col_idx)].width = min(width + 2, 60)
        ws.freeze_panes = "A2"

    def export_all(self, data: ParsedMeetingData) -> dict:
        """Run all exports.

        Returns:
            Dict mapping export name to file path (None when nothing was written).
        """
        results = {
            "agenda_items": self.export_agenda_csv(data),
            "attendees": self.export_attendees_csv(data),
            "meeting_json": self.export_json(data),
            "meeting_xlsx": self.export_xlsx(data),
        }
        logger.info(f"Exports complete: {sum(1 for v in results.values() if v)} files")
        return results
