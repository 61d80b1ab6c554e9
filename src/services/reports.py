"""
Calendar exports (CSV and Excel) and the dashboard agenda summary.
"""

import csv
from collections import Counter
from datetime import date, datetime, tzinfo
from io import BytesIO, StringIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import (
    AGENDA_TODAY_LIMIT,
    AGENDA_WEEK_LIMIT,
    EXPORT_HEADERS,
    EXPORT_SEPARATOR,
    STATUS_LABELS,
)
from models.events import AgendaSummary, ScheduledEvent
from services.event_index import events_in_week, events_on, local_end, local_start


def format_date_display(d: date | datetime | None) -> str:
    """Format date as DD/MM/YYYY."""
    if d is None:
        return ""
    return d.strftime("%d/%m/%Y")


def export_filename(anchor: date, extension: str) -> str:
    """e.g. 'calendrier-interventions-2024-03-15.csv'."""
    return f"calendrier-interventions-{anchor.strftime('%Y-%m-%d')}.{extension}"


def export_rows(events: list[ScheduledEvent], tz: tzinfo | None = None) -> list[list[str]]:
    """
    One row per event with a start: title, start, end, technician, address, status.

    The end date falls back to the start date.
    """
    rows = []
    for event in events:
        start = local_start(event, tz)
        if start is None:
            continue
        end = local_end(event, tz) or start
        rows.append(
            [
                event.title,
                format_date_display(start),
                format_date_display(end),
                event.technician_name or "",
                event.address or "",
                event.status,
            ]
        )
    return rows


def export_csv(events: list[ScheduledEvent], tz: tzinfo | None = None) -> str:
    """Semicolon-separated export, header first."""
    buffer = StringIO()
    writer = csv.writer(buffer, delimiter=EXPORT_SEPARATOR, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(export_rows(events, tz))
    return buffer.getvalue()


def write_excel_events_sheet(ws, rows: list[list[str]]):
    """Write header (bold) and event rows to a worksheet."""
    for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, row_data in enumerate(rows, start=2):
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
        width = max([len(header)] + [len(r[col_idx - 1]) for r in rows])
        ws.column_dimensions[get_column_letter(col_idx)].width = width + 2


def write_excel_status_sheet(ws, events: list[ScheduledEvent]):
    """Count of interventions per status, known statuses first."""
    counts = Counter(e.status for e in events if e.start is not None)

    ws.cell(row=1, column=1, value="Statut").font = Font(bold=True)
    ws.cell(row=1, column=2, value="Interventions").font = Font(bold=True)

    statuses = list(STATUS_LABELS) + sorted(s for s in counts if s not in STATUS_LABELS)
    for row_idx, status in enumerate(statuses, start=2):
        ws.cell(row=row_idx, column=1, value=STATUS_LABELS.get(status, status))
        ws.cell(row=row_idx, column=2, value=counts.get(status, 0))

    total_row = len(statuses) + 2
    ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
    ws.cell(row=total_row, column=2, value=f"=SUM(B2:B{total_row - 1})")


def export_excel_bytes(events: list[ScheduledEvent], tz: tzinfo | None = None) -> bytes:
    """Excel workbook with an 'Interventions' sheet and a 'Statuts' summary."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Interventions"
    write_excel_events_sheet(ws, export_rows(events, tz))
    write_excel_status_sheet(wb.create_sheet("Statuts"), events)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer.getvalue()


def agenda_summary(
    events: list[ScheduledEvent], today: date, tz: tzinfo | None = None
) -> AgendaSummary:
    """Today's interventions (first few) and this week's (first few)."""
    todays = events_on(events, today, tz)
    return AgendaSummary(
        today=todays[:AGENDA_TODAY_LIMIT],
        today_count=len(todays),
        week=events_in_week(events, today, tz, limit=AGENDA_WEEK_LIMIT),
    )
