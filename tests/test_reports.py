"""CSV/Excel exports and the agenda summary."""

from datetime import date, datetime, timezone
from io import BytesIO
from zoneinfo import ZoneInfo

from openpyxl import load_workbook

from models.events import EventStatus, ScheduledEvent
from services.reports import (
    agenda_summary,
    export_csv,
    export_excel_bytes,
    export_filename,
    export_rows,
    format_date_display,
)


def test_format_date_display():
    assert format_date_display(date(2024, 3, 5)) == "05/03/2024"
    assert format_date_display(None) == ""


def test_export_filename():
    assert export_filename(date(2024, 3, 15), "csv") == "calendrier-interventions-2024-03-15.csv"


def test_export_csv(make_event):
    events = [
        make_event(
            1,
            "2024-03-15T09:30:00",
            title="Pose chaudière",
            end=datetime(2024, 3, 16, 12, 0),
            technician_name="Paul Durand",
            address="3 rue des Lilas, 69003 Lyon",
        ),
        make_event(2, "2024-03-18T08:00:00", title="Dépannage", status=EventStatus.IN_PROGRESS),
        ScheduledEvent(id=3, title="Sans date", start=None),
    ]

    lines = export_csv(events).splitlines()

    assert lines[0] == "Titre;Date début;Date fin;Technicien;Adresse;Statut"
    assert lines[1] == "Pose chaudière;15/03/2024;16/03/2024;Paul Durand;3 rue des Lilas, 69003 Lyon;planifiee"
    assert lines[2] == "Dépannage;18/03/2024;18/03/2024;;;en_cours"
    assert len(lines) == 3


def test_export_rows_use_viewer_day():
    event = ScheduledEvent(id=1, title="t", start=datetime(2024, 3, 14, 23, 30, tzinfo=timezone.utc))
    assert export_rows([event], ZoneInfo("Europe/Paris"))[0][1] == "15/03/2024"


def test_export_excel(make_event):
    events = [
        make_event(1, "2024-03-15T09:30:00", title="Pose chaudière"),
        make_event(2, "2024-03-16T09:30:00", title="Entretien", status=EventStatus.COMPLETED),
        make_event(3, "2024-03-17T09:30:00", title="Audit", status="reportee"),
    ]

    wb = load_workbook(BytesIO(export_excel_bytes(events)))

    assert wb.sheetnames == ["Interventions", "Statuts"]
    ws = wb["Interventions"]
    assert ws.cell(row=1, column=1).value == "Titre"
    assert ws.cell(row=1, column=1).font.bold
    assert ws.cell(row=2, column=1).value == "Pose chaudière"
    assert ws.cell(row=3, column=2).value == "16/03/2024"

    statuses = wb["Statuts"]
    rows = {statuses.cell(row=r, column=1).value: statuses.cell(row=r, column=2).value for r in range(2, 8)}
    assert rows["Planifiée"] == 1
    assert rows["Terminée"] == 1
    assert rows["En cours"] == 0
    assert rows["reportee"] == 1
    assert rows["Total"] == "=SUM(B2:B6)"


def test_agenda_summary(make_event):
    events = [make_event(i, f"2024-03-13T{8 + i:02d}:00:00") for i in range(4)]
    events += [make_event(10, "2024-03-15T09:00:00"), make_event(11, "2024-03-20T09:00:00")]

    summary = agenda_summary(events, date(2024, 3, 13))

    assert summary.today_count == 4
    assert [e.id for e in summary.today] == [0, 1, 2]
    assert [e.id for e in summary.week] == [0, 1, 2, 3, 10]
