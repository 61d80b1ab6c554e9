#!/usr/bin/env python3
"""
Export interventions to CSV or Excel.

Usage:
    uv run python src/scripts/export_calendar.py events.json --format xlsx
    uv run python src/scripts/export_calendar.py events.json --format csv --technician 3
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import CALENDAR_TIMEZONE, OUTPUT_DIR
from scripts.render_calendar import load_events
from services.event_index import filter_events, resolve_timezone
from services.reports import export_csv, export_excel_bytes, export_filename


def main(events_file: str, fmt: str, technician_id: int | None, status: str | None):
    events = load_events(Path(events_file))
    events = filter_events(events, technician_id=technician_id, status=status)
    print(f"Exporting {len(events)} intervention(s)")

    tz = resolve_timezone(CALENDAR_TIMEZONE)
    output_dir = OUTPUT_DIR / "exports"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / export_filename(date.today(), fmt)

    if fmt == "csv":
        output_path.write_text(export_csv(events, tz), encoding="utf-8")
    else:
        output_path.write_bytes(export_excel_bytes(events, tz))

    print(f"Saved export to: {output_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export interventions")
    parser.add_argument("events_file", help="JSON file with a list of interventions")
    parser.add_argument("--format", choices=["csv", "xlsx"], default="xlsx")
    parser.add_argument("--technician", type=int, help="Only this technician's interventions")
    parser.add_argument("--status", help="Only interventions in this status (e.g. planifiee)")
    args = parser.parse_args()

    main(args.events_file, args.format, args.technician, args.status)
