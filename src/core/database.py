"""
SQLite database operations for calendar settings and API request logs.
"""

import json
import sqlite3
from pathlib import Path

from core import config

SETTINGS_KEY = "calendar_widget"


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path or config.DB_PATH)


def init_schema(conn: sqlite3.Connection):
    """Create tables and indexes if they don't exist."""
    cursor = conn.cursor()

    # Widget display preferences, one JSON document per key
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS calendar_settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            update_date TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # API request logging
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            granularity TEXT,
            anchor_date TEXT,
            events_received INTEGER,
            events_unscheduled INTEGER,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_request_details (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT NOT NULL,
            detail_type TEXT NOT NULL CHECK(detail_type IN ('validation_error', 'warning')),
            message TEXT NOT NULL,
            FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_request_details_request ON api_request_details(request_id)"
    )
    conn.commit()


def load_settings(conn: sqlite3.Connection, key: str = SETTINGS_KEY) -> dict | None:
    """Stored settings document, or None if never saved."""
    cursor = conn.cursor()
    cursor.execute("SELECT value FROM calendar_settings WHERE key = ?", (key,))
    row = cursor.fetchone()
    return json.loads(row[0]) if row else None


def save_settings(conn: sqlite3.Connection, values: dict, key: str = SETTINGS_KEY):
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO calendar_settings (key, value, update_date)
        VALUES (?, ?, CURRENT_TIMESTAMP)
        ON CONFLICT(key) DO UPDATE SET
            value = excluded.value,
            update_date = excluded.update_date
        """,
        (key, json.dumps(values)),
    )
    conn.commit()

