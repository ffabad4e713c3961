"""
SQLite database setup for the API request log.
"""

import sqlite3
from pathlib import Path

from core.config import DB_PATH


def get_connection(db_path: Path = DB_PATH) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path)


def create_database(db_path: Path = DB_PATH) -> None:
    """Create the database and tables if they don't exist."""
    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        cursor = conn.cursor()

        # One row per form submission received
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS api_requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                request_id TEXT UNIQUE NOT NULL,
                timestamp TEXT NOT NULL,
                endpoint TEXT NOT NULL,
                method TEXT NOT NULL,
                client_ip TEXT,
                category TEXT,
                dry_run INTEGER NOT NULL DEFAULT 0,
                status_code INTEGER NOT NULL,
                error_code TEXT,
                error_message TEXT,
                processing_time_ms INTEGER NOT NULL,
                events_built INTEGER,
                events_deleted INTEGER,
                scheduled_hours REAL
            )
        """)

        # Skipped answers, warnings and created events per submission
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS api_request_details (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                request_id TEXT NOT NULL,
                detail_type TEXT NOT NULL CHECK(detail_type IN ('warning', 'event_created')),
                message TEXT NOT NULL,
                FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
            )
        """)

        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_api_request_details_request ON api_request_details(request_id)"
        )

        conn.commit()
    finally:
        conn.close()
