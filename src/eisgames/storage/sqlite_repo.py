"""SQLite-based repository implementations.

This module provides SQLite storage for player progress, suitable for a
shared host where many players' progress lives in one database.
"""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .repository import ProgressRepository


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> dict:
    """Convert sqlite3 row to dict."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class SQLiteProgressRepository(ProgressRepository):
    """SQLite-based progress repository.

    Stores one row per player with the progress serialized as JSON, plus a
    few denormalized columns for quick inspection.
    """

    def __init__(self, database_uri: str = "instance/eisgames.db"):
        """Initialize repository.

        Args:
            database_uri: Path to SQLite database file
        """
        self.database_path = Path(database_uri)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = dict_factory
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS progress (
                player_id TEXT PRIMARY KEY,
                streak INTEGER DEFAULT 0,
                cases_completed INTEGER DEFAULT 0,
                missions_completed INTEGER DEFAULT 0,
                data TEXT NOT NULL,
                created_at TEXT,
                updated_at TEXT
            )
        """)
        conn.commit()
        conn.close()

    def save_progress(self, player_id: str, progress: dict) -> None:
        """Persist a player's complete progress."""
        now = datetime.now(timezone.utc).isoformat()

        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("""
            INSERT INTO progress (
                player_id, streak, cases_completed, missions_completed, data, created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(player_id) DO UPDATE SET
                streak = excluded.streak,
                cases_completed = excluded.cases_completed,
                missions_completed = excluded.missions_completed,
                data = excluded.data,
                updated_at = excluded.updated_at
        """, (
            player_id,
            progress.get("streak", 0),
            len(progress.get("completed_case_ids", [])),
            len(progress.get("completed_mission_ids", [])),
            json.dumps(progress),
            now,
            now,
        ))

        conn.commit()
        conn.close()

    def load_progress(self, player_id: str) -> Optional[dict]:
        """Load a player's progress."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT data FROM progress WHERE player_id = ?", (player_id,))
        row = cursor.fetchone()
        conn.close()

        if row is None:
            return None

        return json.loads(row["data"])

    def list_players(self) -> list[str]:
        """Return ids of all players with saved progress."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT player_id FROM progress ORDER BY player_id")
        rows = cursor.fetchall()
        conn.close()
        return [row["player_id"] for row in rows]

    def delete_progress(self, player_id: str) -> bool:
        """Delete a player's progress."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM progress WHERE player_id = ?", (player_id,))
        deleted = cursor.rowcount > 0
        conn.commit()
        conn.close()
        return deleted
