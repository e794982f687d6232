"""
Tool: SQLite Document Store
Purpose: Persist Life OS documents in a local SQLite file

One row per (app, user, key); the value column holds the JSON document.

Dependencies:
    - sqlite3 (stdlib)
    - json (stdlib)
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from .base import DocumentStore, StoreError


class SQLiteDocumentStore(DocumentStore):
    """
    Args:
        db_path: SQLite file, created with its parent directory if needed
        app_id: Namespace for several apps sharing one file
        user_id: Owner of the documents
    """

    def __init__(self, db_path: Path, app_id: str = "life-os-default", user_id: str = "local"):
        super().__init__()
        self.db_path = Path(db_path)
        self.app_id = app_id
        self.user_id = user_id
        self.get_connection().close()

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection, creating tables if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row

        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                app_id TEXT NOT NULL,
                user_id TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (app_id, user_id, key)
            )
        """)
        conn.commit()
        return conn

    def _read(self, key: str) -> tuple[bool, Any]:
        try:
            conn = self.get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT value FROM documents WHERE app_id = ? AND user_id = ? AND key = ?",
                    (self.app_id, self.user_id, key),
                )
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

        if row is None:
            return False, None
        try:
            return True, json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt document {key}: {e}") from e

    def _write(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Document {key} is not JSON serializable: {e}") from e

        try:
            conn = self.get_connection()
            try:
                conn.execute(
                    """
                    INSERT INTO documents (app_id, user_id, key, value, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(app_id, user_id, key)
                    DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (self.app_id, self.user_id, key, payload, datetime.now().isoformat()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
