from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_AIDE = "task_log"
DEFAULT_AIDE_TYPE = "file"


@dataclass(frozen=True, slots=True)
class TaskRecord:
    name: str
    priority: int
    status: str
    log_path: Path
    created_at: str


@dataclass(frozen=True, slots=True)
class AideRecord:
    id: int
    name: str
    aide_type: str
    data_count: int = 0


@dataclass(frozen=True, slots=True)
class DataEntry:
    aide_name: str
    input_text: str
    command_output: str


class AideStore:
    """SQLite-backed storage for tasks, aides, their data and config values."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path)
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS aides (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                aide_type TEXT NOT NULL
            )
            """
        )
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS data (
                id INTEGER PRIMARY KEY,
                aide_id INTEGER NOT NULL,
                input_text TEXT NOT NULL,
                command_output TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (aide_id) REFERENCES aides (id) ON DELETE CASCADE
            )
            """
        )
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                priority INTEGER NOT NULL DEFAULT 3,
                status TEXT NOT NULL DEFAULT 'created',
                task_log_file_path TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS config_data (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        self._ensure_default_aide()
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def _ensure_default_aide(self) -> None:
        self._conn.execute(
            "INSERT OR IGNORE INTO aides (name, aide_type) VALUES (?, ?)",
            (DEFAULT_AIDE, DEFAULT_AIDE_TYPE),
        )

    # Name lists, in insertion order, feed the resolution indexes.

    def task_names(self) -> list[str]:
        cursor = self._conn.execute("SELECT name FROM tasks ORDER BY id")
        return [row[0] for row in cursor.fetchall()]

    def aide_names(self) -> list[str]:
        cursor = self._conn.execute("SELECT name FROM aides ORDER BY id")
        return [row[0] for row in cursor.fetchall()]

    def config_keys(self) -> list[str]:
        cursor = self._conn.execute("SELECT key FROM config_data ORDER BY rowid")
        return [row[0] for row in cursor.fetchall()]

    # Tasks

    def create_task(self, name: str, priority: int, status: str, log_path: Path) -> bool:
        try:
            self._conn.execute(
                """
                INSERT INTO tasks (name, priority, status, task_log_file_path)
                VALUES (?, ?, ?, ?)
                """,
                (name, int(priority), status, str(log_path)),
            )
        except sqlite3.IntegrityError:
            return False
        self._conn.commit()
        return True

    def get_task(self, name: str) -> Optional[TaskRecord]:
        cursor = self._conn.execute(
            """
            SELECT name, priority, status, task_log_file_path, created_at
            FROM tasks WHERE name = ?
            """,
            (name,),
        )
        row = cursor.fetchone()
        if not row:
            return None
        return TaskRecord(row[0], int(row[1]), row[2], Path(row[3]), row[4])

    def list_tasks(self) -> list[TaskRecord]:
        cursor = self._conn.execute(
            """
            SELECT name, priority, status, task_log_file_path, created_at
            FROM tasks ORDER BY priority, created_at, id
            """
        )
        return [
            TaskRecord(row[0], int(row[1]), row[2], Path(row[3]), row[4])
            for row in cursor.fetchall()
        ]

    def set_task_status(self, name: str, status: str) -> bool:
        cursor = self._conn.execute(
            "UPDATE tasks SET status = ? WHERE name = ?", (status, name)
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def set_task_priority(self, name: str, priority: int) -> bool:
        cursor = self._conn.execute(
            "UPDATE tasks SET priority = ? WHERE name = ?", (int(priority), name)
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def delete_task(self, name: str) -> bool:
        cursor = self._conn.execute("DELETE FROM tasks WHERE name = ?", (name,))
        self._conn.commit()
        return cursor.rowcount > 0

    # Aides and their data

    def create_aide(self, name: str, aide_type: str) -> bool:
        try:
            self._conn.execute(
                "INSERT INTO aides (name, aide_type) VALUES (?, ?)", (name, aide_type)
            )
        except sqlite3.IntegrityError:
            return False
        self._conn.commit()
        return True

    def get_aide(self, name: str) -> Optional[AideRecord]:
        cursor = self._conn.execute(
            """
            SELECT a.id, a.name, a.aide_type, COUNT(d.id)
            FROM aides a LEFT JOIN data d ON a.id = d.aide_id
            WHERE a.name = ?
            GROUP BY a.id
            """,
            (name,),
        )
        row = cursor.fetchone()
        if not row:
            return None
        return AideRecord(int(row[0]), row[1], row[2], int(row[3]))

    def list_aides(self) -> list[AideRecord]:
        cursor = self._conn.execute(
            """
            SELECT a.id, a.name, a.aide_type, COUNT(d.id)
            FROM aides a LEFT JOIN data d ON a.id = d.aide_id
            GROUP BY a.id
            ORDER BY a.name
            """
        )
        return [
            AideRecord(int(row[0]), row[1], row[2], int(row[3]))
            for row in cursor.fetchall()
        ]

    def delete_aide(self, name: str) -> bool:
        # Databases created without the cascade keep data rows otherwise.
        self._conn.execute(
            "DELETE FROM data WHERE aide_id IN (SELECT id FROM aides WHERE name = ?)",
            (name,),
        )
        cursor = self._conn.execute("DELETE FROM aides WHERE name = ?", (name,))
        self._conn.commit()
        return cursor.rowcount > 0

    def add_data(self, aide_id: int, input_text: str, command_output: str) -> None:
        self._conn.execute(
            "INSERT INTO data (aide_id, input_text, command_output) VALUES (?, ?, ?)",
            (aide_id, input_text, command_output),
        )
        self._conn.commit()

    def list_data(self) -> list[DataEntry]:
        cursor = self._conn.execute(
            """
            SELECT a.name, d.input_text, d.command_output
            FROM data d JOIN aides a ON d.aide_id = a.id
            ORDER BY d.id
            """
        )
        return [DataEntry(row[0], row[1], row[2]) for row in cursor.fetchall()]

    # Config

    def set_config(self, key: str, value: str) -> None:
        self._conn.execute(
            """
            INSERT INTO config_data(key, value, updated_at)
            VALUES(?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """,
            (key, value),
        )
        self._conn.commit()

    def get_config(self, key: str) -> Optional[str]:
        cursor = self._conn.execute("SELECT value FROM config_data WHERE key = ?", (key,))
        row = cursor.fetchone()
        if not row:
            return None
        return row[0]

    def list_config(self) -> list[tuple[str, str]]:
        cursor = self._conn.execute("SELECT key, value FROM config_data ORDER BY key")
        return [(row[0], row[1]) for row in cursor.fetchall()]

    def delete_config(self, key: str) -> bool:
        cursor = self._conn.execute("DELETE FROM config_data WHERE key = ?", (key,))
        self._conn.commit()
        return cursor.rowcount > 0

    def clear_all(self) -> None:
        self._conn.execute("DELETE FROM data")
        self._conn.execute("DELETE FROM tasks")
        self._conn.execute("DELETE FROM aides")
        self._conn.execute("DELETE FROM config_data")
        self._ensure_default_aide()
        self._conn.commit()
