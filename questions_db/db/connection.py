"""Database connection management — one read-only SQLite handle per process."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any

from questions_db.config import AppConfig
from questions_db.db.errors import DatabaseNotFoundError, QueryError

logger = logging.getLogger(__name__)


# Explicit converters for PARSE_DECLTYPES; the sqlite3 defaults are deprecated
def _convert_date(value: bytes) -> date:
    return date.fromisoformat(value.decode())


def _convert_timestamp(value: bytes) -> datetime:
    return datetime.fromisoformat(value.decode())


sqlite3.register_converter("date", _convert_date)
sqlite3.register_converter("timestamp", _convert_timestamp)


class Database:
    """Read-only wrapper around a single SQLite connection.

    Rows come back as plain dicts keyed by column name. The connection is
    opened on first use and kept until ``close()``.
    """

    def __init__(self, config: AppConfig):
        self.config = config.database
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return Path(self.config.sqlite_path)

    def connection(self) -> sqlite3.Connection:
        """Return the open connection, opening it if needed."""
        if self._conn is None:
            self._conn = self._open()
        return self._conn

    def _open(self) -> sqlite3.Connection:
        if not self.path.exists():
            raise DatabaseNotFoundError(f"Database file not found: {self.path}")

        detect_types = sqlite3.PARSE_DECLTYPES if self.config.type_translation else 0
        conn = sqlite3.connect(
            f"{self.path.resolve().as_uri()}?mode=ro",
            uri=True,
            detect_types=detect_types,
        )
        conn.row_factory = sqlite3.Row
        logger.info("Opened database %s", self.path)
        return conn

    def execute(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and return results as list of dicts."""
        conn = self.connection()
        logger.debug("SQL %s params=%r", " ".join(sql.split()), params)
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Query failed: %s", e)
            raise QueryError(str(e)) from e
        return [dict(row) for row in rows]

    def execute_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a query and return the first row as a dict, or None."""
        results = self.execute(sql, params)
        return results[0] if results else None

    def execute_scalar(self, sql: str, params: tuple = ()) -> Any:
        """Execute a query and return the first column of the first row, or None."""
        row = self.execute_one(sql, params)
        if row is None:
            return None
        return next(iter(row.values()), None)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Closed database %s", self.path)


# Module-level singleton
_db: Database | None = None


def get_db() -> Database:
    """Get the global database instance, opening the configured file on first use."""
    global _db
    if _db is None:
        _db = Database(AppConfig.from_yaml())
    return _db


def init_db(config: AppConfig) -> Database:
    """Initialize the global database instance."""
    global _db
    close_db()
    _db = Database(config)
    return _db


def close_db() -> None:
    """Close and forget the global database instance."""
    global _db
    if _db is not None:
        _db.close()
        _db = None
