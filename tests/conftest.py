"""Shared fixtures — a seeded SQLite file installed as the global database."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from questions_db.config import AppConfig, DatabaseConfig
from questions_db.db.connection import Database, close_db, init_db

FIXTURE_SQL = Path(__file__).parent / "fixtures" / "questions.sql"


def _build_db(path: Path) -> Path:
    """Create a SQLite file at ``path`` from the fixture script."""
    conn = sqlite3.connect(path)
    try:
        conn.executescript(FIXTURE_SQL.read_text())
        conn.commit()
    finally:
        conn.close()
    return path


# ── fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Path to a freshly seeded database file."""
    return _build_db(tmp_path / "questions.db")


@pytest.fixture
def app_config(db_path) -> AppConfig:
    config = AppConfig()
    config.database = DatabaseConfig(sqlite_path=db_path)
    return config


@pytest.fixture
def db(app_config):
    """Install the seeded database as the process-wide handle."""
    database: Database = init_db(app_config)
    yield database
    close_db()
