"""Shared SQLite helpers: WAL mode, foreign keys, JSON columns."""

import json
import sqlite3
from pathlib import Path
from typing import Any


def wal_connect(db_path: str | Path, row_factory: bool = True) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode and foreign keys enforced.

    Args:
        db_path: Path to database file. Parent dirs are created.
        row_factory: If True (default), rows come back as sqlite3.Row.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn


def dump_json(value: Any) -> str:
    return json.dumps(value)


def load_json(raw: str | None, default: Any = None) -> Any:
    """Decode a JSON column; malformed or NULL values yield default."""
    if raw is None or raw == "":
        return default
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return default
