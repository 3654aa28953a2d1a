"""SQLite schema and connection helper shared by every store module."""

import os
import sqlite3
from pathlib import Path

import structlog

from db import wal_connect

logger = structlog.get_logger()

_DEFAULT_DB_PATH = Path(os.environ.get("UPCRAFT_HOME", Path.home() / "upcraft")) / "upcraft.db"


def set_default_db_path(path: Path) -> None:
    """Point every store call without an explicit db_path at `path`."""
    global _DEFAULT_DB_PATH
    _DEFAULT_DB_PATH = Path(path).expanduser()


def _get_conn(db_path: Path | None = None) -> sqlite3.Connection:
    return wal_connect(db_path or _DEFAULT_DB_PATH)


def init_db(db_path: Path | None = None) -> None:
    """Create tables if they don't exist."""
    conn = _get_conn(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT,
                name TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE IF NOT EXISTS user_secrets (
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (user_id, key)
            );

            CREATE TABLE IF NOT EXISTS roles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL UNIQUE,
                industry TEXT NOT NULL,
                role_type TEXT NOT NULL,
                level TEXT NOT NULL DEFAULT 'mid',
                description TEXT,
                required_skills TEXT NOT NULL DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS skills (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                name_key TEXT NOT NULL UNIQUE,
                category TEXT NOT NULL,
                description TEXT
            );
            CREATE TABLE IF NOT EXISTS user_skills (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                skill_id INTEGER NOT NULL REFERENCES skills(id),
                current_level INTEGER NOT NULL CHECK(current_level BETWEEN 0 AND 100),
                target_level INTEGER NOT NULL CHECK(target_level BETWEEN 0 AND 100),
                notes TEXT,
                last_assessed TIMESTAMP NOT NULL,
                UNIQUE (user_id, skill_id)
            );

            CREATE TABLE IF NOT EXISTS career_goals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                title TEXT NOT NULL,
                description TEXT,
                timeline_months INTEGER NOT NULL,
                target_date TEXT,
                current_role_id INTEGER REFERENCES roles(id),
                target_role_id INTEGER REFERENCES roles(id),
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_goal_user ON career_goals(user_id, created_at DESC);

            CREATE TABLE IF NOT EXISTS learning_resources (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL UNIQUE,
                description TEXT,
                resource_type TEXT NOT NULL,
                url TEXT,
                duration_minutes INTEGER,
                provider TEXT,
                skill_names TEXT NOT NULL DEFAULT '[]',
                difficulty TEXT,
                is_free INTEGER NOT NULL DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE IF NOT EXISTS learning_paths (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                title TEXT NOT NULL,
                description TEXT,
                modules TEXT NOT NULL DEFAULT '[]',
                source TEXT NOT NULL DEFAULT 'llm',
                created_at TIMESTAMP NOT NULL
            );
            CREATE TABLE IF NOT EXISTS user_progress (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                resource_id INTEGER NOT NULL REFERENCES learning_resources(id),
                progress INTEGER NOT NULL CHECK(progress BETWEEN 0 AND 100),
                completed INTEGER NOT NULL DEFAULT 0,
                score INTEGER,
                started_at TIMESTAMP NOT NULL,
                completed_at TIMESTAMP,
                UNIQUE (user_id, resource_id)
            );

            CREATE TABLE IF NOT EXISTS user_activities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                activity_type TEXT NOT NULL CHECK(activity_type IN (
                    'completed_resource','started_resource','updated_skill',
                    'validated_skill','set_career_goal'
                )),
                description TEXT NOT NULL,
                metadata TEXT DEFAULT '{}',
                created_at TIMESTAMP NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_activity_user ON user_activities(user_id, created_at DESC);

            CREATE TABLE IF NOT EXISTS skill_validations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                skill_id INTEGER NOT NULL REFERENCES skills(id),
                validation_type TEXT NOT NULL,
                score INTEGER,
                evidence TEXT,
                validated_by TEXT,
                validated_at TIMESTAMP NOT NULL
            );
        """)
        conn.commit()
    finally:
        conn.close()
    logger.debug("store.init_db", db_path=str(db_path or _DEFAULT_DB_PATH))
