"""SQLite persistence for users, skills, goals, learning and activity."""

from .schema import init_db, set_default_db_path

__all__ = ["init_db", "set_default_db_path"]
