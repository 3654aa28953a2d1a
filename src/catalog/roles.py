"""Role catalog backed by the shared SQLite database."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import structlog

from db import dump_json, load_json
from shared_types import Industry, RoleType
from store.schema import _get_conn, init_db

from .data import DEFAULT_ROLES

logger = structlog.get_logger()


class CatalogError(Exception):
    """Invalid role data."""


@dataclass(frozen=True)
class Role:
    id: int
    title: str
    industry: str
    role_type: str
    level: str = "mid"
    description: Optional[str] = None
    required_skills: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "industry": self.industry,
            "role_type": self.role_type,
            "level": self.level,
            "description": self.description,
            "required_skills": list(self.required_skills),
        }


def _row_to_role(row) -> Role:
    return Role(
        id=row["id"],
        title=row["title"],
        industry=row["industry"],
        role_type=row["role_type"],
        level=row["level"],
        description=row["description"],
        required_skills=tuple(load_json(row["required_skills"], [])),
    )


class RoleCatalog:
    """Read-mostly access to roles and their ordered required-skill lists."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path

    def init(self) -> None:
        init_db(self.db_path)

    def seed(self, roles: Iterable[tuple] = DEFAULT_ROLES) -> int:
        """Insert or refresh roles keyed by title. Safe to run repeatedly.

        Returns:
            Number of roles written
        """
        written = 0
        conn = _get_conn(self.db_path)
        try:
            for title, industry, role_type, level, description, skills in roles:
                try:
                    industry = str(Industry(industry))
                    role_type = str(RoleType(role_type))
                except ValueError as e:
                    raise CatalogError(f"invalid role {title!r}: {e}") from e
                conn.execute(
                    "INSERT INTO roles (title, industry, role_type, level, description, required_skills) "
                    "VALUES (?, ?, ?, ?, ?, ?) ON CONFLICT(title) DO UPDATE SET "
                    "industry = excluded.industry, role_type = excluded.role_type, level = excluded.level, "
                    "description = excluded.description, required_skills = excluded.required_skills",
                    (title, industry, role_type, level, description, dump_json(list(skills))),
                )
                written += 1
            conn.commit()
        finally:
            conn.close()
        logger.info("catalog.seeded", roles=written)
        return written

    def list_roles(self, industry: str | None = None, role_type: str | None = None) -> list[Role]:
        sql = "SELECT * FROM roles"
        clauses, params = [], []
        if industry:
            clauses.append("industry = ?")
            params.append(industry)
        if role_type:
            clauses.append("role_type = ?")
            params.append(role_type)
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY title"
        conn = _get_conn(self.db_path)
        try:
            return [_row_to_role(r) for r in conn.execute(sql, params).fetchall()]
        finally:
            conn.close()

    def get(self, role_id: int) -> Optional[Role]:
        conn = _get_conn(self.db_path)
        try:
            row = conn.execute("SELECT * FROM roles WHERE id = ?", (role_id,)).fetchone()
            return _row_to_role(row) if row else None
        finally:
            conn.close()

    def find_by_title(self, title: str) -> Optional[Role]:
        conn = _get_conn(self.db_path)
        try:
            row = conn.execute(
                "SELECT * FROM roles WHERE lower(title) = ?", (title.strip().lower(),)
            ).fetchone()
            return _row_to_role(row) if row else None
        finally:
            conn.close()

    def industries(self) -> list[str]:
        conn = _get_conn(self.db_path)
        try:
            rows = conn.execute("SELECT DISTINCT industry FROM roles ORDER BY industry").fetchall()
            return [r["industry"] for r in rows]
        finally:
            conn.close()
