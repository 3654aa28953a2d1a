"""Skill catalog and per-user self-assessed skill levels."""

from datetime import datetime, timezone
from pathlib import Path

import structlog

from gaps.engine import SkillLevel, normalize_user_skills, skill_key, skill_percentage
from shared_types import ActivityType, SkillCategory

from .activity import _insert_activity
from .schema import _get_conn

logger = structlog.get_logger()


def _check_level(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be between 0 and 100, got {value}")
    return value


def get_or_create_skill(
    name: str,
    category: SkillCategory = SkillCategory.TECHNICAL,
    description: str | None = None,
    db_path: Path | None = None,
) -> dict:
    """Look up a skill by case-insensitive name, creating it on first use."""
    name = name.strip()
    if not name:
        raise ValueError("skill name is required")
    category = SkillCategory(category)
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM skills WHERE name_key = ?", (skill_key(name),)).fetchone()
        if row is None:
            conn.execute(
                "INSERT INTO skills (name, name_key, category, description) VALUES (?, ?, ?, ?)",
                (name, skill_key(name), str(category), description),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM skills WHERE name_key = ?", (skill_key(name),)).fetchone()
            logger.debug("store.skill_created", name=name, category=str(category))
        return {k: row[k] for k in ("id", "name", "category", "description")}
    finally:
        conn.close()


def list_skills(category: SkillCategory | None = None, db_path: Path | None = None) -> list[dict]:
    conn = _get_conn(db_path)
    try:
        if category:
            rows = conn.execute(
                "SELECT id, name, category, description FROM skills WHERE category = ? ORDER BY name",
                (str(SkillCategory(category)),),
            ).fetchall()
        else:
            rows = conn.execute("SELECT id, name, category, description FROM skills ORDER BY name").fetchall()
        return [dict(r) for r in rows]
    finally:
        conn.close()


_USER_SKILL_SELECT = (
    "SELECT us.id, us.skill_id, s.name, s.category, us.current_level, us.target_level, "
    "us.notes, us.last_assessed FROM user_skills us JOIN skills s ON s.id = us.skill_id "
)


def upsert_user_skill(
    user_id: str,
    skill_name: str,
    current_level: int,
    target_level: int,
    category: SkillCategory = SkillCategory.TECHNICAL,
    notes: str | None = None,
    db_path: Path | None = None,
) -> dict:
    """Record an assessment: create the user's skill or update its levels.

    Raises:
        ValueError: levels outside 0..100 or an empty skill name
    """
    _check_level("current_level", current_level)
    _check_level("target_level", target_level)
    skill = get_or_create_skill(skill_name, category, db_path=db_path)
    now = datetime.now(timezone.utc).isoformat()

    conn = _get_conn(db_path)
    try:
        existing = conn.execute(
            "SELECT id FROM user_skills WHERE user_id = ? AND skill_id = ?",
            (user_id, skill["id"]),
        ).fetchone()
        if existing:
            conn.execute(
                "UPDATE user_skills SET current_level = ?, target_level = ?, "
                "notes = COALESCE(?, notes), last_assessed = ? WHERE id = ?",
                (current_level, target_level, notes, now, existing["id"]),
            )
        else:
            conn.execute(
                "INSERT INTO user_skills (user_id, skill_id, current_level, target_level, notes, last_assessed) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (user_id, skill["id"], current_level, target_level, notes, now),
            )
        _insert_activity(
            conn,
            user_id,
            ActivityType.UPDATED_SKILL,
            f"Updated {skill['name']} skill level to {current_level}",
            {"skill_id": skill["id"], "current_level": current_level, "target_level": target_level},
        )
        conn.commit()
        row = conn.execute(
            _USER_SKILL_SELECT + "WHERE us.user_id = ? AND us.skill_id = ?",
            (user_id, skill["id"]),
        ).fetchone()
    finally:
        conn.close()
    logger.info(
        "store.user_skill_assessed",
        user_id=user_id,
        skill=skill["name"],
        current_level=current_level,
        target_level=target_level,
        created=existing is None,
    )
    return dict(row)


def list_user_skills(user_id: str, db_path: Path | None = None) -> list[dict]:
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(_USER_SKILL_SELECT + "WHERE us.user_id = ? ORDER BY s.name", (user_id,)).fetchall()
        return [dict(r) for r in rows]
    finally:
        conn.close()


def get_user_skill(user_id: str, skill_name: str, db_path: Path | None = None) -> dict | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            _USER_SKILL_SELECT + "WHERE us.user_id = ? AND s.name_key = ?",
            (user_id, skill_key(skill_name)),
        ).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def skill_levels_for_user(user_id: str, db_path: Path | None = None) -> dict[str, SkillLevel]:
    """Lowercase-keyed levels mapping consumed by the gap engine."""
    return normalize_user_skills(list_user_skills(user_id, db_path=db_path))


def overall_progress(user_id: str, db_path: Path | None = None) -> int:
    """Mean of current/target across every assessed skill, 0 when nothing is assessed."""
    levels = skill_levels_for_user(user_id, db_path=db_path)
    if not levels:
        return 0
    return round(sum(skill_percentage(lvl.current_level, lvl.target_level) for lvl in levels.values()) / len(levels))
