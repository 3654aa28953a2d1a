"""Activity feed and skill validations."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import dump_json, load_json
from shared_types import ActivityType, ValidationType

from .schema import _get_conn

logger = structlog.get_logger()


def _insert_activity(
    conn: sqlite3.Connection,
    user_id: str,
    activity_type: ActivityType,
    description: str,
    metadata: dict | None = None,
) -> None:
    conn.execute(
        "INSERT INTO user_activities (user_id, activity_type, description, metadata, created_at) "
        "VALUES (?, ?, ?, ?, ?)",
        (
            user_id,
            str(activity_type),
            description,
            dump_json(metadata or {}),
            datetime.now(timezone.utc).isoformat(),
        ),
    )


def log_activity(
    user_id: str,
    activity_type: ActivityType,
    description: str,
    metadata: dict | None = None,
    db_path: Path | None = None,
) -> None:
    """Append an entry to the user's activity feed."""
    conn = _get_conn(db_path)
    try:
        _insert_activity(conn, user_id, ActivityType(activity_type), description, metadata)
        conn.commit()
    finally:
        conn.close()


def recent_activities(user_id: str, limit: int = 20, db_path: Path | None = None) -> list[dict]:
    """Newest first."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT id, activity_type, description, metadata, created_at FROM user_activities "
            "WHERE user_id = ? ORDER BY created_at DESC, id DESC LIMIT ?",
            (user_id, limit),
        ).fetchall()
    finally:
        conn.close()
    return [
        {
            "id": r["id"],
            "activity_type": r["activity_type"],
            "description": r["description"],
            "metadata": load_json(r["metadata"], {}),
            "created_at": r["created_at"],
        }
        for r in rows
    ]


def create_validation(
    user_id: str,
    skill_id: int,
    validation_type: ValidationType,
    score: int | None = None,
    evidence: str | None = None,
    validated_by: str | None = None,
    db_path: Path | None = None,
) -> dict:
    """Record proof of a skill (assessment, project, certification, peer review)."""
    validation_type = ValidationType(validation_type)
    if score is not None and not 0 <= score <= 100:
        raise ValueError(f"score must be between 0 and 100, got {score}")
    now = datetime.now(timezone.utc).isoformat()
    conn = _get_conn(db_path)
    try:
        skill = conn.execute("SELECT name FROM skills WHERE id = ?", (skill_id,)).fetchone()
        if skill is None:
            raise ValueError(f"unknown skill id {skill_id}")
        cur = conn.execute(
            "INSERT INTO skill_validations "
            "(user_id, skill_id, validation_type, score, evidence, validated_by, validated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (user_id, skill_id, str(validation_type), score, evidence, validated_by, now),
        )
        _insert_activity(
            conn,
            user_id,
            ActivityType.VALIDATED_SKILL,
            f"Validated {skill['name']} via {validation_type}",
            {"skill_id": skill_id, "score": score},
        )
        conn.commit()
        validation_id = cur.lastrowid
    finally:
        conn.close()
    logger.info("store.validation_created", user_id=user_id, skill_id=skill_id, type=str(validation_type))
    return {
        "id": validation_id,
        "skill_id": skill_id,
        "skill_name": skill["name"],
        "validation_type": str(validation_type),
        "score": score,
        "evidence": evidence,
        "validated_by": validated_by,
        "validated_at": now,
    }


def list_validations(user_id: str, skill_id: int | None = None, db_path: Path | None = None) -> list[dict]:
    sql = (
        "SELECT v.id, v.skill_id, s.name AS skill_name, v.validation_type, v.score, v.evidence, "
        "v.validated_by, v.validated_at FROM skill_validations v JOIN skills s ON s.id = v.skill_id "
        "WHERE v.user_id = ?"
    )
    params: list = [user_id]
    if skill_id is not None:
        sql += " AND v.skill_id = ?"
        params.append(skill_id)
    sql += " ORDER BY v.validated_at DESC, v.id DESC"
    conn = _get_conn(db_path)
    try:
        return [dict(r) for r in conn.execute(sql, params).fetchall()]
    finally:
        conn.close()
