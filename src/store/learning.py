"""Learning resources, generated learning paths and per-resource progress."""

from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import dump_json, load_json
from gaps.engine import skill_key
from shared_types import ActivityType, ResourceType

from .activity import _insert_activity
from .schema import _get_conn

logger = structlog.get_logger()


def _resource_row(row) -> dict:
    data = dict(row)
    data["skill_names"] = load_json(data.get("skill_names"), [])
    data["is_free"] = bool(data.get("is_free"))
    return data


def seed_resources(resources=None, db_path: Path | None = None) -> int:
    """Insert default resources that aren't present yet (matched by title). Returns inserted count."""
    if resources is None:
        from catalog.data import DEFAULT_RESOURCES

        resources = DEFAULT_RESOURCES
    inserted = 0
    conn = _get_conn(db_path)
    try:
        for title, resource_type, provider, duration, difficulty, skill_names, url in resources:
            cur = conn.execute(
                "INSERT OR IGNORE INTO learning_resources "
                "(title, resource_type, provider, duration_minutes, difficulty, skill_names, url) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (title, str(ResourceType(resource_type)), provider, duration, difficulty,
                 dump_json(list(skill_names)), url),
            )
            inserted += cur.rowcount
        conn.commit()
    finally:
        conn.close()
    logger.info("store.resources_seeded", inserted=inserted)
    return inserted


def list_resources(
    resource_type: ResourceType | None = None,
    skill: str | None = None,
    db_path: Path | None = None,
) -> list[dict]:
    """Resources filtered by type and/or a case-insensitive skill name."""
    conn = _get_conn(db_path)
    try:
        if resource_type:
            rows = conn.execute(
                "SELECT * FROM learning_resources WHERE resource_type = ? ORDER BY id",
                (str(ResourceType(resource_type)),),
            ).fetchall()
        else:
            rows = conn.execute("SELECT * FROM learning_resources ORDER BY id").fetchall()
    finally:
        conn.close()
    resources = [_resource_row(r) for r in rows]
    if skill:
        wanted = skill_key(skill)
        resources = [r for r in resources if wanted in {skill_key(s) for s in r["skill_names"]}]
    return resources


def get_resource(resource_id: int, db_path: Path | None = None) -> dict | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM learning_resources WHERE id = ?", (resource_id,)).fetchone()
        return _resource_row(row) if row else None
    finally:
        conn.close()


# --- Learning paths ---


def save_path(user_id: str, path: dict, source: str = "llm", db_path: Path | None = None) -> dict:
    """Persist a generated path `{title, description, modules[]}`."""
    title = (path.get("title") or "").strip()
    if not title:
        raise ValueError("learning path title is required")
    modules = path.get("modules") or []
    now = datetime.now(timezone.utc).isoformat()
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            "INSERT INTO learning_paths (user_id, title, description, modules, source, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (user_id, title, path.get("description"), dump_json(modules), source, now),
        )
        conn.commit()
        path_id = cur.lastrowid
    finally:
        conn.close()
    logger.info("store.learning_path_saved", user_id=user_id, path_id=path_id, modules=len(modules), source=source)
    return {
        "id": path_id,
        "title": title,
        "description": path.get("description"),
        "modules": modules,
        "source": source,
        "created_at": now,
    }


def _path_row(row) -> dict:
    data = dict(row)
    data.pop("user_id", None)
    data["modules"] = load_json(data.get("modules"), [])
    return data


def list_paths(user_id: str, db_path: Path | None = None) -> list[dict]:
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT * FROM learning_paths WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [_path_row(r) for r in rows]
    finally:
        conn.close()


def get_path(user_id: str, path_id: int, db_path: Path | None = None) -> dict | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT * FROM learning_paths WHERE id = ? AND user_id = ?", (path_id, user_id)
        ).fetchone()
        return _path_row(row) if row else None
    finally:
        conn.close()


def delete_path(user_id: str, path_id: int, db_path: Path | None = None) -> bool:
    conn = _get_conn(db_path)
    try:
        cur = conn.execute("DELETE FROM learning_paths WHERE id = ? AND user_id = ?", (path_id, user_id))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()


# --- Progress ---


def record_progress(
    user_id: str,
    resource_id: int,
    progress: int,
    score: int | None = None,
    db_path: Path | None = None,
) -> dict:
    """Create or update progress on a resource; 100 marks it completed.

    The first record logs `started_resource`; crossing into completion logs
    `completed_resource`.
    """
    if not isinstance(progress, int) or not 0 <= progress <= 100:
        raise ValueError(f"progress must be between 0 and 100, got {progress!r}")
    resource = get_resource(resource_id, db_path=db_path)
    if resource is None:
        raise ValueError(f"unknown resource id {resource_id}")

    now = datetime.now(timezone.utc).isoformat()
    completed = progress >= 100
    conn = _get_conn(db_path)
    try:
        existing = conn.execute(
            "SELECT * FROM user_progress WHERE user_id = ? AND resource_id = ?",
            (user_id, resource_id),
        ).fetchone()
        if existing is None:
            conn.execute(
                "INSERT INTO user_progress (user_id, resource_id, progress, completed, score, started_at, "
                "completed_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (user_id, resource_id, progress, int(completed), score, now, now if completed else None),
            )
            _insert_activity(
                conn,
                user_id,
                ActivityType.STARTED_RESOURCE,
                f"Started {resource['title']}",
                {"resource_id": resource_id},
            )
            newly_completed = completed
        else:
            newly_completed = completed and not existing["completed"]
            conn.execute(
                "UPDATE user_progress SET progress = ?, completed = ?, score = COALESCE(?, score), "
                "completed_at = COALESCE(completed_at, ?) WHERE id = ?",
                (progress, int(completed or existing["completed"]), score,
                 now if completed else None, existing["id"]),
            )
        if newly_completed:
            _insert_activity(
                conn,
                user_id,
                ActivityType.COMPLETED_RESOURCE,
                f"Completed {resource['title']}",
                {"resource_id": resource_id, "score": score},
            )
        conn.commit()
        row = conn.execute(
            "SELECT * FROM user_progress WHERE user_id = ? AND resource_id = ?",
            (user_id, resource_id),
        ).fetchone()
    finally:
        conn.close()
    logger.info("store.progress_recorded", user_id=user_id, resource_id=resource_id, progress=progress)
    data = dict(row)
    data["completed"] = bool(data["completed"])
    data["resource_title"] = resource["title"]
    return data


def list_progress(user_id: str, db_path: Path | None = None) -> list[dict]:
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT p.*, r.title AS resource_title FROM user_progress p "
            "JOIN learning_resources r ON r.id = p.resource_id WHERE p.user_id = ? "
            "ORDER BY p.started_at DESC, p.id DESC",
            (user_id,),
        ).fetchall()
    finally:
        conn.close()
    result = []
    for r in rows:
        data = dict(r)
        data["completed"] = bool(data["completed"])
        result.append(data)
    return result


def progress_stats(user_id: str, db_path: Path | None = None) -> dict:
    """Counts feeding the dashboard stats block."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT COUNT(*) AS started, COALESCE(SUM(completed), 0) AS completed, "
            "COALESCE(SUM(r.duration_minutes * p.progress / 100), 0) AS minutes "
            "FROM user_progress p JOIN learning_resources r ON r.id = p.resource_id WHERE p.user_id = ?",
            (user_id,),
        ).fetchone()
    finally:
        conn.close()
    return {
        "resources_started": row["started"],
        "resources_completed": row["completed"],
        "learning_hours": round(row["minutes"] / 60, 1),
    }
