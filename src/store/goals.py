"""Career goals and the per-user target role pointer."""

from datetime import datetime, timezone
from pathlib import Path

import structlog

from shared_types import ActivityType

from .activity import _insert_activity
from .schema import _get_conn

logger = structlog.get_logger()

DEFAULT_TIMELINE_MONTHS = 12

_GOAL_FIELDS = ("title", "description", "timeline_months", "target_date", "current_role_id", "target_role_id")


def _check_timeline(months) -> None:
    if not isinstance(months, int) or months < 1:
        raise ValueError(f"timeline_months must be a positive integer, got {months!r}")


def create_goal(
    user_id: str,
    title: str,
    timeline_months: int = DEFAULT_TIMELINE_MONTHS,
    description: str | None = None,
    target_date: str | None = None,
    current_role_id: int | None = None,
    target_role_id: int | None = None,
    db_path: Path | None = None,
) -> dict:
    """Create a career goal; the newest goal is the user's current one."""
    if not title or not title.strip():
        raise ValueError("goal title is required")
    _check_timeline(timeline_months)
    now = datetime.now(timezone.utc).isoformat()
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            "INSERT INTO career_goals (user_id, title, description, timeline_months, target_date, "
            "current_role_id, target_role_id, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (user_id, title.strip(), description, timeline_months, target_date,
             current_role_id, target_role_id, now, now),
        )
        _insert_activity(
            conn,
            user_id,
            ActivityType.SET_CAREER_GOAL,
            f"Set new career goal: {title.strip()}",
            {"goal_id": cur.lastrowid, "target_role_id": target_role_id},
        )
        conn.commit()
        goal_id = cur.lastrowid
    finally:
        conn.close()
    logger.info("store.goal_created", user_id=user_id, goal_id=goal_id, target_role_id=target_role_id)
    return get_goal(user_id, goal_id, db_path=db_path)


def get_goal(user_id: str, goal_id: int, db_path: Path | None = None) -> dict | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT * FROM career_goals WHERE id = ? AND user_id = ?", (goal_id, user_id)
        ).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def list_goals(user_id: str, db_path: Path | None = None) -> list[dict]:
    """Newest first."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT * FROM career_goals WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [dict(r) for r in rows]
    finally:
        conn.close()


def current_goal(user_id: str, db_path: Path | None = None) -> dict | None:
    goals = list_goals(user_id, db_path=db_path)
    return goals[0] if goals else None


def update_goal(user_id: str, goal_id: int, db_path: Path | None = None, **fields) -> dict | None:
    """Patch a goal. Unknown field names raise ValueError; returns None if the goal is missing."""
    unknown = set(fields) - set(_GOAL_FIELDS)
    if unknown:
        raise ValueError(f"unknown goal fields: {sorted(unknown)}")
    if "title" in fields:
        if not fields["title"] or not fields["title"].strip():
            raise ValueError("goal title is required")
        fields["title"] = fields["title"].strip()
    if "timeline_months" in fields:
        _check_timeline(fields["timeline_months"])
    if not fields:
        return get_goal(user_id, goal_id, db_path=db_path)

    assignments = ", ".join(f"{k} = ?" for k in fields)
    params = list(fields.values()) + [datetime.now(timezone.utc).isoformat(), goal_id, user_id]
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            f"UPDATE career_goals SET {assignments}, updated_at = ? WHERE id = ? AND user_id = ?",
            params,
        )
        if cur.rowcount == 0:
            return None
        conn.commit()
    finally:
        conn.close()
    logger.info("store.goal_updated", user_id=user_id, goal_id=goal_id, fields=sorted(fields))
    return get_goal(user_id, goal_id, db_path=db_path)


def set_target_role(user_id: str, role_id: int, role_title: str, db_path: Path | None = None) -> dict:
    """Point the current goal at `role_id`, creating a goal if the user has none.

    The pointer is replaced, never appended.
    """
    goal = current_goal(user_id, db_path=db_path)
    if goal is None:
        return create_goal(
            user_id,
            title=f"Become a {role_title}",
            timeline_months=DEFAULT_TIMELINE_MONTHS,
            target_role_id=role_id,
            db_path=db_path,
        )
    return update_goal(user_id, goal["id"], db_path=db_path, target_role_id=role_id)


def clear_target_role(user_id: str, db_path: Path | None = None) -> dict | None:
    goal = current_goal(user_id, db_path=db_path)
    if goal is None or goal["target_role_id"] is None:
        return goal
    return update_goal(user_id, goal["id"], db_path=db_path, target_role_id=None)
