"""Users and their encrypted secrets."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from web.crypto import decrypt_value, encrypt_value

from .schema import _get_conn

logger = structlog.get_logger()


def get_or_create_user(
    user_id: str,
    email: str | None = None,
    name: str | None = None,
    db_path: Path | None = None,
) -> dict[str, Any]:
    """Upsert user on login. Returns user dict."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row:
            if email or name:
                conn.execute(
                    "UPDATE users SET email = COALESCE(?, email), name = COALESCE(?, name) WHERE id = ?",
                    (email, name, user_id),
                )
                conn.commit()
                row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return dict(row)
        now = datetime.now(timezone.utc).isoformat()
        conn.execute(
            "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
            (user_id, email, name, now),
        )
        conn.commit()
        logger.info("user_store.user_created", user_id=user_id)
        return {"id": user_id, "email": email, "name": name, "created_at": now}
    finally:
        conn.close()


def get_user(user_id: str, db_path: Path | None = None) -> dict | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def get_user_secret(
    user_id: str,
    secret_key: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> str | None:
    """Get a single decrypted secret for a user."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT value FROM user_secrets WHERE user_id = ? AND key = ?",
            (user_id, secret_key),
        ).fetchone()
        if not row:
            return None
        return decrypt_value(fernet_key, row["value"], key_name=secret_key)
    finally:
        conn.close()


def get_user_secrets(
    user_id: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> dict[str, str]:
    """Get all decrypted secrets for a user, skipping ones that no longer decrypt."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT key, value FROM user_secrets WHERE user_id = ?",
            (user_id,),
        ).fetchall()
    finally:
        conn.close()
    result = {}
    skipped = 0
    for row in rows:
        val = decrypt_value(fernet_key, row["value"], key_name=row["key"])
        if val is not None:
            result[row["key"]] = val
        else:
            skipped += 1
    if skipped:
        logger.warning("user_store.secrets_skipped", user_id=user_id, total=len(rows), skipped=skipped)
    return result


def set_user_secret(
    user_id: str,
    secret_key: str,
    value: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> None:
    """Encrypt and store a secret for a user."""
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "INSERT INTO user_secrets (user_id, key, value) VALUES (?, ?, ?) "
            "ON CONFLICT(user_id, key) DO UPDATE SET value = excluded.value",
            (user_id, secret_key, encrypt_value(fernet_key, value)),
        )
        conn.commit()
        logger.info("user_store.secret_saved", user_id=user_id, key=secret_key)
    finally:
        conn.close()


def delete_user_secret(user_id: str, secret_key: str, db_path: Path | None = None) -> None:
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "DELETE FROM user_secrets WHERE user_id = ? AND key = ?",
            (user_id, secret_key),
        )
        conn.commit()
    finally:
        conn.close()
