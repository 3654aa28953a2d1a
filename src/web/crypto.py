"""Fernet encryption for per-user secrets (LLM API keys)."""

import structlog
from cryptography.fernet import Fernet, InvalidToken

logger = structlog.get_logger()


def _get_fernet(secret_key: str) -> Fernet:
    """Create Fernet instance from a 32-byte url-safe base64 key."""
    return Fernet(secret_key.encode() if isinstance(secret_key, str) else secret_key)


def generate_key() -> str:
    return Fernet.generate_key().decode()


def encrypt_value(secret_key: str, value: str) -> str:
    return _get_fernet(secret_key).encrypt(value.encode()).decode()


def decrypt_value(secret_key: str, token: str, key_name: str | None = None) -> str | None:
    """Decrypt a stored secret. Returns None when the key was rotated or the token is corrupt."""
    try:
        return _get_fernet(secret_key).decrypt(token.encode()).decode()
    except InvalidToken:
        logger.warning("crypto.decrypt_failed", key=key_name)
        return None
