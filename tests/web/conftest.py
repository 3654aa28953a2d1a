"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient
from jose import jwt

from catalog import RoleCatalog
from store import init_db
from store.learning import seed_resources


@pytest.fixture
def secret_key():
    return Fernet.generate_key().decode()


@pytest.fixture
def jwt_secret():
    return "test-nextauth-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_token(jwt_secret):
    return _make_auth_token(jwt_secret, "user-123", "test@example.com", "Test")


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def auth_token_b(jwt_secret):
    """Second user token for isolation tests."""
    return _make_auth_token(jwt_secret, "user-456", "b@test.com", "UserB")


@pytest.fixture
def auth_headers_b(auth_token_b):
    return {"Authorization": f"Bearer {auth_token_b}"}


@pytest.fixture
def web_db(tmp_path):
    """Fresh database with the role catalog and resource library seeded."""
    db_path = tmp_path / "upcraft.db"
    init_db(db_path)
    RoleCatalog(db_path).seed()
    seed_resources(db_path=db_path)
    return db_path


@pytest.fixture
def client(jwt_secret, secret_key, web_db, monkeypatch):
    """Test client backed by the temp database; no LLM key anywhere."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    env = {
        "NEXTAUTH_SECRET": jwt_secret,
        "SECRET_KEY": secret_key,
    }
    patches = [
        patch.dict(os.environ, env),
        # stores read the default path at call time
        patch("store.schema._DEFAULT_DB_PATH", web_db),
    ]

    for p in patches:
        p.start()

    from web.app import app
    from web.deps import get_registry

    # Sessions cache per-user state; never share them across databases
    get_registry().clear()

    yield TestClient(app)

    get_registry().clear()
    for p in reversed(patches):
        p.stop()


@pytest.fixture
def role_id(client, web_db):
    """Id of the seeded Scrum Master role."""
    return RoleCatalog(web_db).find_by_title("Scrum Master").id


@pytest.fixture
def fake_llm_for_routes(fake_llm):
    """Patch route-level LLM lookup with a canned provider double."""

    def _install(module, **kwargs):
        llm = fake_llm(**kwargs)
        p = patch(f"web.routes.{module}.get_llm_for_user", return_value=llm)
        p.start()
        _started.append(p)
        return llm

    _started = []
    yield _install
    for p in _started:
        p.stop()
