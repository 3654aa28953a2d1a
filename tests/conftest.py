"""Shared test fixtures for Upcraft."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from catalog import RoleCatalog  # noqa: E402
from observability import metrics  # noqa: E402
from store import init_db  # noqa: E402
from store.learning import seed_resources  # noqa: E402
from store.users import get_or_create_user  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    """Fresh SQLite database with all tables."""
    path = tmp_path / "upcraft.db"
    init_db(path)
    return path


@pytest.fixture
def catalog(db_path):
    """Seeded role catalog."""
    cat = RoleCatalog(db_path)
    cat.seed()
    return cat


@pytest.fixture
def resources(db_path):
    seed_resources(db_path=db_path)
    return db_path


@pytest.fixture
def user(db_path):
    return get_or_create_user("user-1", email="u1@example.com", name="User One", db_path=db_path)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


class FakeRole:
    """Minimal role object: the gap core only reads id, title, required_skills."""

    def __init__(self, id, title, required_skills=()):
        self.id = id
        self.title = title
        self.required_skills = tuple(required_skills)

    def __repr__(self):
        return f"FakeRole({self.id}, {self.title!r})"


@pytest.fixture
def make_role():
    return FakeRole


def make_llm(json_reply=None, text_reply="ok", error=None):
    """LLMProvider double returning canned replies or raising `error`."""
    llm = MagicMock()
    llm.provider_name = "openai"
    if error is not None:
        llm.generate_json.side_effect = error
        llm.generate.side_effect = error
    else:
        llm.generate_json.return_value = json_reply if json_reply is not None else {}
        llm.generate.return_value = text_reply
    return llm


@pytest.fixture
def fake_llm():
    return make_llm
