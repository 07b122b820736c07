from datetime import datetime, timezone

import pytest

from brainfood.scheduling import database
from brainfood.scheduling.config import SchedulingConfig


@pytest.fixture
def t0():
    return datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return SchedulingConfig()


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Point the card store at a fresh SQLite file for one test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cards.db'}")
    monkeypatch.delenv("TEST_MODE", raising=False)
    database.init_db()
    yield database
    database.get_engine().dispose()
