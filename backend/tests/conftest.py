"""
Point the app at a shared in-memory SQLite database and create the schema.
Runs before any test module imports reptrack.
"""
import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DB_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402

from reptrack import models  # noqa: E402,F401  # registers tables
from reptrack.db import Base, SessionLocal, engine  # noqa: E402

Base.metadata.create_all(engine)

BASE_TIME = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the tests move by hand."""
    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
