"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from journey.access.schemas import CalendarDay, Principal
from journey.access.storage import InMemoryStorage
from journey.db.models import Base


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """Empty in-memory client storage."""
    return InMemoryStorage()


@pytest.fixture
def principal() -> Principal:
    """Authenticated principal without a stored role."""
    return Principal(user_id="test-user-123")


@pytest.fixture
def calendar_days() -> list[CalendarDay]:
    """Three-day calendar with day 1 completed and day 2 in progress."""
    return [
        CalendarDay(day_number=1, status="completed"),
        CalendarDay(day_number=2, status="in_progress"),
        CalendarDay(day_number=3, status="not_started"),
    ]


@pytest.fixture
def failing_session(monkeypatch):
    """Make every get_session() call fail as if the database were unreachable."""

    @contextmanager
    def broken_get_session():
        raise OperationalError("SELECT 1", {}, Exception("database is down"))
        yield

    import journey.access.challenge_access as challenge_access_module
    import journey.access.roles as roles_module
    import journey.access.storage as storage_module
    import journey.access.subscription as subscription_module

    for module in (storage_module, subscription_module, challenge_access_module, roles_module):
        monkeypatch.setattr(module, "get_session", broken_get_session)


@pytest.fixture(scope="function")
def db_session(monkeypatch):
    """
    Provides a transactional in-memory SQLite DB session for tests.

    This fixture:
    - Creates an isolated in-memory SQLite database per test
    - Patches the engine getter to return the test engine
    - Patches get_session() everywhere it is imported to yield the test session
    - Uses transaction rollback for cleanup
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    def mock_get_engine():
        return engine

    monkeypatch.setattr("journey.db.session._get_engine", mock_get_engine)
    monkeypatch.setattr("journey.db.session.get_engine", mock_get_engine)
    monkeypatch.setattr("journey.main.get_engine", mock_get_engine)

    Base.metadata.create_all(engine)

    connection = engine.connect()
    transaction = connection.begin()

    test_session_local = sessionmaker(bind=connection, autocommit=False, autoflush=False)
    session = test_session_local()

    @contextmanager
    def mock_get_session():
        yield session
        session.flush()

    # Patch where it's imported/used, not just where it's defined
    import journey.access.challenge_access as challenge_access_module
    import journey.access.roles as roles_module
    import journey.access.storage as storage_module
    import journey.access.subscription as subscription_module
    import journey.db.session as session_module

    for module in (session_module, storage_module, subscription_module, challenge_access_module, roles_module):
        monkeypatch.setattr(module, "get_session", mock_get_session)

    try:
        yield session
    finally:
        session.rollback()
        if transaction.is_active:
            transaction.rollback()
        session.close()
        connection.close()
