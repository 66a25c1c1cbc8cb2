"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite engine and session factory, mocked sessions,
row seeding helper, service under test
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

import json
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from userstore.application.services.user_service import UserService
from userstore.boundary.db.base import Base
from userstore.boundary.db.CRUD.user_crud import user_crud
from userstore.boundary.db.models.user_model import UserModel


@pytest.fixture
def test_engine() -> Iterator[Engine]:
    """
    Create in-memory SQLite engine with the Users table.

    Yields:
        Engine: Engine sharing one connection across sessions
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the in-memory engine."""
    return sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Session for direct gateway tests; rolled back afterwards."""
    with session_factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def unique_names(test_engine: Engine) -> None:
    """Add a unique constraint on Users.name so duplicate names fail in the store."""
    with test_engine.begin() as conn:
        conn.execute(text('CREATE UNIQUE INDEX ux_users_name ON "Users" (name)'))


@pytest.fixture
def seed_users(session_factory: sessionmaker[Session]) -> Callable[..., list[int]]:
    """
    Provide a helper that commits rows straight through the ORM.

    Each row is a dict of UserModel attributes; a dict ``settings`` value is
    serialized to JSON, a string is stored verbatim.

    Returns:
        Callable returning the ids of the committed rows
    """

    def _seed(*rows: dict) -> list[int]:
        models = []
        for row in rows:
            values = {"last_name": "Doe", "age": 30, **row}
            if isinstance(values.get("settings"), dict):
                values["settings"] = json.dumps(values["settings"])
            models.append(UserModel(**values))
        with session_factory() as session, session.begin():
            session.add_all(models)
            session.flush()
            return [model.id for model in models]

    return _seed


@pytest.fixture
def user_service(session_factory: sessionmaker[Session]) -> UserService:
    """UserService running against the in-memory store."""
    return UserService(session_factory=session_factory, transaction_timeout=30.0)


@pytest.fixture
def mock_session() -> Session:
    """Provide mock database session."""
    return MagicMock(spec=Session)


@pytest.fixture
def count_rows(session_factory: sessionmaker[Session]) -> Callable[[], int]:
    """Provide a helper counting committed Users rows."""

    def _count() -> int:
        with session_factory() as session:
            return user_crud.count(session)

    return _count
