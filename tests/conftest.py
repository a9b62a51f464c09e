import os

os.environ.setdefault("ENV", "test")

from contextlib import contextmanager  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401  registers tables on Base.metadata
from app.db import Base  # noqa: E402
from app.models.chat_message import ChatMessage  # noqa: E402
from app.schemas.chat import MessageOrigin  # noqa: E402


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def file_session_factory(tmp_path):
    """File-backed SQLite so separate threads get separate connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'messages.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def session_scope(db):
    """Stand-in for DatabaseManager.db_session bound to the test session."""

    @contextmanager
    def _scope():
        yield db

    return _scope


@pytest.fixture
def subscriber_identity(faker):
    return faker.numerify("555#######")


@pytest.fixture(scope="function")
def setup_inbound_message(db, subscriber_identity):
    """An unprocessed user message asking for a bill."""
    message = ChatMessage(
        text="what is my bill for october 2024",
        origin=MessageOrigin.USER.value,
        subscriber_identity=subscriber_identity,
        processed=False,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message
