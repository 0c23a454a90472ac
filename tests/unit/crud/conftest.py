"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from sluggable.crud.hooks import register_slug_hooks
from sluggable.crud.models import Article


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test with slug hooks installed; changes are not committed."""
    with Session(engine) as s:
        register_slug_hooks(s)
        yield s


@pytest.fixture(name="article")
def article_fixture(session):
    """A minimal Article flushed to the session."""
    a = Article(title="Hello World")
    session.add(a)
    session.flush()
    return a
