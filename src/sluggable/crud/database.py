"""Engine, schema and session helpers"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from sluggable.config import Settings
from sluggable.crud import models  # noqa: F401  (registers tables on SQLModel.metadata)
from sluggable.crud.hooks import SETTINGS_KEY, register_slug_hooks


def make_engine(db_url: str) -> Engine:
    return create_engine(db_url, echo=False)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def session_scope(engine: Engine, settings: Settings | None = None) -> Session:
    """Session with slug assignment hooked into its flushes. Use as a context manager.

    When settings are given, their slug defaults apply to every model flushed through it.
    """
    session = Session(engine)
    if settings is not None:
        session.info[SETTINGS_KEY] = settings
    register_slug_hooks(session)
    return session
