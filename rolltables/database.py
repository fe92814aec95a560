"""SQLAlchemy engine and declarative base for the embedded table database."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    """Declarative base for table storage models."""


def make_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for url.

    SQLite connections are shared with the store's lock holder across
    threads, so the same-thread check is turned off for them.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
