"""
The in-memory store.

A Store owns the engine, the session factory and the write
lock. It is built once at process start (schema created,
optionally seeded) and disposed at process end. Nothing in
the package keeps a module-level engine or session.

Every public operation runs inside transaction(): one
session, one database transaction, one critical section.
Either all of its writes are committed or none are.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from meal_card.models import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine for a database URL.

    An in-memory SQLite database only lives as long as its
    connection, so it gets a single shared connection that
    may be used from any thread.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


class Store:

    def __init__(self, database_url: str = "sqlite://", echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        # expire_on_commit=False keeps returned objects readable
        # after their unit of work has been committed and closed.
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        self._lock = threading.RLock()
        self._closed = False

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run one unit of work.

        Commits when the block exits normally and rolls back on
        any exception, which is then re-raised. The lock is held
        for the whole block, so check-then-write sequences inside
        it cannot interleave with another caller.
        """
        if self._closed:
            raise RuntimeError("Store is closed")

        with self._lock:
            session = self.session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.engine.dispose()
        logger.info("Store closed")

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
