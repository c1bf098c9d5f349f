"""Storage manager: the single commit path for every store."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from woosync.domain.errors import StorageError

from .mappings import create_all_tables, drop_all_tables, start_mappers
from .storage import SqlAlchemyStorage

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    from woosync.domain.ports.storage import Storage

log = getLogger(__name__)

IN_MEMORY_URI = "sqlite+pysqlite:///:memory:"


class StartupError(RuntimeError):
    """Raised when a storage manager is used after it has been shut down."""


class SqlAlchemyStorageManager:
    """Serializes writes and reads over one engine.

    ``perform_write`` runs a callback against a fresh session while holding a
    re-entrant lock, commits exactly once and rolls back on any error. Readers
    take the same lock, so they observe either the state before a commit or the
    state after it.
    """

    def __init__(self, engine: Engine) -> None:
        start_mappers()
        create_all_tables(engine)
        self._engine: Engine | None = engine
        self._session_factory: sessionmaker[Session] = sessionmaker(
            bind=engine, expire_on_commit=False, autoflush=False
        )
        self._lock = threading.RLock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StartupError("Storage manager has been shut down")
        return self._engine

    def perform_write[T](self, operation: Callable[[Storage], T]) -> T:
        with self._lock:
            _ = self.engine
            session = self._session_factory()
            storage = SqlAlchemyStorage(session)
            try:
                result = operation(storage)
                storage.save()
            except SQLAlchemyError as exc:
                session.rollback()
                log.warning("Rolled back local write: %s", exc)
                raise StorageError(str(exc)) from exc
            except BaseException:
                session.rollback()
                raise
            finally:
                session.close()
            return result

    @contextmanager
    def reading(self) -> Iterator[Storage]:
        with self._lock:
            _ = self.engine
            session = self._session_factory()
            try:
                yield SqlAlchemyStorage(session)
            finally:
                session.rollback()
                session.close()

    def reset(self) -> None:
        """Drop and recreate every table."""

        with self._lock:
            drop_all_tables(self.engine)
            create_all_tables(self.engine)

    def shutdown(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None


def create_storage_manager(
    database_uri: str | None = None, *, engine: Engine | None = None
) -> SqlAlchemyStorageManager:
    """Build a manager for ``database_uri`` (in-memory SQLite when omitted)."""

    return SqlAlchemyStorageManager(engine or create_storage_engine(database_uri or IN_MEMORY_URI))


def create_storage_engine(database_uri: str) -> Engine:
    if database_uri.startswith("sqlite") and ":memory:" in database_uri:
        # an in-memory database exists once per connection
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri)


if TYPE_CHECKING:
    from woosync.domain.ports.storage import StorageManager

    _manager_check: StorageManager = create_storage_manager()
