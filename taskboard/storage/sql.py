"""Relational backend built on SQLAlchemy sessions."""
from __future__ import annotations

import contextlib
import enum
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from taskboard.database import Base, build_engine, build_session_factory
from taskboard.errors import ConflictError, StorageUnavailableError
from taskboard.models import Board, BoardColumn, Project, ProjectMember, Task, User
from taskboard.schemas import HealthStatus
from taskboard.storage.base import (
    BOARDS,
    COLUMNS,
    PROJECT_MEMBERS,
    PROJECTS,
    TASKS,
    USERS,
    Collection,
    Storage,
)

logger = logging.getLogger(__name__)

MODELS: Dict[str, Type[Any]] = {
    USERS: User,
    PROJECTS: Project,
    PROJECT_MEMBERS: ProjectMember,
    BOARDS: Board,
    COLUMNS: BoardColumn,
    TASKS: Task,
}


def _row_values(record: BaseModel) -> Dict[str, Any]:
    return {
        key: value.value if isinstance(value, enum.Enum) else value
        for key, value in record.model_dump().items()
    }


class SqlCollection(Collection):
    """One table, accessed through the storage's thread-local session."""

    def __init__(self, storage: "SqlStorage", name: str) -> None:
        self.name = name
        self._storage = storage
        self._model = MODELS[name]

    def all(self) -> List[Any]:
        with self._storage.unit() as session:
            return list(session.query(self._model).all())

    def get(self, item_id: str) -> Optional[Any]:
        with self._storage.unit() as session:
            return session.get(self._model, item_id)

    def where(self, **criteria: Any) -> List[Any]:
        with self._storage.unit() as session:
            return list(session.query(self._model).filter_by(**criteria).all())

    def insert(self, record: BaseModel) -> None:
        with self._storage.unit(write=True) as session:
            session.add(self._model(**_row_values(record)))

    def replace(self, record: BaseModel) -> bool:
        with self._storage.unit(write=True) as session:
            row = session.get(self._model, record.id)
            if row is None:
                return False
            for key, value in _row_values(record).items():
                setattr(row, key, value)
            return True

    def remove(self, item_id: str) -> bool:
        with self._storage.unit(write=True) as session:
            row = session.get(self._model, item_id)
            if row is None:
                return False
            session.delete(row)
            return True


class SqlStorage(Storage):
    """Storage on a relational database.

    Each thread works on its own session. Outside :meth:`transaction` every
    write commits immediately; inside it, writes are flushed and committed (or
    rolled back) together when the outermost block exits.
    """

    backend_name = "sql"

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._sessions = scoped_session(build_session_factory(engine))
        self._local = threading.local()
        super().__init__()

    @classmethod
    def from_url(cls, database_url: Optional[str], *, echo: bool = False) -> "SqlStorage":
        return cls(build_engine(database_url, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def _depth(self) -> int:
        return getattr(self._local, "depth", 0)

    def collection(self, name: str) -> Collection:
        return SqlCollection(self, name)

    @contextlib.contextmanager
    def unit(self, *, write: bool = False) -> Iterator[Session]:
        """Run one collection operation, translating database errors."""
        session = self._sessions()
        in_transaction = self._depth > 0
        try:
            yield session
            if in_transaction:
                if write:
                    session.flush()
            else:
                session.commit()
        except IntegrityError as exc:
            if not in_transaction:
                session.rollback()
            raise ConflictError(f"Constraint violated: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            if not in_transaction:
                session.rollback()
            logger.error("Database operation failed: %s", exc)
            raise StorageUnavailableError("Database is unavailable") from exc
        finally:
            if not in_transaction:
                # Detach the rows so the next operation reads fresh state
                session.close()

    @contextlib.contextmanager
    def transaction(self) -> Iterator[None]:
        self._local.depth = self._depth + 1
        outermost = self._local.depth == 1
        session = self._sessions()
        try:
            yield
        except BaseException:
            if outermost:
                session.rollback()
            raise
        else:
            if outermost:
                try:
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    raise ConflictError(f"Constraint violated: {exc.orig}") from exc
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.error("Database commit failed: %s", exc)
                    raise StorageUnavailableError("Database is unavailable") from exc
        finally:
            self._local.depth -= 1
            if outermost:
                session.close()

    def initialize(self) -> None:
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as exc:
            logger.error("Could not create tables: %s", exc)
            raise StorageUnavailableError("Database is unavailable") from exc

    def check_health(self) -> HealthStatus:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            return HealthStatus(status="error", message=str(exc), backend=self.backend_name)
        return HealthStatus(
            status="connected",
            message=f"Database {self._engine.url.get_backend_name()} is accessible",
            backend=self.backend_name,
        )

    def close(self) -> None:
        self._sessions.remove()
        self._engine.dispose()
