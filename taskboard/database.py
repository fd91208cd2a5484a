import logging
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

# Local SQLite database used when no DATABASE_URL is configured
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "kanban.db")


def _sqlite_engine(url: str, echo: bool) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection, otherwise every session sees an empty database
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


def build_engine(database_url: Optional[str] = None, *, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for DATABASE_URL, or the local SQLite file when unset.

    A configured database is never swapped for another one: a missing driver
    raises ``StorageUnavailableError`` here, an unreachable server surfaces on
    first use and in ``check_health``.
    """
    if not database_url:
        return _sqlite_engine(f"sqlite:///{DEFAULT_DB_PATH}", echo)
    if database_url.startswith("sqlite"):
        return _sqlite_engine(database_url, echo)
    try:
        return create_engine(database_url, echo=echo, pool_pre_ping=True)
    except (ModuleNotFoundError, SQLAlchemyError) as exc:
        # The SQL driver (e.g. psycopg2) is missing in the execution environment.
        logger.error("Cannot create engine for the configured database: %s", exc)
        raise StorageUnavailableError("Database driver unavailable") from exc


def build_session_factory(engine: Engine) -> sessionmaker:
    """Return the session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


# Base class for the relational models
Base = declarative_base()
