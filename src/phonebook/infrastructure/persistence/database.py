"""Engine, session factory and schema bootstrap for the relational store."""

import logging
import time

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker

from phonebook.infrastructure.persistence.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./phonebook.db"


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # SQLite's built-in UPPER() only folds ASCII; match Python's str.upper().
    dbapi_connection.create_function("upper", 1, str.upper, deterministic=True)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str = DEFAULT_DATABASE_URL) -> Engine:
    """Create an engine for database_url. SQLite connections get foreign keys switched on
    so ON DELETE CASCADE is enforced, and a Unicode-aware upper().
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url, connect_args={"check_same_thread": False}
        )
        event.listen(engine, "connect", _configure_sqlite_connection)
        return engine
    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(
    engine: Engine,
    *,
    max_retries: int = 10,
    retry_delay: float = 5.0,
) -> None:
    """Create the schema, retrying while the store is not reachable yet.

    Raises RuntimeError after max_retries failed attempts.
    """
    for attempt in range(1, max_retries + 1):
        try:
            Base.metadata.create_all(engine)
            logger.info("Database initialized successfully")
            return
        except Exception as e:
            if attempt == max_retries:
                raise RuntimeError(
                    "Failed to initialize database after maximum retries"
                ) from e
            logger.warning(
                "Database not ready (attempt %s/%s): %s", attempt, max_retries, e
            )
            time.sleep(retry_delay)


def is_database_ready(engine: Engine) -> bool:
    """Return True if a connection can be opened and used."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database readiness check failed", exc_info=True)
        return False
