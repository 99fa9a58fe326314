"""Database manager and session utilities for Taskboard."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.c1_database_session.base import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine and session factory for one database.

    Constructed explicitly at process start and handed to the stores;
    ``close()`` disposes the engine at shutdown.
    """

    def __init__(self, database_url: str = "sqlite:///data/taskboard.db", echo: bool = False):
        """Initialize database connection."""
        self.database_url = database_url
        url = make_url(database_url)
        engine_kwargs = {"echo": echo}

        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise each session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(database_url, **engine_kwargs)

        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        self._closed = False

    def create_tables(self):
        """Create all database tables."""
        # Models register themselves on Base.metadata when imported
        import taskboard.c1_user_models  # noqa: F401
        import taskboard.c1_task_models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database tables ready at {self.engine.url.render_as_string(hide_password=True)}")

    def drop_tables(self):
        """Drop all database tables (for testing)."""
        Base.metadata.drop_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get a database session."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        if self._closed:
            raise RuntimeError("DatabaseManager is closed")
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self):
        """Release all pooled connections."""
        if not self._closed:
            self.engine.dispose()
            self._closed = True
            logger.info("Database connections closed")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
