import logging
import threading
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from config.settings import settings
from utils.errors import StoreConnectionError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Process-wide handle on the store. Nothing connects until the first
    ensure_connection() call; afterwards the engine and session factory
    are reused for the lifetime of the process.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine_options = engine_options
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def ensure_connection(self) -> Engine:
        if self._engine is not None:
            return self._engine

        with self._lock:
            if self._engine is not None:
                return self._engine

            # models must be registered on Base before create_all
            import models.index  # noqa: F401

            try:
                engine = create_engine(self.url, **self.engine_options)
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                Base.metadata.create_all(bind=engine)
            except SQLAlchemyError as exc:
                logger.error("Could not connect to database: %s", exc)
                raise StoreConnectionError() from exc

            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            self._engine = engine
            logger.info("Database connection established")
            return engine

    def session(self) -> Session:
        self.ensure_connection()
        return self._session_factory()

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._session_factory = None


def engine_options_for(url: str) -> Dict[str, Any]:
    """Pool settings for server databases; SQLite gets driver defaults."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "echo": settings.DEBUG}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "echo": settings.DEBUG,
    }


def database_from_settings() -> Database:
    return Database(settings.DATABASE_URL, **engine_options_for(settings.DATABASE_URL))


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
