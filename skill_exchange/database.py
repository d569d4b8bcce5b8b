from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from skill_exchange.config import mask_db_url


logger = logging.getLogger(__name__)

Base = declarative_base()


def _build_connect_args(db_url: str) -> dict:
    if db_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # sqlite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine (connection pool) and the session factory.

    Created once on application startup and disposed on shutdown.
    """

    def __init__(self, db_url: str, *, echo: bool = False) -> None:
        self.db_url = db_url
        self.engine: Engine = create_engine(
            db_url,
            pool_pre_ping=True,
            future=True,
            echo=echo,
            connect_args=_build_connect_args(db_url),
        )
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )
        logger.info("SQLAlchemy ORM db_url=%s", mask_db_url(db_url))

    def create_all(self) -> None:
        import skill_exchange.models  # noqa: F401  # ensure all models are registered

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        import skill_exchange.models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Disposed connection pool for %s", mask_db_url(self.db_url))


def get_database(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized. Is the application lifespan running?")
    return db


def get_db(request: Request) -> Generator[Session, None, None]:
    session = get_database(request).session()
    try:
        yield session
    finally:
        session.close()
