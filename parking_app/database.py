# parking_app/database.py
"""
Database handle, session management, and table creation.
Uses SQLAlchemy (PostgreSQL in production, SQLite for tests).

There is no module-level engine: the API layer constructs a Database
with explicit pool settings and hands sessions out per request.
"""

from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from parking_app.config import settings

Base = declarative_base()


class Database:
    """Owns one engine (and its connection pool) plus a session factory."""

    def __init__(
        self,
        url: Optional[str] = None,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        idle_timeout: int = 1800,
        engine: Optional[Engine] = None,
    ):
        if engine is None:
            url = url or settings.DATABASE_URL
            kwargs = {"pool_pre_ping": True, "echo": False}
            if url.startswith("sqlite"):
                kwargs["connect_args"] = {"check_same_thread": False}
            else:
                kwargs.update(
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_timeout=pool_timeout,
                    pool_recycle=idle_timeout,
                )
            engine = create_engine(url, **kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, cfg=settings) -> "Database":
        return cls(
            url=cfg.DATABASE_URL,
            pool_size=cfg.DB_POOL_SIZE,
            max_overflow=cfg.DB_MAX_OVERFLOW,
            pool_timeout=cfg.DB_POOL_TIMEOUT_SECONDS,
            idle_timeout=cfg.DB_IDLE_TIMEOUT_SECONDS,
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_tables(self):
        """
        Creates all tables. Safe to call multiple times.
        Models are imported here so SQLAlchemy knows about them.
        """
        from parking_app.models.lot import Lot             # noqa
        from parking_app.models.scan import Scan           # noqa
        from parking_app.models.vehicle import Vehicle     # noqa

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency — yields a session from the app's Database and closes it after request."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
