# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL (SQLite for tests).

The engine and session factory live on a Database object built once by
create_app() and stored on app.state.db; get_db() hands each request a
session from it. All models are imported by create_tables() so every
table is created in one call.
"""

import uuid
from datetime import datetime

from fastapi import Request
from sqlalchemy import Column, DateTime, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def new_uuid() -> str:
    return str(uuid.uuid4())


class EntityMixin:
    """UUID primary key + created/updated timestamps shared by every table."""
    id = Column(String(36), primary_key=True, default=new_uuid)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Database:
    """Engine + session factory for one DATABASE_URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                engine_kwargs["poolclass"] = StaticPool   # One shared in-memory DB
        else:
            engine_kwargs = {
                "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
                "pool_size": 10,
                "max_overflow": 20,
            }
        self.engine = create_engine(url, echo=echo, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """
        Creates all DB tables. Safe to call multiple times.
        Import all models here so SQLAlchemy knows about them.
        """
        import app.models  # noqa

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"[DB] {len(Base.metadata.tables)} tables ready")

    def drop_tables(self):
        import app.models  # noqa

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
